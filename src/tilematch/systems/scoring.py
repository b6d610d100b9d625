"""Score and level-progress mapping for resolved matches."""
from __future__ import annotations

from typing import Iterable

from tilematch.components.match import Match
from tilematch.constants import MATCH_POINTS, MATCH_PROGRESS_NUMERATORS, MIN_MATCH_LENGTH

_TOP_LENGTH = max(MATCH_POINTS)


def score_match(length: int) -> int:
    if length < MIN_MATCH_LENGTH:
        return 0
    return MATCH_POINTS[min(length, _TOP_LENGTH)]


def score_matches(matches: Iterable[Match]) -> int:
    return sum(score_match(match.length) for match in matches)


def progress_for_match(length: int, denominator: int) -> float:
    """Fraction of the level bar filled by one match of ``length``."""
    if length < MIN_MATCH_LENGTH:
        return 0.0
    numerator = MATCH_PROGRESS_NUMERATORS[min(length, max(MATCH_PROGRESS_NUMERATORS))]
    return numerator / denominator


def progress_for_matches(matches: Iterable[Match], denominator: int) -> float:
    return sum(progress_for_match(match.length, denominator) for match in matches)

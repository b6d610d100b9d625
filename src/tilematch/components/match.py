from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from tilematch.components.symbol import Symbol

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Match:
    """One maximal same-symbol run along a single axis."""

    positions: Tuple[Position, ...]
    symbol: Symbol
    length: int
    horizontal: bool = True


@dataclass(frozen=True, slots=True)
class MatchBatch:
    """All matches removed in one detection pass of a resolution.

    ``depth`` 0 is the direct batch caused by the mutation itself; every later
    pass is a cascade.
    """

    matches: Tuple[Match, ...]
    depth: int
    score: int

    @property
    def cascade(self) -> bool:
        return self.depth > 0

    def positions(self) -> List[Position]:
        return sorted({pos for match in self.matches for pos in match.positions})

    def symbols(self) -> set[Symbol]:
        return {match.symbol for match in self.matches}

import itertools

import pytest

from tilematch.components.match import Match, MatchBatch
from tilematch.components.symbol import Symbol
from tilematch.systems.match_resolution import ResolutionOutcome
from tilematch.systems.scoring import progress_for_match, progress_for_matches, score_match, score_matches


def _run(length, symbol=Symbol.LEAF, y=0):
    return Match(positions=tuple((x, y) for x in range(length)), symbol=symbol, length=length)


def test_score_table():
    assert score_match(2) == 0
    assert score_match(3) == 10
    assert score_match(4) == 20
    assert score_match(5) == 30
    assert score_match(7) == 30


def test_batch_score_independent_of_order():
    matches = [_run(3, y=0), _run(4, y=2), _run(5, y=4)]
    for ordering in itertools.permutations(matches):
        assert score_matches(ordering) == 60


def test_progress_fraction_per_length():
    assert progress_for_match(3, 5) == pytest.approx(0.2)
    assert progress_for_match(4, 8) == pytest.approx(0.25)
    assert progress_for_match(6, 30) == pytest.approx(0.1)
    assert progress_for_matches([_run(3), _run(5, y=1)], 10) == pytest.approx(0.4)


def test_outcome_sums_batches():
    direct = MatchBatch(matches=(_run(4),), depth=0, score=20)
    cascade = MatchBatch(matches=(_run(3, Symbol.FIRE, 1), _run(3, Symbol.FIRE, 2)), depth=1, score=20)
    outcome = ResolutionOutcome(operation="swap", accepted=True, batches=[direct, cascade])
    assert outcome.score == 40
    assert outcome.cascade_count == 1
    assert outcome.direct_batch is direct
    assert outcome.progress(8) == pytest.approx(0.5)
    assert cascade.symbols() == {Symbol.FIRE}


def test_outcome_without_direct_batch():
    cascade = MatchBatch(matches=(_run(3),), depth=1, score=10)
    outcome = ResolutionOutcome(operation="settle", accepted=True, batches=[cascade])
    assert outcome.direct_batch is None
    assert ResolutionOutcome(operation="swap", accepted=False).score == 0

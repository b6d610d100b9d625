import random
from collections import Counter

import pytest

from tilematch.components.level_context import LevelContext
from tilematch.components.symbol import Symbol
from tilematch.systems.symbol_sampler import SymbolSampler

ALPHABET = list(Symbol)
DRAWS = 100_000


def _frequencies(draw, count=DRAWS):
    counts = Counter(draw() for _ in range(count))
    return {symbol: counts[symbol] / count for symbol in ALPHABET}


def test_uniform_draws_cover_alphabet_evenly():
    sampler = SymbolSampler(ALPHABET, random.Random(1))
    freqs = _frequencies(sampler.draw)
    for symbol in ALPHABET:
        assert freqs[symbol] == pytest.approx(0.2, abs=0.01)


def test_privileged_symbol_drawn_at_level_probability():
    sampler = SymbolSampler(ALPHABET, random.Random(2))
    context = LevelContext(level=3, privileged_symbol=Symbol.FIRE)
    freqs = _frequencies(lambda: sampler.draw(context))
    assert freqs[Symbol.FIRE] == pytest.approx(0.4, abs=0.01)
    for symbol in ALPHABET:
        if symbol is not Symbol.FIRE:
            assert freqs[symbol] == pytest.approx(0.15, abs=0.01)


def test_cleared_privileged_symbol_falls_back_to_uniform():
    sampler = SymbolSampler(ALPHABET, random.Random(3))
    context = LevelContext(level=3, privileged_symbol=Symbol.FIRE)
    assert not sampler.is_weighted(context, cleared=[Symbol.FIRE])
    freqs = _frequencies(lambda: sampler.draw(context, cleared=[Symbol.FIRE]))
    for symbol in ALPHABET:
        assert freqs[symbol] == pytest.approx(0.2, abs=0.01)


def test_other_cleared_symbols_keep_weighting():
    sampler = SymbolSampler(ALPHABET)
    context = LevelContext(level=3, privileged_symbol=Symbol.FIRE)
    assert sampler.is_weighted(context, cleared=[Symbol.LEAF, Symbol.RAINDROP])
    assert not sampler.is_weighted(None)
    assert not sampler.is_weighted(LevelContext(level=7))


def test_draw_excluding_never_returns_excluded():
    sampler = SymbolSampler(ALPHABET, random.Random(4))
    excluded = {Symbol.LEAF, Symbol.SNOWFLAKE}
    for _ in range(2000):
        assert sampler.draw_excluding(excluded) not in excluded


def test_draw_excluding_keeps_privileged_share():
    sampler = SymbolSampler(ALPHABET, random.Random(5))
    context = LevelContext(level=1, privileged_symbol=Symbol.LEAF)
    freqs = _frequencies(lambda: sampler.draw_excluding({Symbol.FIRE}, context), 50_000)
    assert freqs[Symbol.FIRE] == 0
    assert freqs[Symbol.LEAF] == pytest.approx(0.4, abs=0.015)


def test_excluding_everything_is_an_error():
    sampler = SymbolSampler(ALPHABET)
    with pytest.raises(ValueError):
        sampler.draw_excluding(ALPHABET)


def test_small_alphabet_rejected():
    with pytest.raises(ValueError):
        SymbolSampler([Symbol.LEAF, Symbol.FIRE])


def test_level_context_validates_probability():
    with pytest.raises(ValueError):
        LevelContext(privileged_probability=1.5)
    with pytest.raises(ValueError):
        LevelContext(progress_denominator=0)

import pytest

from tilematch.components.symbol import Symbol
from tilematch.components.symbol_palette import DEFAULT_SYMBOL_COLORS, SymbolPalette
from tilematch.events.bus import EventBus
from tilematch.systems.board_ops import get_palette, get_sampler, set_alphabet
from tilematch.world import create_world


def test_default_palette_covers_every_symbol():
    world = create_world(EventBus())
    palette = get_palette(world)
    assert palette.symbols() == list(Symbol)
    assert palette.color_for(Symbol.FIRE) == (239, 68, 68)


def test_alphabet_filters_duplicates_and_keeps_order():
    palette = SymbolPalette(
        colors=dict(DEFAULT_SYMBOL_COLORS),
        alphabet=[Symbol.FIRE, Symbol.LEAF, Symbol.FIRE, Symbol.RAINDROP],
    )
    assert palette.symbols() == [Symbol.FIRE, Symbol.LEAF, Symbol.RAINDROP]


def test_alphabet_needs_three_symbols():
    with pytest.raises(ValueError):
        SymbolPalette(colors=dict(DEFAULT_SYMBOL_COLORS), alphabet=[Symbol.LEAF, Symbol.FIRE])
    world = create_world(EventBus())
    with pytest.raises(ValueError):
        set_alphabet(world, [Symbol.LEAF, Symbol.LEAF, Symbol.FIRE])


def test_sampler_follows_alphabet():
    world = create_world(EventBus(), alphabet=[Symbol.LEAF, Symbol.FIRE, Symbol.RAINDROP, Symbol.LIGHTNING])
    assert get_sampler(world).alphabet == [Symbol.LEAF, Symbol.FIRE, Symbol.RAINDROP, Symbol.LIGHTNING]
    set_alphabet(world, [Symbol.SNOWFLAKE, Symbol.FIRE, Symbol.LEAF])
    sampler = get_sampler(world)
    assert sampler.alphabet == [Symbol.SNOWFLAKE, Symbol.FIRE, Symbol.LEAF]
    assert {sampler.draw() for _ in range(200)} <= {Symbol.SNOWFLAKE, Symbol.FIRE, Symbol.LEAF}

from __future__ import annotations

import random
from typing import Dict, Iterable, List, Sequence

from esper import World

from tilematch.components.symbol import Symbol
from tilematch.events.bus import EventBus
from tilematch.session import GameSession
from tilematch.systems.board_ops import board_dimensions, get_sampler, set_cell

# Background symbols for striped boards; runs in tests use LEAF/SNOWFLAKE.
STRIPE_SYMBOLS = (Symbol.FIRE, Symbol.RAINDROP, Symbol.LIGHTNING)


def build_session(width: int = 9, height: int = 7, seed: int = 0, **kwargs) -> GameSession:
    """Create a session with a seeded rng so generated layouts are reproducible."""

    return GameSession(width, height, rng=random.Random(seed), **kwargs)


def paint(world: World, cells: Dict[tuple[int, int], Symbol]) -> None:
    for pos, symbol in cells.items():
        assert set_cell(world, pos, symbol), f"Cell {pos} is off the board"


def paint_stripes(world: World, symbols: Sequence[Symbol] = STRIPE_SYMBOLS) -> None:
    """Diagonal stripes: no matches and no single swap creates one."""

    dims = board_dimensions(world)
    assert dims is not None
    width, height = dims
    for x in range(width):
        for y in range(height):
            set_cell(world, (x, y), symbols[(x + y) % 3])


def capture(bus: EventBus, *names: str) -> Dict[str, List[dict]]:
    received: Dict[str, List[dict]] = {name: [] for name in names}
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: received[_name].append(payload))
    return received


def script_refills(monkeypatch, world: World, symbols: Iterable[Symbol]) -> List[Symbol]:
    """Make refill draws return ``symbols`` in order; returns the remaining script."""

    remaining = list(symbols)
    sampler = get_sampler(world)

    def scripted_draw(context=None, *, cleared=()):
        assert remaining, "Refill requested more symbols than scripted"
        return remaining.pop(0)

    monkeypatch.setattr(sampler, "draw", scripted_draw)
    return remaining

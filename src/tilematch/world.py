import random

from esper import World
from tilematch.events.bus import EventBus
from tilematch.components.power_up import PowerUpInventory
from tilematch.components.symbol import Symbol
from tilematch.components.symbol_palette import DEFAULT_SYMBOL_COLORS, SymbolPalette
from tilematch.components.turn_state import TurnState
from tilematch.systems.symbol_sampler import SymbolSampler


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    alphabet: list[Symbol] | None = None,
) -> World:
    """Create the world resources shared by every board system.

    The board itself is added by ``BoardSystem``; this only registers the
    symbol palette, the resolver turn state and the power-up inventory.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "event_bus", event_bus)

    # Single palette entity with the canonical symbols.
    palette = SymbolPalette(colors=dict(DEFAULT_SYMBOL_COLORS), alphabet=list(alphabet or []))
    world.create_entity(palette)
    setattr(world, "sampler", SymbolSampler(palette.symbols(), world.random))

    world.create_entity(TurnState())
    world.create_entity(PowerUpInventory())
    return world

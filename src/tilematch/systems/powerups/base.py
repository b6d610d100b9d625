from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from esper import World

from tilematch.components.power_up import PowerUpType
from tilematch.events.bus import EventBus
from tilematch.systems.match_resolution import MatchResolutionSystem, ResolutionOutcome

Position = Tuple[int, int]


@dataclass(slots=True)
class PowerUpContext:
    """Execution context shared by power-up resolvers."""

    world: World
    event_bus: EventBus
    resolution: MatchResolutionSystem
    power_up: PowerUpType
    target: Position
    second_target: Optional[Position] = None


class PowerUpResolver(Protocol):
    """Interface implemented by concrete power-up resolvers."""

    power_up: PowerUpType

    def resolve(self, ctx: PowerUpContext) -> ResolutionOutcome:
        ...

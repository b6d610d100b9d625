from __future__ import annotations

from tilematch.components.power_up import PowerUpType
from tilematch.constants import CLEAR_RADIUS
from tilematch.systems.match_resolution import ResolutionOutcome
from tilematch.systems.powerups.base import PowerUpContext


class ClearCellsResolver:
    """Re-rolls the square neighbourhood around the target cell."""

    power_up = PowerUpType.CLEAR_CELLS

    def __init__(self, radius: int = CLEAR_RADIUS) -> None:
        self.radius = radius

    def resolve(self, ctx: PowerUpContext) -> ResolutionOutcome:
        return ctx.resolution.request_clear_region(ctx.target, self.radius)

from __future__ import annotations

from tilematch.components.power_up import PowerUpType
from tilematch.systems.match_resolution import ResolutionOutcome
from tilematch.systems.powerups.base import PowerUpContext


class FreeSwapResolver:
    """Swaps any two cells on the board regardless of distance."""

    power_up = PowerUpType.FREE_SWAP

    def resolve(self, ctx: PowerUpContext) -> ResolutionOutcome:
        if ctx.second_target is None:
            return ResolutionOutcome(operation="force_swap", accepted=False)
        return ctx.resolution.request_force_swap(ctx.target, ctx.second_target)

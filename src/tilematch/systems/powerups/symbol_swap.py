from __future__ import annotations

from tilematch.components.power_up import PowerUpType
from tilematch.systems.board_ops import get_symbol
from tilematch.systems.match_resolution import ResolutionOutcome
from tilematch.systems.powerups.base import PowerUpContext


class SymbolSwapResolver:
    """Redraws every cell sharing the target cell's symbol."""

    power_up = PowerUpType.SYMBOL_SWAP

    def __init__(self, guarantee_change: bool = False) -> None:
        self.guarantee_change = guarantee_change

    def resolve(self, ctx: PowerUpContext) -> ResolutionOutcome:
        target_symbol = get_symbol(ctx.world, ctx.target)
        if target_symbol is None:
            return ResolutionOutcome(operation="replace_all", accepted=False)
        return ctx.resolution.request_replace_all(target_symbol, guarantee_change=self.guarantee_change)

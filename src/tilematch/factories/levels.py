from __future__ import annotations

from typing import Dict

from tilematch.components.level_context import LevelContext
from tilematch.components.power_up import PowerUpType
from tilematch.components.symbol import Symbol
from tilematch.constants import LEVEL_DENOMINATORS, PRIVILEGED_SYMBOL_PROBABILITY

LEVEL_PRIVILEGED_SYMBOLS: Dict[int, Symbol] = {
    1: Symbol.LEAF,
    2: Symbol.SNOWFLAKE,
    3: Symbol.FIRE,
    4: Symbol.RAINDROP,
    5: Symbol.LIGHTNING,
}

LEVEL_PROMOTED_POWERUPS: Dict[int, PowerUpType] = {
    6: PowerUpType.FREE_SWAP,
    7: PowerUpType.CLEAR_CELLS,
    8: PowerUpType.SYMBOL_SWAP,
}


def progress_denominator_for(level: int) -> int:
    """Levels past the table reuse the last configured denominator."""
    if level in LEVEL_DENOMINATORS:
        return LEVEL_DENOMINATORS[level]
    return LEVEL_DENOMINATORS[max(LEVEL_DENOMINATORS)]


def level_context_for(level: int, *, strict: bool = False) -> LevelContext:
    """Build the LevelContext for ``level``.

    With ``strict`` only levels present in the denominator table are accepted.
    """
    if level < 1:
        raise ValueError(f"Levels start at 1, got {level}")
    if strict and level not in LEVEL_DENOMINATORS:
        raise KeyError(f"Level {level} is not configured")
    return LevelContext(
        level=level,
        privileged_symbol=LEVEL_PRIVILEGED_SYMBOLS.get(level),
        promoted_power_up=LEVEL_PROMOTED_POWERUPS.get(level),
        privileged_probability=PRIVILEGED_SYMBOL_PROBABILITY,
        progress_denominator=progress_denominator_for(level),
    )

from dataclasses import dataclass
from typing import Optional

from tilematch.components.power_up import PowerUpType
from tilematch.components.symbol import Symbol
from tilematch.constants import LEVEL_DENOMINATORS, PRIVILEGED_SYMBOL_PROBABILITY


@dataclass(frozen=True, slots=True)
class LevelContext:
    """Per-level tuning passed explicitly into generation and refill calls."""

    level: int = 1
    privileged_symbol: Optional[Symbol] = None
    promoted_power_up: Optional[PowerUpType] = None
    privileged_probability: float = PRIVILEGED_SYMBOL_PROBABILITY
    progress_denominator: int = LEVEL_DENOMINATORS[1]

    def __post_init__(self) -> None:
        if not 0.0 <= self.privileged_probability <= 1.0:
            raise ValueError(
                f"privileged_probability must be within [0, 1], got {self.privileged_probability}"
            )
        if self.progress_denominator <= 0:
            raise ValueError("progress_denominator must be positive")

    @property
    def weighted(self) -> bool:
        return self.privileged_symbol is not None

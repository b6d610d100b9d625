from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class PowerUpType(Enum):
    """Named special board mutations."""
    FREE_SWAP = "free_swap"
    CLEAR_CELLS = "clear_cells"
    SYMBOL_SWAP = "symbol_swap"


@dataclass(slots=True)
class PowerUpInventory:
    """Remaining charges per power-up for the active session."""
    counts: Dict[PowerUpType, int] = field(
        default_factory=lambda: {power_up: 0 for power_up in PowerUpType}
    )

    def count(self, power_up: PowerUpType) -> int:
        return self.counts.get(power_up, 0)

    def grant(self, power_up: PowerUpType, amount: int = 1) -> int:
        if amount < 0:
            raise ValueError("Cannot grant a negative amount of power-ups")
        self.counts[power_up] = self.count(power_up) + amount
        return self.counts[power_up]

    def consume(self, power_up: PowerUpType) -> bool:
        current = self.count(power_up)
        if current <= 0:
            return False
        self.counts[power_up] = current - 1
        return True

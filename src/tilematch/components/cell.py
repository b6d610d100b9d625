from dataclasses import dataclass
from typing import Tuple

from tilematch.components.symbol import Symbol

@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one board cell returned by lookups."""
    position: Tuple[int, int]
    symbol: Symbol

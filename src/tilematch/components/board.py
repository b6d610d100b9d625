from dataclasses import dataclass, field
from typing import Dict, Tuple

@dataclass(slots=True)
class Board:
    width: int
    height: int
    # (x, y) -> cell entity; filled once when the board entities are created.
    cell_entities: Dict[Tuple[int, int], int] = field(default_factory=dict)

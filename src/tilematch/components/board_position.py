from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Fixed grid coordinate of a cell entity (x grows right, y grows down)."""
    x: int
    y: int

from dataclasses import dataclass

from tilematch.components.symbol import Symbol

@dataclass(slots=True)
class TileType:
    """Per-cell symbol assignment.

    Colour lookup resides in the singleton SymbolPalette component.
    """
    symbol: Symbol

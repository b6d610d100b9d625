from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from tilematch.components.symbol import Symbol
from tilematch.constants import MIN_ALPHABET_SIZE

@dataclass(slots=True)
class SymbolPalette:
    """Canonical symbol definitions stored on a single entity.

    ``colors`` maps every known symbol to its display colour; ``alphabet`` is the
    ordered subset the sampler and generator are allowed to draw from.
    """
    colors: Dict[Symbol, Tuple[int, int, int]]
    alphabet: List[Symbol] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.alphabet:
            self.alphabet = self._filtered(self.alphabet)
        else:
            self.alphabet = list(self.colors.keys())
        if len(self.alphabet) < MIN_ALPHABET_SIZE:
            raise ValueError(
                f"Symbol alphabet needs at least {MIN_ALPHABET_SIZE} symbols, got {len(self.alphabet)}"
            )

    def color_for(self, symbol: Symbol) -> Tuple[int, int, int]:
        return self.colors[symbol]

    def symbols(self) -> List[Symbol]:
        return list(self.alphabet)

    def set_alphabet(self, symbols: Iterable[Symbol]) -> None:
        filtered = self._filtered(symbols)
        if len(filtered) < MIN_ALPHABET_SIZE:
            raise ValueError(
                f"Symbol alphabet needs at least {MIN_ALPHABET_SIZE} symbols, got {len(filtered)}"
            )
        self.alphabet = filtered

    def _filtered(self, symbols: Iterable[Symbol]) -> List[Symbol]:
        # Preserve order while dropping unknown and duplicate entries.
        seen: set[Symbol] = set()
        filtered: List[Symbol] = []
        for symbol in symbols:
            if symbol in self.colors and symbol not in seen:
                filtered.append(symbol)
                seen.add(symbol)
        return filtered


DEFAULT_SYMBOL_COLORS: Dict[Symbol, Tuple[int, int, int]] = {
    Symbol.LEAF:      (74, 222, 128),   # #4ADE80
    Symbol.SNOWFLAKE: (125, 211, 252),  # #7DD3FC
    Symbol.FIRE:      (239, 68, 68),    # #EF4444
    Symbol.RAINDROP:  (30, 64, 175),    # #1E40AF
    Symbol.LIGHTNING: (234, 179, 8),    # #EAB308
}

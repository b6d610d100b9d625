from __future__ import annotations

import random
from typing import Iterable, List, Sequence

from tilematch.components.level_context import LevelContext
from tilematch.components.symbol import Symbol
from tilematch.constants import MIN_ALPHABET_SIZE


class SymbolSampler:
    """Draws symbols for generation, refills and power-up effects.

    Uniform by default. When a ``LevelContext`` names a privileged symbol, that
    symbol is drawn with the context's probability and the remaining mass is
    split evenly across the other candidates, unless the privileged symbol is
    among the symbols the triggering operation just cleared, in which case the
    draw falls back to uniform for that batch.
    """

    def __init__(self, alphabet: Sequence[Symbol], rng: random.Random | None = None) -> None:
        if len(alphabet) < MIN_ALPHABET_SIZE:
            raise ValueError(
                f"Symbol alphabet needs at least {MIN_ALPHABET_SIZE} symbols, got {len(alphabet)}"
            )
        self.alphabet: List[Symbol] = list(alphabet)
        self.rng = rng or random.Random()

    def uniform(self) -> Symbol:
        return self.rng.choice(self.alphabet)

    def weighted(self, privileged: Symbol, probability: float) -> Symbol:
        return self._weighted_choice(self.alphabet, privileged, probability)

    def is_weighted(self, context: LevelContext | None, cleared: Iterable[Symbol] = ()) -> bool:
        return self._active_privileged(context, cleared) is not None

    def draw(self, context: LevelContext | None = None, *, cleared: Iterable[Symbol] = ()) -> Symbol:
        """Draw one symbol for a refill batch that removed ``cleared`` symbols."""
        privileged = self._active_privileged(context, cleared)
        if context is None or privileged is None:
            return self.uniform()
        return self.weighted(privileged, context.privileged_probability)

    def draw_excluding(
        self,
        excluded: Iterable[Symbol],
        context: LevelContext | None = None,
        *,
        cleared: Iterable[Symbol] = (),
    ) -> Symbol:
        """Draw from the alphabet minus ``excluded``, honouring the level weighting."""
        excluded_set = set(excluded)
        candidates = [symbol for symbol in self.alphabet if symbol not in excluded_set]
        if not candidates:
            raise ValueError("Exclusion set consumed the whole alphabet")
        privileged = self._active_privileged(context, cleared)
        if context is not None and privileged is not None and privileged in candidates:
            return self._weighted_choice(candidates, privileged, context.privileged_probability)
        return self.rng.choice(candidates)

    def _active_privileged(self, context: LevelContext | None, cleared: Iterable[Symbol]) -> Symbol | None:
        # None when the draw is uniform: no level bias, or the favoured symbol was just cleared.
        if context is None or context.privileged_symbol is None:
            return None
        privileged = context.privileged_symbol
        if privileged not in self.alphabet or privileged in set(cleared):
            return None
        return privileged

    def _weighted_choice(self, candidates: Sequence[Symbol], privileged: Symbol, probability: float) -> Symbol:
        others = [symbol for symbol in candidates if symbol != privileged]
        if not others:
            return privileged
        if self.rng.random() < probability:
            return privileged
        return self.rng.choice(others)

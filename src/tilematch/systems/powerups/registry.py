from __future__ import annotations

from typing import Dict, Iterable

from tilematch.components.power_up import PowerUpType
from tilematch.systems.powerups.base import PowerUpResolver
from tilematch.systems.powerups.clear_cells import ClearCellsResolver
from tilematch.systems.powerups.free_swap import FreeSwapResolver
from tilematch.systems.powerups.symbol_swap import SymbolSwapResolver

_registry: Dict[PowerUpType, PowerUpResolver] = {}


def register_resolver(resolver: PowerUpResolver) -> None:
    """Register a resolver that replaces the built-in one for its power-up."""

    _registry[resolver.power_up] = resolver


def register_resolvers(resolvers: Iterable[PowerUpResolver]) -> None:
    for resolver in resolvers:
        register_resolver(resolver)


def _builtin_resolvers() -> Dict[PowerUpType, PowerUpResolver]:
    return {
        FreeSwapResolver.power_up: FreeSwapResolver(),
        ClearCellsResolver.power_up: ClearCellsResolver(),
        SymbolSwapResolver.power_up: SymbolSwapResolver(),
    }


def create_resolver_registry(
    overrides: Dict[PowerUpType, PowerUpResolver] | None = None,
) -> Dict[PowerUpType, PowerUpResolver]:
    """Combine built-in, registered, and override resolvers into a single map."""

    combined: Dict[PowerUpType, PowerUpResolver] = _builtin_resolvers()
    combined.update(_registry)
    if overrides:
        combined.update(overrides)
    return combined

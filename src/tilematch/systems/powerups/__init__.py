from tilematch.systems.powerups.base import PowerUpContext, PowerUpResolver
from tilematch.systems.powerups.registry import (
    create_resolver_registry,
    register_resolver,
    register_resolvers,
)

__all__ = [
    "PowerUpContext",
    "PowerUpResolver",
    "create_resolver_registry",
    "register_resolver",
    "register_resolvers",
]

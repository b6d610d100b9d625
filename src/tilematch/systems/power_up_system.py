from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

from esper import World

from tilematch.components.power_up import PowerUpInventory, PowerUpType
from tilematch.constants import DOUBLE_POWERUP_PROBABILITY
from tilematch.events.bus import (
    EventBus,
    EVENT_POWER_UP_INVENTORY_CHANGED,
    EVENT_POWER_UP_REQUEST,
    EVENT_POWER_UP_UNAVAILABLE,
    EVENT_POWER_UP_USED,
)
from tilematch.systems.match_resolution import MatchResolutionSystem, ResolutionOutcome
from tilematch.systems.powerups import PowerUpContext, PowerUpResolver, create_resolver_registry

Position = Tuple[int, int]


def get_inventory(world: World) -> PowerUpInventory:
    """Return the shared PowerUpInventory component, creating it if absent."""
    existing = list(world.get_component(PowerUpInventory))
    if existing:
        return existing[0][1]
    world.create_entity(PowerUpInventory())
    return list(world.get_component(PowerUpInventory))[0][1]


class PowerUpSystem:
    """Spends power-up charges and routes each use through the resolver."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        resolution: MatchResolutionSystem,
        resolvers: Optional[Dict[PowerUpType, PowerUpResolver]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.resolution = resolution
        self.resolvers = create_resolver_registry(resolvers)
        candidate_rng = rng or getattr(world, "random", None)
        self.rng = candidate_rng if isinstance(candidate_rng, random.Random) else random.Random()
        self.event_bus.subscribe(EVENT_POWER_UP_REQUEST, self.on_power_up_request)

    def on_power_up_request(self, sender, **kwargs):
        power_up = kwargs.get("power_up")
        target = kwargs.get("target")
        if power_up is None or target is None:
            return
        second = kwargs.get("second_target")
        self.use(PowerUpType(power_up), tuple(target), tuple(second) if second else None)

    def use(
        self,
        power_up: PowerUpType,
        target: Position,
        second_target: Optional[Position] = None,
    ) -> ResolutionOutcome:
        """Spend one charge of ``power_up`` on ``target``.

        The charge is only consumed when the underlying operation is accepted.
        """
        resolver = self.resolvers.get(power_up)
        if resolver is None:
            raise ValueError(f"No resolver registered for power-up '{power_up.value}'")
        inventory = get_inventory(self.world)
        if inventory.count(power_up) <= 0:
            self.event_bus.emit(EVENT_POWER_UP_UNAVAILABLE, power_up=power_up, reason="no_charges")
            return ResolutionOutcome(operation=power_up.value, accepted=False)
        ctx = PowerUpContext(
            world=self.world,
            event_bus=self.event_bus,
            resolution=self.resolution,
            power_up=power_up,
            target=target,
            second_target=second_target,
        )
        outcome = resolver.resolve(ctx)
        if not outcome.accepted:
            self.event_bus.emit(EVENT_POWER_UP_UNAVAILABLE, power_up=power_up, reason="rejected")
            return outcome
        inventory.consume(power_up)
        remaining = inventory.count(power_up)
        self.event_bus.emit(EVENT_POWER_UP_INVENTORY_CHANGED, power_up=power_up, count=remaining, delta=-1)
        self.event_bus.emit(EVENT_POWER_UP_USED, power_up=power_up, target=target, remaining=remaining)
        return outcome

    def grant(self, power_up: PowerUpType, amount: int = 1) -> int:
        count = get_inventory(self.world).grant(power_up, amount)
        self.event_bus.emit(EVENT_POWER_UP_INVENTORY_CHANGED, power_up=power_up, count=count, delta=amount)
        return count

    def award(self, power_up: PowerUpType) -> int:
        """Grant one charge, or two when ``power_up`` is the level's promoted one and the roll hits."""
        amount = 1
        context = self.resolution.level_context
        if context is not None and context.promoted_power_up is power_up:
            if self.rng.random() < DOUBLE_POWERUP_PROBABILITY:
                amount = 2
        self.grant(power_up, amount)
        return amount

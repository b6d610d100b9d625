from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from esper import World

from tilematch.components.level_context import LevelContext
from tilematch.components.match import MatchBatch
from tilematch.components.symbol import Symbol
from tilematch.components.turn_state import ResolutionPhase
from tilematch.constants import CLEAR_RADIUS
from tilematch.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_LEVEL_CHANGED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_RESOLUTION_PHASE_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_REVERTED,
    EVENT_TILE_SWAP_VALID,
)
from tilematch.systems.board_ops import (
    are_adjacent,
    clear_region,
    force_swap_symbols,
    get_sampler,
    is_valid_position,
    remove_matches,
    replace_all_of_symbol,
    reroll_cell,
    swap_symbols,
)
from tilematch.systems.match_ops import find_all_matches
from tilematch.systems.scoring import progress_for_matches, score_matches
from tilematch.systems.turn_state_utils import get_or_create_turn_state

Position = Tuple[int, int]


@dataclass(slots=True)
class ResolutionOutcome:
    """Result of one caller-visible board operation, cascades included."""

    operation: str
    accepted: bool
    batches: List[MatchBatch] = field(default_factory=list)
    swap_failed: bool = False
    affected: List[Position] = field(default_factory=list)

    @property
    def score(self) -> int:
        return sum(batch.score for batch in self.batches)

    @property
    def cascade_count(self) -> int:
        return sum(1 for batch in self.batches if batch.cascade)

    @property
    def direct_batch(self) -> MatchBatch | None:
        if self.batches and not self.batches[0].cascade:
            return self.batches[0]
        return None

    def __bool__(self) -> bool:
        return self.accepted

    def progress(self, denominator: int) -> float:
        return sum(progress_for_matches(batch.matches, denominator) for batch in self.batches)


class MatchResolutionSystem:
    """Applies board operations and drains every resulting cascade.

    Each request walks IDLE -> MUTATING -> DETECTING, then loops
    RESOLVING_MATCHES -> REFILLING -> DETECTING until a detection pass comes
    back empty, and returns to IDLE before handing back the outcome.
    """

    def __init__(self, world: World, event_bus: EventBus, level_context: Optional[LevelContext] = None):
        self.world = world
        self.event_bus = event_bus
        self.level_context = level_context
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    def set_level(self, context: Optional[LevelContext]) -> None:
        self.level_context = context
        self.event_bus.emit(
            EVENT_LEVEL_CHANGED,
            level=context.level if context else None,
            privileged_symbol=context.privileged_symbol if context else None,
            promoted_power_up=context.promoted_power_up if context else None,
        )

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get("src")
        dst = kwargs.get("dst")
        if not src or not dst:
            return
        self.request_swap(tuple(src), tuple(dst))

    def on_board_changed(self, sender, **kwargs):
        # Only external edits; our own board_changed events fire while busy.
        if get_or_create_turn_state(self.world).busy:
            return
        self.settle(reason=kwargs.get("reason", "board_changed"))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def request_swap(self, src: Position, dst: Position) -> ResolutionOutcome:
        """Player swap: adjacent cells only; an empty first pass marks a failed swap."""
        if not (is_valid_position(self.world, src) and is_valid_position(self.world, dst)):
            reason = "out_of_bounds"
        elif not are_adjacent(src, dst):
            reason = "not_adjacent"
        else:
            reason = "busy"
        outcome = self._run("swap", lambda: [src, dst] if swap_symbols(self.world, src, dst) else None)
        if not outcome.accepted:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=reason)
            return outcome
        if outcome.batches:
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        else:
            outcome.swap_failed = True
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason="no_match")
        return outcome

    def revert_swap(self, src: Position, dst: Position) -> bool:
        """Undo a failed swap by swapping the pair back."""
        if get_or_create_turn_state(self.world).busy:
            return False
        reverted = swap_symbols(self.world, dst, src)
        if reverted:
            self.event_bus.emit(EVENT_TILE_SWAP_REVERTED, src=dst, dst=src)
        return reverted

    def request_force_swap(self, src: Position, dst: Position) -> ResolutionOutcome:
        """Swap any two cells, adjacency ignored."""
        return self._run(
            "force_swap",
            lambda: [src, dst] if force_swap_symbols(self.world, src, dst) else None,
        )

    def request_clear_region(self, center: Position, radius: int = CLEAR_RADIUS) -> ResolutionOutcome:
        def mutate():
            if not is_valid_position(self.world, center):
                return None
            return clear_region(self.world, center, radius, self.level_context)

        return self._run("clear_region", mutate)

    def request_replace_all(self, target: Symbol, *, guarantee_change: bool = False) -> ResolutionOutcome:
        return self._run(
            "replace_all",
            lambda: replace_all_of_symbol(
                self.world, target, self.level_context, guarantee_change=guarantee_change
            ),
        )

    def request_reroll_cell(self, pos: Position) -> ResolutionOutcome:
        return self._run(
            "reroll_cell",
            lambda: [pos] if reroll_cell(self.world, pos, self.level_context) else None,
        )

    def settle(self, reason: str = "settle") -> ResolutionOutcome:
        """Drain matches left behind by an external edit."""
        return self._run(reason, lambda: [])

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    def _run(self, operation: str, mutate: Callable[[], Optional[List[Position]]]) -> ResolutionOutcome:
        state = get_or_create_turn_state(self.world)
        if state.busy:
            return ResolutionOutcome(operation=operation, accepted=False)
        state.action_source = operation
        state.cascade_depth = 0
        self._enter(ResolutionPhase.MUTATING, operation)
        try:
            affected = mutate()
            if affected is None:
                return ResolutionOutcome(operation=operation, accepted=False)
            if affected:
                self.event_bus.emit(EVENT_BOARD_CHANGED, reason=operation, positions=list(affected))
            batches = self._drain(operation)
            score = sum(batch.score for batch in batches)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=len(batches), score=score, operation=operation)
            if score:
                self.event_bus.emit(EVENT_SCORE_CHANGED, delta=score, operation=operation)
            return ResolutionOutcome(operation=operation, accepted=True, batches=batches, affected=list(affected))
        finally:
            # A raising subscriber must not leave the resolver stuck mid-phase.
            self._enter(ResolutionPhase.IDLE, operation)
            state.action_source = None

    def _drain(self, operation: str) -> List[MatchBatch]:
        state = get_or_create_turn_state(self.world)
        batches: List[MatchBatch] = []
        depth = 0
        while True:
            self._enter(ResolutionPhase.DETECTING, operation)
            matches = find_all_matches(self.world)
            if not matches:
                return batches
            self._enter(ResolutionPhase.RESOLVING_MATCHES, operation)
            batch = MatchBatch(matches=tuple(matches), depth=depth, score=score_matches(matches))
            positions = batch.positions()
            state.cascade_depth = depth
            self.event_bus.emit(
                EVENT_MATCH_FOUND,
                matches=list(batch.matches),
                positions=positions,
                depth=depth,
                cascade=batch.cascade,
            )
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=positions)
            self._enter(ResolutionPhase.REFILLING, operation)
            typed, new_tiles = remove_matches(self.world, batch.matches, self.level_context)
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, types=typed)
            weighted = get_sampler(self.world).is_weighted(self.level_context, batch.symbols())
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles, weighted=weighted)
            batches.append(batch)
            depth += 1

    def _enter(self, phase: ResolutionPhase, operation: str) -> None:
        state = get_or_create_turn_state(self.world)
        previous = state.phase
        if previous is phase:
            return
        state.phase = phase
        self.event_bus.emit(
            EVENT_RESOLUTION_PHASE_CHANGED,
            previous=previous,
            phase=phase,
            operation=operation,
        )


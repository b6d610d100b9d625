from __future__ import annotations

from typing import Dict, Optional, Tuple

from esper import World

from tilematch.components.board import Board
from tilematch.components.board_position import BoardPosition
from tilematch.components.level_context import LevelContext
from tilematch.components.symbol import Symbol
from tilematch.components.tile import TileType
from tilematch.constants import (
    GUARANTEED_MATCH_ATTEMPTS,
    MAIN_BOARD_HEIGHT,
    MAIN_BOARD_WIDTH,
    MIN_MATCH_LENGTH,
    NO_MATCH_SCRAMBLE_ROUNDS,
    SCRAMBLE_SWAP_COUNT,
)
from tilematch.events.bus import EventBus, EVENT_BOARD_GENERATED, EVENT_BOARD_REBUILD_REQUEST
from tilematch.systems.board_generation import (
    force_match_layout,
    generate_layout,
    scramble_grid,
    striped_stalemate_layout,
)
from tilematch.systems.board_ops import apply_grid, get_sampler
from tilematch.systems.match_ops import grid_has_possible_match

Grid = Dict[Tuple[int, int], Symbol]


class BoardSystem:
    """Owns the board entity and rebuilds its layout on request.

    The cell entities are created once; every later generation rewrites their
    symbols in place so dimensions never change.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        width: int = MAIN_BOARD_WIDTH,
        height: int = MAIN_BOARD_HEIGHT,
        level_context: Optional[LevelContext] = None,
    ):
        if width < 1 or height < 1:
            raise ValueError(f"Board must be at least 1x1, got {width}x{height}")
        if list(world.get_component(Board)):
            raise ValueError("World already owns a board")
        self.world = world
        self.event_bus = event_bus
        self.level_context = level_context
        self.width = width
        self.height = height
        board = Board(width=width, height=height)
        self.board_entity = self.world.create_entity(board)
        for x in range(width):
            for y in range(height):
                # Placeholder symbol; generate() fills the real layout below.
                ent = self.world.create_entity(BoardPosition(x=x, y=y), TileType(symbol=Symbol.LEAF))
                board.cell_entities[(x, y)] = ent
        self.event_bus.subscribe(EVENT_BOARD_REBUILD_REQUEST, self.on_rebuild_request)
        self.generate()

    def set_level(self, context: Optional[LevelContext]) -> None:
        self.level_context = context

    def generate(self) -> None:
        """Fresh layout without any same-symbol orthogonal neighbours."""
        grid = generate_layout(self.width, self.height, get_sampler(self.world), self.level_context)
        self._commit(grid, mode="standard")

    def generate_with_guaranteed_match(
        self,
        target_length: int,
        max_attempts: int = GUARANTEED_MATCH_ATTEMPTS,
    ) -> bool:
        """Rebuild until some swap yields a run of ``target_length``.

        Returns True when a random layout qualified and False when the run had
        to be planted after ``max_attempts`` misses. Planting hides the run
        behind one scrambled cell, which only works for lengths 3 to 5 that fit
        the board width; other lengths raise ValueError once the random
        attempts are used up.
        """
        sampler = get_sampler(self.world)
        grid: Grid = {}
        for _ in range(max_attempts):
            grid = generate_layout(self.width, self.height, sampler, self.level_context)
            if grid_has_possible_match(grid, self.width, self.height, target_length):
                self._commit(grid, mode="guaranteed_match", target_length=target_length)
                return True
        if not grid:
            grid = generate_layout(self.width, self.height, sampler, self.level_context)
        forced = force_match_layout(grid, self.width, self.height, target_length, sampler)
        self._commit(forced, mode="forced_match", target_length=target_length)
        return False

    def generate_with_no_possible_match(self, max_rounds: int = NO_MATCH_SCRAMBLE_ROUNDS) -> bool:
        """Rebuild into a board where no single swap produces a match.

        Scrambles random cell pairs until the probe fails; after ``max_rounds``
        rounds it falls back to diagonal stripes and returns False.
        """
        sampler = get_sampler(self.world)
        grid = generate_layout(self.width, self.height, sampler, self.level_context)
        rounds = 0
        while grid_has_possible_match(grid, self.width, self.height, MIN_MATCH_LENGTH):
            if rounds >= max_rounds:
                symbols = sampler.rng.sample(sampler.alphabet, 3)
                grid = striped_stalemate_layout(self.width, self.height, symbols)
                self._commit(grid, mode="stalemate_stripes")
                return False
            scramble_grid(grid, self.width, self.height, SCRAMBLE_SWAP_COUNT, sampler.rng)
            rounds += 1
        self._commit(grid, mode="no_possible_match")
        return True

    def on_rebuild_request(self, sender, **kwargs):
        mode = kwargs.get("mode", "standard")
        if mode == "guaranteed_match":
            self.generate_with_guaranteed_match(int(kwargs.get("target_length") or MIN_MATCH_LENGTH))
        elif mode == "no_possible_match":
            self.generate_with_no_possible_match()
        else:
            self.generate()

    def _commit(self, grid: Grid, *, mode: str, target_length: int | None = None) -> None:
        apply_grid(self.world, grid)
        self.event_bus.emit(
            EVENT_BOARD_GENERATED,
            width=self.width,
            height=self.height,
            mode=mode,
            target_length=target_length,
        )

"""One board, its resolver and power-ups wired onto a shared world and bus."""
from __future__ import annotations

import random
from typing import List, Optional, Tuple

from tilematch.components.cell import Cell
from tilematch.components.level_context import LevelContext
from tilematch.components.match import Match
from tilematch.components.symbol import Symbol
from tilematch.constants import MAIN_BOARD_HEIGHT, MAIN_BOARD_WIDTH, MIN_MATCH_LENGTH, TRAINING_BOARD_HEIGHT, TRAINING_BOARD_WIDTH
from tilematch.events.bus import EventBus
from tilematch.factories.levels import level_context_for
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_ops import board_snapshot, get_cell, set_cell
from tilematch.systems.match_ops import find_all_matches, find_valid_swaps, has_possible_match
from tilematch.systems.match_resolution import MatchResolutionSystem, ResolutionOutcome
from tilematch.systems.power_up_system import PowerUpSystem
from tilematch.world import create_world

Position = Tuple[int, int]


class GameSession:
    def __init__(
        self,
        width: int = MAIN_BOARD_WIDTH,
        height: int = MAIN_BOARD_HEIGHT,
        *,
        level_context: Optional[LevelContext] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, rng=rng)
        self.level_context = level_context
        self.board = BoardSystem(self.world, self.event_bus, width, height, level_context)
        self.resolution = MatchResolutionSystem(self.world, self.event_bus, level_context)
        self.power_ups = PowerUpSystem(self.world, self.event_bus, self.resolution)

    @classmethod
    def for_level(cls, level: int, **kwargs) -> "GameSession":
        return cls(level_context=level_context_for(level), **kwargs)

    @classmethod
    def training(cls, **kwargs) -> "GameSession":
        return cls(TRAINING_BOARD_WIDTH, TRAINING_BOARD_HEIGHT, **kwargs)

    def set_level(self, context: Optional[LevelContext]) -> None:
        self.level_context = context
        self.board.set_level(context)
        self.resolution.set_level(context)

    # Board access
    def get_board(self) -> List[List[Symbol]]:
        return board_snapshot(self.world)

    def get_cell(self, pos: Position) -> Cell | None:
        return get_cell(self.world, pos)

    def set_cell(self, pos: Position, symbol: Symbol) -> bool:
        return set_cell(self.world, pos, symbol)

    # Detection
    def find_matches(self) -> List[Match]:
        return find_all_matches(self.world)

    def has_possible_match(self, target_length: int = MIN_MATCH_LENGTH) -> bool:
        return has_possible_match(self.world, target_length)

    def find_valid_swaps(self, target_length: int = MIN_MATCH_LENGTH) -> List[Tuple[Position, Position]]:
        return find_valid_swaps(self.world, target_length)

    # Operations
    def swap(self, a: Position, b: Position) -> ResolutionOutcome:
        return self.resolution.request_swap(a, b)

    def revert_swap(self, a: Position, b: Position) -> bool:
        return self.resolution.revert_swap(a, b)

    def force_swap(self, a: Position, b: Position) -> ResolutionOutcome:
        return self.resolution.request_force_swap(a, b)

    def clear_region(self, center: Position) -> ResolutionOutcome:
        return self.resolution.request_clear_region(center)

    def replace_all_of_symbol(self, symbol: Symbol, *, guarantee_change: bool = False) -> ResolutionOutcome:
        return self.resolution.request_replace_all(symbol, guarantee_change=guarantee_change)

    def reroll_cell(self, pos: Position) -> ResolutionOutcome:
        return self.resolution.request_reroll_cell(pos)

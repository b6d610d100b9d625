from __future__ import annotations

from typing import Dict, List, Tuple

from esper import World

from tilematch.components.match import Match
from tilematch.components.symbol import Symbol
from tilematch.constants import MIN_MATCH_LENGTH
from tilematch.systems.board_ops import board_dimensions, symbol_grid

Position = Tuple[int, int]
Grid = Dict[Position, Symbol]


def _scan_line(grid: Grid, line: List[Position], horizontal: bool, matches: List[Match]) -> None:
    run: List[Position] = []
    last_symbol = None
    for pos in line:
        symbol = grid.get(pos)
        if symbol is not None and symbol == last_symbol:
            run.append(pos)
            continue
        if len(run) >= MIN_MATCH_LENGTH:
            matches.append(Match(positions=tuple(run), symbol=last_symbol, length=len(run), horizontal=horizontal))
        run = [pos] if symbol is not None else []
        last_symbol = symbol
    if len(run) >= MIN_MATCH_LENGTH:
        matches.append(Match(positions=tuple(run), symbol=last_symbol, length=len(run), horizontal=horizontal))


def find_matches_in_grid(grid: Grid, width: int, height: int) -> List[Match]:
    """Detect maximal horizontal then vertical runs of length >= 3.

    A cell shared by a horizontal and a vertical run (L/T shapes) is reported in
    both matches; overlapping runs are never merged.
    """
    matches: List[Match] = []
    for y in range(height):
        _scan_line(grid, [(x, y) for x in range(width)], True, matches)
    for x in range(width):
        _scan_line(grid, [(x, y) for y in range(height)], False, matches)
    return matches


def find_all_matches(world: World) -> List[Match]:
    dims = board_dimensions(world)
    if not dims:
        return []
    width, height = dims
    return find_matches_in_grid(symbol_grid(world), width, height)


def _swap_candidates(width: int, height: int) -> List[Tuple[Position, Position]]:
    # Each unordered adjacent pair once; the reverse swap gives the same board.
    pairs: List[Tuple[Position, Position]] = []
    for y in range(height):
        for x in range(width):
            if x + 1 < width:
                pairs.append(((x, y), (x + 1, y)))
            if y + 1 < height:
                pairs.append(((x, y), (x, y + 1)))
    return pairs


def _probe(grid: Grid, width: int, height: int, a: Position, b: Position, target_length: int) -> bool:
    grid[a], grid[b] = grid[b], grid[a]
    try:
        matches = find_matches_in_grid(grid, width, height)
        return any(match.length >= target_length for match in matches)
    finally:
        grid[a], grid[b] = grid[b], grid[a]


def grid_has_possible_match(grid: Grid, width: int, height: int, target_length: int = MIN_MATCH_LENGTH) -> bool:
    for a, b in _swap_candidates(width, height):
        if _probe(grid, width, height, a, b, target_length):
            return True
    return False


def has_possible_match(world: World, target_length: int = MIN_MATCH_LENGTH) -> bool:
    """Return True if some single adjacent swap yields a run of ``target_length`` or more.

    Probes a detached copy of the board, so the world is never mutated.
    """
    dims = board_dimensions(world)
    if not dims:
        return False
    width, height = dims
    return grid_has_possible_match(symbol_grid(world), width, height, target_length)


def find_valid_swaps(world: World, target_length: int = MIN_MATCH_LENGTH) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would produce a run of ``target_length`` or more."""
    dims = board_dimensions(world)
    if not dims:
        return []
    width, height = dims
    grid = symbol_grid(world)
    return [
        (a, b)
        for a, b in _swap_candidates(width, height)
        if _probe(grid, width, height, a, b, target_length)
    ]

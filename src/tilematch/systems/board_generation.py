"""Layout builders used by BoardSystem.

Every builder works on a detached ``{(x, y): Symbol}`` grid; BoardSystem
writes the finished layout into the cell entities in one pass.
"""
from __future__ import annotations

import random
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from tilematch.components.level_context import LevelContext
from tilematch.components.symbol import Symbol
from tilematch.constants import FORCED_REPAIR_PASSES, MIN_MATCH_LENGTH
from tilematch.systems.match_ops import find_matches_in_grid
from tilematch.systems.symbol_sampler import SymbolSampler

Position = Tuple[int, int]
Grid = Dict[Position, Symbol]


def generate_layout(
    width: int,
    height: int,
    sampler: SymbolSampler,
    context: LevelContext | None = None,
) -> Grid:
    """Fill column by column, never repeating the left or upper neighbour's symbol."""
    if width < 1 or height < 1:
        raise ValueError(f"Board must be at least 1x1, got {width}x{height}")
    grid: Grid = {}
    for x in range(width):
        for y in range(height):
            excluded: Set[Symbol] = set()
            if x > 0:
                excluded.add(grid[(x - 1, y)])
            if y > 0:
                excluded.add(grid[(x, y - 1)])
            grid[(x, y)] = sampler.draw_excluding(excluded, context)
    return grid


def striped_stalemate_layout(width: int, height: int, symbols: Sequence[Symbol]) -> Grid:
    """Diagonal stripes of three symbols: no runs and no single swap creates one."""
    if len(symbols) < 3:
        raise ValueError("Stalemate stripes need three distinct symbols")
    return {(x, y): symbols[(x + y) % 3] for x in range(width) for y in range(height)}


def scramble_grid(grid: Grid, width: int, height: int, swaps: int, rng: random.Random) -> None:
    """Exchange ``swaps`` random cell pairs anywhere on the grid."""
    for _ in range(swaps):
        a = (rng.randrange(width), rng.randrange(height))
        b = (rng.randrange(width), rng.randrange(height))
        grid[a], grid[b] = grid[b], grid[a]


def _hole_candidates(target_length: int) -> List[int]:
    # One scrambled cell must leave both remaining segments shorter than a match.
    return [
        index
        for index in range(target_length)
        if index < MIN_MATCH_LENGTH and target_length - 1 - index < MIN_MATCH_LENGTH
    ]


def _orthogonal(grid: Grid, pos: Position) -> Iterable[Position]:
    x, y = pos
    for candidate in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
        if candidate in grid:
            yield candidate


def force_match_layout(
    grid: Grid,
    width: int,
    height: int,
    target_length: int,
    sampler: SymbolSampler,
) -> Grid:
    """Plant a run of ``target_length`` that is exactly one swap away.

    A row of identical symbols is centred on the board, one of its cells is
    changed to a different symbol and a cell directly above (or below) that gap
    receives the run symbol, so swapping those two completes the run. Any match
    the planting produced elsewhere is resampled away.
    """
    if target_length < MIN_MATCH_LENGTH or target_length > width:
        raise ValueError(f"Cannot force a match of length {target_length} on a board {width} wide")
    holes = _hole_candidates(target_length)
    if not holes:
        raise ValueError(f"A run of {target_length} cannot be hidden by a single scrambled cell")
    if height < 2:
        raise ValueError("Forcing a match needs at least two rows")

    rng = sampler.rng
    layout = dict(grid)
    row = height // 2
    start = (width - target_length) // 2
    run_symbol = sampler.uniform()
    run_cells = [(start + offset, row) for offset in range(target_length)]
    for pos in run_cells:
        layout[pos] = run_symbol

    hole = run_cells[rng.choice(holes)]
    layout[hole] = sampler.draw_excluding((run_symbol,))
    donor = (hole[0], row - 1) if row - 1 >= 0 else (hole[0], row + 1)
    layout[donor] = run_symbol

    protected = set(run_cells) | {donor}
    _repair_layout(layout, width, height, protected, sampler)
    return layout


def _repair_layout(
    grid: Grid,
    width: int,
    height: int,
    protected: Set[Position],
    sampler: SymbolSampler,
) -> None:
    for _ in range(FORCED_REPAIR_PASSES):
        matches = find_matches_in_grid(grid, width, height)
        if not matches:
            return
        for match in matches:
            for pos in match.positions:
                if pos in protected:
                    continue
                excluded = {grid[n] for n in _orthogonal(grid, pos)} | {match.symbol}
                if len(excluded) >= len(sampler.alphabet):
                    excluded = {match.symbol}
                grid[pos] = sampler.draw_excluding(excluded)
                break
    if find_matches_in_grid(grid, width, height):
        raise RuntimeError("Unable to clear stray matches around the forced run")

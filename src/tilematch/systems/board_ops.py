from __future__ import annotations

import random
from typing import Dict, Iterable, List, Sequence, Tuple

from esper import World

from tilematch.components.board import Board
from tilematch.components.cell import Cell
from tilematch.components.level_context import LevelContext
from tilematch.components.match import Match
from tilematch.components.symbol import Symbol
from tilematch.components.symbol_palette import SymbolPalette
from tilematch.components.tile import TileType
from tilematch.systems.symbol_sampler import SymbolSampler

Position = Tuple[int, int]
TypeEntry = Tuple[int, int, Symbol]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found; create one with BoardSystem first")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.width, board.height
    return None


def get_palette(world: World) -> SymbolPalette:
    for _, palette in world.get_component(SymbolPalette):
        return palette
    raise RuntimeError("SymbolPalette definitions not found")


def get_sampler(world: World) -> SymbolSampler:
    """Return the world's sampler, creating it from the palette on first use."""
    sampler = getattr(world, "sampler", None)
    if isinstance(sampler, SymbolSampler):
        return sampler
    rng = getattr(world, "random", None)
    sampler = SymbolSampler(get_palette(world).symbols(), rng if isinstance(rng, random.Random) else None)
    setattr(world, "sampler", sampler)
    return sampler


def set_alphabet(world: World, symbols: Iterable[Symbol]) -> List[Symbol]:
    """Restrict the drawable symbols; the sampler follows the palette."""
    palette = get_palette(world)
    palette.set_alphabet(symbols)
    get_sampler(world).alphabet = palette.symbols()
    return palette.symbols()


def is_valid_position(world: World, pos: Position) -> bool:
    dims = board_dimensions(world)
    if dims is None:
        return False
    width, height = dims
    x, y = pos
    return 0 <= x < width and 0 <= y < height


def are_adjacent(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def neighbors(world: World, pos: Position) -> List[Position]:
    x, y = pos
    candidates = [(x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)]
    return [candidate for candidate in candidates if is_valid_position(world, candidate)]


def get_entity_at(world: World, x: int, y: int) -> int | None:
    for _, board in world.get_component(Board):
        return board.cell_entities.get((x, y))
    return None


def _tile_at(world: World, pos: Position) -> TileType | None:
    entity = get_entity_at(world, pos[0], pos[1])
    if entity is None:
        return None
    try:
        return world.component_for_entity(entity, TileType)
    except KeyError:
        return None


def get_symbol(world: World, pos: Position) -> Symbol | None:
    tile = _tile_at(world, pos)
    return tile.symbol if tile is not None else None


def get_cell(world: World, pos: Position) -> Cell | None:
    symbol = get_symbol(world, pos)
    if symbol is None:
        return None
    return Cell(position=(pos[0], pos[1]), symbol=symbol)


def set_cell(world: World, pos: Position, symbol: Symbol) -> bool:
    tile = _tile_at(world, pos)
    if tile is None:
        return False
    tile.symbol = symbol
    return True


def symbol_grid(world: World) -> Dict[Position, Symbol]:
    """Return a detached mapping of every cell position to its symbol."""
    grid: Dict[Position, Symbol] = {}
    for _, board in world.get_component(Board):
        for pos, entity in board.cell_entities.items():
            grid[pos] = world.component_for_entity(entity, TileType).symbol
        break
    return grid


def apply_grid(world: World, grid: Dict[Position, Symbol]) -> None:
    for pos, symbol in grid.items():
        set_cell(world, pos, symbol)


def board_snapshot(world: World) -> List[List[Symbol]]:
    """Row-major copy of the board: ``snapshot[y][x]``."""
    dims = board_dimensions(world)
    if dims is None:
        return []
    width, height = dims
    grid = symbol_grid(world)
    return [[grid[(x, y)] for x in range(width)] for y in range(height)]


def swap_symbols(world: World, a: Position, b: Position) -> bool:
    """Swap two orthogonally adjacent cells; anything else is rejected untouched."""
    if not are_adjacent(a, b):
        return False
    return force_swap_symbols(world, a, b)


def force_swap_symbols(world: World, a: Position, b: Position) -> bool:
    """Swap any two cells on the board, ignoring adjacency."""
    tile_a = _tile_at(world, a)
    tile_b = _tile_at(world, b)
    if tile_a is None or tile_b is None:
        return False
    tile_a.symbol, tile_b.symbol = tile_b.symbol, tile_a.symbol
    return True


def region_positions(world: World, center: Position, radius: int = 1) -> List[Position]:
    """Square neighbourhood around ``center`` clipped to the board."""
    cx, cy = center
    positions: List[Position] = []
    for y in range(cy - radius, cy + radius + 1):
        for x in range(cx - radius, cx + radius + 1):
            if is_valid_position(world, (x, y)):
                positions.append((x, y))
    return positions


def refill_positions(
    world: World,
    positions: Iterable[Position],
    context: LevelContext | None = None,
    *,
    cleared: Iterable[Symbol] = (),
) -> List[Position]:
    """Resample every listed cell in place; returns the cells that were refilled."""
    sampler = get_sampler(world)
    cleared = tuple(cleared)
    refilled: List[Position] = []
    for pos in positions:
        tile = _tile_at(world, pos)
        if tile is None:
            continue
        tile.symbol = sampler.draw(context, cleared=cleared)
        refilled.append((pos[0], pos[1]))
    return refilled


def clear_region(
    world: World,
    center: Position,
    radius: int = 1,
    context: LevelContext | None = None,
) -> List[Position]:
    """Resample the clipped square around ``center``.

    Every symbol removed from the region counts as cleared for the privileged
    fallback. Off-board centres are a no-op.
    """
    if get_symbol(world, center) is None:
        return []
    positions = region_positions(world, center, radius)
    cleared = {get_symbol(world, pos) for pos in positions}
    return refill_positions(world, positions, context, cleared=cleared)


def replace_all_of_symbol(
    world: World,
    target: Symbol,
    context: LevelContext | None = None,
    *,
    guarantee_change: bool = False,
) -> List[Position]:
    """Resample every cell currently holding ``target``.

    Draws may land on ``target`` again unless ``guarantee_change`` is set.
    """
    affected = sorted(pos for pos, symbol in symbol_grid(world).items() if symbol == target)
    if not affected:
        return []
    if not guarantee_change:
        return refill_positions(world, affected, context, cleared=(target,))
    sampler = get_sampler(world)
    for pos in affected:
        set_cell(world, pos, sampler.draw_excluding((target,), context, cleared=(target,)))
    return affected


def reroll_cell(world: World, pos: Position, context: LevelContext | None = None) -> bool:
    """Redraw one cell to a symbol different from its current one."""
    current = get_symbol(world, pos)
    if current is None:
        return False
    sampler = get_sampler(world)
    return set_cell(world, pos, sampler.draw_excluding((current,), context, cleared=(current,)))


def remove_matches(
    world: World,
    matches: Sequence[Match],
    context: LevelContext | None = None,
) -> Tuple[List[TypeEntry], List[Position]]:
    """Replace every matched cell with a fresh draw (no gravity).

    Overlapping runs share cells; each cell is refilled once. Returns the
    removed (x, y, symbol) entries and the refilled positions.
    """
    if not matches:
        return [], []
    positions = sorted({pos for match in matches for pos in match.positions})
    typed: List[TypeEntry] = []
    for x, y in positions:
        symbol = get_symbol(world, (x, y))
        if symbol is not None:
            typed.append((x, y, symbol))
    cleared = {match.symbol for match in matches}
    new_tiles = refill_positions(world, positions, context, cleared=cleared)
    return typed, new_tiles


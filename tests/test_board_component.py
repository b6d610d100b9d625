import pytest

from tilematch.events.bus import EventBus
from tilematch.world import create_world
from tilematch.systems.board import BoardSystem
from tilematch.components.board import Board
from tilematch.components.board_position import BoardPosition
from tilematch.components.tile import TileType


def test_board_component_exists():
    bus = EventBus(); world = create_world(bus)
    BoardSystem(world, bus, 9, 7)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.width == 9 and comp.height == 7
    assert len(comp.cell_entities) == 63


def test_every_position_has_exactly_one_cell():
    bus = EventBus(); world = create_world(bus)
    BoardSystem(world, bus, 5, 6)
    positions = [(pos.x, pos.y) for _, pos in world.get_component(BoardPosition)]
    assert sorted(positions) == sorted((x, y) for x in range(5) for y in range(6))
    for entity, _ in world.get_component(BoardPosition):
        assert world.has_component(entity, TileType)


def test_second_board_in_same_world_rejected():
    bus = EventBus(); world = create_world(bus)
    BoardSystem(world, bus, 3, 3)
    with pytest.raises(ValueError):
        BoardSystem(world, bus, 3, 3)


def test_degenerate_dimensions_rejected():
    bus = EventBus(); world = create_world(bus)
    with pytest.raises(ValueError):
        BoardSystem(world, bus, 0, 4)

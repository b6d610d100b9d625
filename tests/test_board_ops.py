from tilematch.components.cell import Cell
from tilematch.components.level_context import LevelContext
from tilematch.components.symbol import Symbol
from tilematch.systems.board_ops import (
    board_snapshot,
    clear_region,
    get_cell,
    neighbors,
    region_positions,
    remove_matches,
    replace_all_of_symbol,
    reroll_cell,
    set_cell,
    symbol_grid,
)
from tilematch.systems.match_ops import find_all_matches
from tests.helpers import STRIPE_SYMBOLS, build_session, paint, paint_stripes, script_refills


def test_cell_lookup_and_override():
    session = build_session()
    assert set_cell(session.world, (8, 6), Symbol.LIGHTNING)
    assert get_cell(session.world, (8, 6)) == Cell(position=(8, 6), symbol=Symbol.LIGHTNING)
    assert session.get_board()[6][8] is Symbol.LIGHTNING


def test_invalid_positions_are_ignored():
    session = build_session()
    before = session.get_board()
    assert get_cell(session.world, (9, 0)) is None
    assert get_cell(session.world, (0, -1)) is None
    assert not set_cell(session.world, (-1, 3), Symbol.LEAF)
    assert not reroll_cell(session.world, (0, 7))
    assert clear_region(session.world, (12, 12)) == []
    assert session.get_board() == before


def test_region_is_clipped_at_edges():
    session = build_session()
    assert len(region_positions(session.world, (4, 3))) == 9
    assert region_positions(session.world, (0, 0)) == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert len(region_positions(session.world, (0, 3))) == 6
    assert len(region_positions(session.world, (4, 3), radius=2)) == 25
    assert sorted(neighbors(session.world, (8, 6))) == [(7, 6), (8, 5)]


def test_clear_region_resamples_every_cell(monkeypatch):
    session = build_session()
    paint_stripes(session.world)
    script_refills(monkeypatch, session.world, [Symbol.LEAF] * 4)
    touched = clear_region(session.world, (8, 0))
    assert touched == [(7, 0), (8, 0), (7, 1), (8, 1)]
    assert all(session.get_cell(pos).symbol is Symbol.LEAF for pos in touched)


def test_clear_region_counts_every_removed_symbol_as_cleared(monkeypatch):
    session = build_session()
    paint_stripes(session.world)
    sampler = session.world.sampler
    off_centre = session.get_cell((3, 3)).symbol
    assert off_centre is not session.get_cell((4, 3)).symbol
    context = LevelContext(privileged_symbol=off_centre)
    seen = []
    monkeypatch.setattr(sampler, "draw", lambda context=None, *, cleared=(): seen.append(set(cleared)) or Symbol.LEAF)
    clear_region(session.world, (4, 3), context=context)
    assert len(seen) == 9
    assert all(cleared == set(STRIPE_SYMBOLS) for cleared in seen)
    # A privileged symbol removed away from the centre still disables weighting.
    assert not sampler.is_weighted(context, seen[0])


def test_replace_all_may_keep_symbol():
    session = build_session()
    paint_stripes(session.world)
    targets = sorted(pos for pos, symbol in symbol_grid(session.world).items() if symbol is Symbol.FIRE)
    affected = replace_all_of_symbol(session.world, Symbol.FIRE)
    assert affected == targets


def test_replace_all_with_guaranteed_change():
    session = build_session()
    paint_stripes(session.world)
    affected = replace_all_of_symbol(session.world, Symbol.FIRE, guarantee_change=True)
    assert affected
    assert all(session.get_cell(pos).symbol is not Symbol.FIRE for pos in affected)

    paint_stripes(session.world)
    assert replace_all_of_symbol(session.world, Symbol.LEAF) == []
    assert replace_all_of_symbol(session.world, Symbol.LEAF, guarantee_change=True) == []


def test_reroll_always_changes_symbol():
    session = build_session()
    for _ in range(50):
        before = session.get_cell((2, 2)).symbol
        assert reroll_cell(session.world, (2, 2))
        assert session.get_cell((2, 2)).symbol is not before


def test_remove_matches_refills_shared_cell_once(monkeypatch):
    session = build_session()
    paint_stripes(session.world)
    paint(session.world, {(0, 3): Symbol.LEAF, (1, 3): Symbol.LEAF, (2, 3): Symbol.LEAF,
                          (1, 2): Symbol.LEAF, (1, 4): Symbol.LEAF})
    remaining = script_refills(monkeypatch, session.world, [Symbol.SNOWFLAKE] * 5)
    typed, refilled = remove_matches(session.world, find_all_matches(session.world))
    assert remaining == []
    assert refilled == [(0, 3), (1, 2), (1, 3), (1, 4), (2, 3)]
    assert {entry[2] for entry in typed} == {Symbol.LEAF}
    assert remove_matches(session.world, []) == ([], [])


def test_snapshot_is_row_major_copy():
    session = build_session(5, 6)
    snapshot = board_snapshot(session.world)
    snapshot[0][0] = None
    assert session.get_board()[0][0] is not None
    assert len(snapshot) == 6 and len(snapshot[0]) == 5

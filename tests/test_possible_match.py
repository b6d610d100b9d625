from tilematch.components.symbol import Symbol
from tilematch.systems.match_ops import find_valid_swaps, has_possible_match
from tests.helpers import build_session, paint, paint_stripes


def test_probe_does_not_mutate_board():
    session = build_session(seed=17)
    before = session.get_board()
    for _ in range(5):
        session.has_possible_match(3)
        session.has_possible_match(5)
        session.find_valid_swaps()
    assert session.get_board() == before


def test_stripes_offer_no_moves():
    session = build_session()
    paint_stripes(session.world)
    assert not has_possible_match(session.world)
    assert find_valid_swaps(session.world) == []


def test_single_swap_completes_run():
    session = build_session()
    paint_stripes(session.world)
    paint(session.world, {(0, 0): Symbol.LEAF, (1, 0): Symbol.LEAF, (3, 0): Symbol.LEAF})
    assert has_possible_match(session.world, 3)
    assert not has_possible_match(session.world, 4)
    assert ((2, 0), (3, 0)) in find_valid_swaps(session.world)


def test_vertical_move_towards_longer_run():
    session = build_session()
    paint_stripes(session.world)
    paint(session.world, {(5, 1): Symbol.SNOWFLAKE, (5, 2): Symbol.SNOWFLAKE,
                          (4, 3): Symbol.SNOWFLAKE, (5, 4): Symbol.SNOWFLAKE})
    assert has_possible_match(session.world, 4)
    assert ((4, 3), (5, 3)) in session.find_valid_swaps(4)

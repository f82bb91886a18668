from takuzu_master import engine
from takuzu_master.types import TileValue

W = TileValue.WHITE
B = TileValue.BLACK
E = TileValue.EMPTY


def test_empty_candidate_never_violates():
    grid = engine.grid_from_rows(["WW....", "......", "......", "......", "......", "......"])
    assert not engine.violates_run(grid, 0, 2, E)
    assert not engine.violates_count(grid, 0, 2, E)


def test_candidate_closing_a_pair_on_the_right():
    grid = engine.grid_from_rows(["WW....", "......", "......", "......", "......", "......"])
    assert engine.violates_run(grid, 0, 2, W)
    assert not engine.violates_run(grid, 0, 2, B)


def test_candidate_opening_a_pair_on_the_left():
    grid = engine.grid_from_rows(["...BB.", "......", "......", "......", "......", "......"])
    assert engine.violates_run(grid, 0, 2, B)
    assert not engine.violates_run(grid, 0, 2, W)


def test_candidate_in_the_middle():
    grid = engine.grid_from_rows(["W.W...", "......", "......", "......", "......", "......"])
    assert engine.violates_run(grid, 0, 1, W)


def test_vertical_windows():
    grid = engine.grid_from_rows(["B.....", "B.....", "......", "...W..", "......", "...W.."])
    assert engine.violates_run(grid, 2, 0, B)
    assert engine.violates_run(grid, 4, 3, W)
    assert not engine.violates_run(grid, 2, 3, W)


def test_edges_do_not_wrap():
    grid = engine.grid_from_rows([".....W", "W.....", "......", "......", "......", "......"])
    # (0,0) with W at (0,5) and W at (1,0) only; nothing wraps around.
    assert not engine.violates_run(grid, 0, 0, W)
    assert not engine.violates_run(grid, 5, 5, W)


def test_gap_is_not_a_run():
    grid = engine.grid_from_rows(["W.W.W.", "......", "......", "......", "......", "......"])
    assert not engine.violates_run(grid, 0, 5, W)
    assert engine.violates_run(grid, 0, 3, W)

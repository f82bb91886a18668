from takuzu_master import engine
from takuzu_master.types import TileValue

W = TileValue.WHITE
B = TileValue.BLACK


def test_fourth_black_in_row_is_over_quota():
    grid = engine.grid_from_rows(["WWBBB.", "......", "......", "......", "......", "......"])
    assert engine.violates_count(grid, 0, 5, B)
    assert not engine.violates_count(grid, 0, 5, W)


def test_column_quota():
    grid = engine.grid_from_rows(["W.....", "......", "W.....", "......", "W.....", "......"])
    assert engine.violates_count(grid, 1, 0, W)
    assert engine.violates_count(grid, 5, 0, W)
    assert not engine.violates_count(grid, 1, 0, B)


def test_candidate_replaces_current_value():
    # (0,5) already holds B; re-placing B there substitutes rather than adds.
    grid = engine.grid_from_rows(["BWBWWB", "......", "......", "......", "......", "......"])
    assert not engine.violates_count(grid, 0, 5, B)
    assert engine.violates_count(grid, 0, 1, B)


def test_quota_scales_with_size():
    grid = engine.grid_from_rows(["WW..", "....", "....", "...."])
    assert engine.quota(grid) == 2
    assert engine.violates_count(grid, 0, 3, W)


def test_is_legal_move_combines_both_rules():
    grid = engine.grid_from_rows(["WW.W..", "......", "......", "......", "......", "......"])
    assert not engine.is_legal_move(grid, 0, 2, W)
    assert not engine.is_legal_move(grid, 0, 4, W)
    assert engine.is_legal_move(grid, 0, 2, B)

import pytest

from takuzu_master import engine
from takuzu_master.grid_format import grid_from_pattern
from takuzu_master.types import Cell, ErrorDetail, ErrorKind, TileValue


def test_create_empty_grid_shape():
    grid = engine.create_empty_grid()
    assert len(grid) == engine.BOARD_SIZE
    assert all(len(row) == engine.BOARD_SIZE for row in grid)
    assert all(cell == Cell() for row in grid for cell in row)


@pytest.mark.parametrize("size", [0, 3, -2])
def test_create_empty_grid_rejects_bad_sizes(size):
    with pytest.raises(ValueError):
        engine.create_empty_grid(size)


def test_grid_from_rows_marks_filled_cells_fixed():
    grid = engine.grid_from_rows(["WB", "x."])
    assert grid[0][0] == Cell(TileValue.WHITE, is_fixed=True)
    assert grid[0][1] == Cell(TileValue.BLACK, is_fixed=True)
    assert grid[1][0] == Cell(TileValue.EMPTY, is_fixed=True)
    assert grid[1][1] == Cell(TileValue.EMPTY, is_fixed=False)


def test_unknown_pattern_characters_are_fixed_blanks():
    cell = grid_from_pattern("W x\n. B")[0][1]
    assert cell.value is TileValue.EMPTY
    assert cell.is_fixed


def test_set_cell_returns_new_snapshot():
    before = engine.create_empty_grid()
    after = engine.set_cell(before, 2, 3, TileValue.BLACK)
    assert after is not before
    assert before[2][3].value is TileValue.EMPTY
    assert after[2][3].value is TileValue.BLACK
    # Untouched rows are shared, never copied and never changed.
    assert after[0] is before[0]


def test_set_cell_out_of_bounds():
    with pytest.raises(ValueError):
        engine.set_cell(engine.create_empty_grid(), 6, 0, TileValue.WHITE)


def test_fix_filled_cells():
    grid = engine.set_cell(engine.create_empty_grid(), 0, 0, TileValue.WHITE)
    fixed = engine.fix_filled_cells(grid)
    assert fixed[0][0].is_fixed
    assert not fixed[0][1].is_fixed
    assert not grid[0][0].is_fixed


def test_mark_errors_sets_and_clears_flags():
    grid = engine.create_empty_grid()
    finding = ErrorDetail(kind=ErrorKind.CONSECUTIVE, message="x", indices=((1, 1), (1, 2)))
    marked = engine.mark_errors(grid, [finding])
    assert marked[1][1].is_error and marked[1][2].is_error
    assert not marked[0][0].is_error
    cleared = engine.mark_errors(marked, [])
    assert not any(cell.is_error for row in cleared for cell in row)


def test_tile_cycle():
    assert TileValue.EMPTY.next() is TileValue.WHITE
    assert TileValue.WHITE.next() is TileValue.BLACK
    assert TileValue.BLACK.next() is TileValue.EMPTY


def test_completion_is_independent_of_legality():
    full_illegal = engine.grid_from_rows(["WW", "WW"])
    assert engine.is_complete(full_illegal)
    assert not engine.is_won(full_illegal)

    partial = engine.grid_from_rows(["WB", "B."])
    assert not engine.is_complete(partial)
    assert engine.validate_grid(partial) == []
    assert not engine.is_won(partial)


def test_incomplete_finding_lists_empty_cells():
    grid = engine.grid_from_rows(["WB", "B."])
    finding = engine.incomplete_finding(grid)
    assert finding.kind is ErrorKind.INCOMPLETE
    assert finding.indices == ((1, 1),)
    assert engine.incomplete_finding(engine.grid_from_rows(["WB", "BW"])) is None

"""Rule engine for Takuzu Master.

Rules:
- Board is N×N with N even; coordinates (r, c) from top-left.
- Each row and column holds at most N/2 tiles of each color (the quota).
- No three consecutive equal tiles along a row or column.
- Fully filled rows must be distinct; fully filled columns likewise.
- Win: board full and no rule violated.

Grids are immutable; every change returns a new snapshot.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .i18n import t
from .types import Cell, Coord, ErrorDetail, ErrorKind, Grid, TileValue

BOARD_SIZE = 6

_CHAR_VALUES: Dict[str, TileValue] = {"W": TileValue.WHITE, "B": TileValue.BLACK}

# Neighbour offsets that complete a triple with the candidate: candidate last,
# candidate first, candidate in the middle.
_RUN_WINDOWS: Tuple[Tuple[int, int], ...] = ((-2, -1), (1, 2), (-1, 1))


def _check_size(size: int) -> int:
    if size <= 0 or size % 2:
        raise ValueError(f"board size must be a positive even number, got {size}")
    return size


def _check_coord(grid: Grid, r: int, c: int) -> None:
    size = len(grid)
    if not (0 <= r < size and 0 <= c < size):
        raise ValueError(f"row/col out of bounds: {(r, c)}")


def quota(grid: Grid) -> int:
    """Maximum number of tiles of one color per line."""

    return len(grid) // 2


def create_empty_grid(size: int = BOARD_SIZE) -> Grid:
    """Return a grid with every cell empty, unfixed and error-free."""

    _check_size(size)
    empty = Cell()
    return tuple(tuple(empty for _ in range(size)) for _ in range(size))


def grid_from_rows(rows: Sequence[Sequence[str]]) -> Grid:
    """Build a grid from rows of single characters.

    ``W`` is white, ``B`` is black, anything else is empty. Every character
    other than ``.`` marks a pre-filled cell of the puzzle and comes back
    fixed, even when it maps to empty.
    """

    grid: List[Tuple[Cell, ...]] = []
    for row in rows:
        cells = []
        for char in row:
            value = _CHAR_VALUES.get(char, TileValue.EMPTY)
            cells.append(Cell(value=value, is_fixed=char != "."))
        grid.append(tuple(cells))
    return tuple(grid)


def grid_values(grid: Grid) -> Tuple[Tuple[TileValue, ...], ...]:
    return tuple(tuple(cell.value for cell in row) for row in grid)


def get_value(grid: Grid, r: int, c: int) -> TileValue:
    return grid[r][c].value


def _replace_cell(grid: Grid, r: int, c: int, cell: Cell) -> Grid:
    row = grid[r][:c] + (cell,) + grid[r][c + 1 :]
    return grid[:r] + (row,) + grid[r + 1 :]


def set_cell(grid: Grid, r: int, c: int, value: TileValue) -> Grid:
    """Return a copy of ``grid`` with (r, c) set to ``value``.

    The fixed flag is kept and the error flag is cleared for that cell.
    """

    _check_coord(grid, r, c)
    old = grid[r][c]
    return _replace_cell(grid, r, c, Cell(value=value, is_fixed=old.is_fixed, is_error=False))


def fix_filled_cells(grid: Grid) -> Grid:
    """Lock every non-empty cell; empty cells become editable."""

    return tuple(
        tuple(
            Cell(value=cell.value, is_fixed=cell.value is not TileValue.EMPTY, is_error=cell.is_error)
            for cell in row
        )
        for row in grid
    )


def mark_errors(grid: Grid, findings: Iterable[ErrorDetail]) -> Grid:
    """Return a copy whose ``is_error`` flags match the cells named by ``findings``."""

    flagged: Set[Coord] = set()
    for finding in findings:
        flagged.update(finding.indices)
    return tuple(
        tuple(
            Cell(value=cell.value, is_fixed=cell.is_fixed, is_error=(r, c) in flagged)
            for c, cell in enumerate(row)
        )
        for r, row in enumerate(grid)
    )


def _row(grid: Grid, r: int) -> List[TileValue]:
    return [cell.value for cell in grid[r]]


def _col(grid: Grid, c: int) -> List[TileValue]:
    return [row[c].value for row in grid]


# ---------------------------------------------------------------------------
# Move rule checker
# ---------------------------------------------------------------------------


def violates_run(grid: Grid, r: int, c: int, value: TileValue) -> bool:
    """Whether placing ``value`` at (r, c) makes three equal tiles in a line."""

    if value is TileValue.EMPTY:
        return False
    size = len(grid)
    for a, b in _RUN_WINDOWS:
        if 0 <= c + a < size and 0 <= c + b < size:
            if grid[r][c + a].value is value and grid[r][c + b].value is value:
                return True
    for a, b in _RUN_WINDOWS:
        if 0 <= r + a < size and 0 <= r + b < size:
            if grid[r + a][c].value is value and grid[r + b][c].value is value:
                return True
    return False


def violates_count(grid: Grid, r: int, c: int, value: TileValue) -> bool:
    """Whether placing ``value`` at (r, c) pushes its row or column over quota."""

    if value is TileValue.EMPTY:
        return False
    limit = quota(grid)
    row = _row(grid, r)
    row[c] = value
    if row.count(value) > limit:
        return True
    col = _col(grid, c)
    col[r] = value
    return col.count(value) > limit


def is_legal_move(grid: Grid, r: int, c: int, value: TileValue) -> bool:
    return not violates_run(grid, r, c, value) and not violates_count(grid, r, c, value)


# ---------------------------------------------------------------------------
# Grid validator
# ---------------------------------------------------------------------------


def _line_coords(size: int, index: int, is_row: bool) -> Tuple[Coord, ...]:
    if is_row:
        return tuple((index, j) for j in range(size))
    return tuple((j, index) for j in range(size))


def _count_findings(grid: Grid, lang: str) -> List[ErrorDetail]:
    size = len(grid)
    limit = quota(grid)
    findings: List[ErrorDetail] = []
    for i in range(size):
        for is_row, line in ((True, _row(grid, i)), (False, _col(grid, i))):
            if line.count(TileValue.WHITE) > limit or line.count(TileValue.BLACK) > limit:
                key = "err_count_row" if is_row else "err_count_col"
                findings.append(
                    ErrorDetail(
                        kind=ErrorKind.COUNT,
                        message=t(key, lang).format(line=i + 1, quota=limit),
                        indices=_line_coords(size, i, is_row),
                    )
                )
    return findings


def _consecutive_findings(grid: Grid, lang: str) -> List[ErrorDetail]:
    size = len(grid)
    findings: List[ErrorDetail] = []
    for i in range(size):
        for j in range(size):
            current = grid[i][j].value
            if current is TileValue.EMPTY:
                continue
            if j <= size - 3 and grid[i][j + 1].value is current and grid[i][j + 2].value is current:
                findings.append(
                    ErrorDetail(
                        kind=ErrorKind.CONSECUTIVE,
                        message=t("err_consecutive_row", lang).format(line=i + 1),
                        indices=((i, j), (i, j + 1), (i, j + 2)),
                    )
                )
            if i <= size - 3 and grid[i + 1][j].value is current and grid[i + 2][j].value is current:
                findings.append(
                    ErrorDetail(
                        kind=ErrorKind.CONSECUTIVE,
                        message=t("err_consecutive_col", lang).format(line=j + 1),
                        indices=((i, j), (i + 1, j), (i + 2, j)),
                    )
                )
    return findings


def _duplicate_lines(lines: Sequence[List[TileValue]]) -> List[int]:
    """Indices of fully filled lines whose key appears more than once."""

    seen: Dict[Tuple[TileValue, ...], List[int]] = {}
    for idx, line in enumerate(lines):
        if TileValue.EMPTY in line:
            continue
        seen.setdefault(tuple(line), []).append(idx)
    duplicated: List[int] = []
    for indices in seen.values():
        if len(indices) > 1:
            duplicated.extend(indices)
    return sorted(duplicated)


def _unique_findings(grid: Grid, lang: str) -> List[ErrorDetail]:
    size = len(grid)
    findings: List[ErrorDetail] = []
    dup_rows = _duplicate_lines([_row(grid, i) for i in range(size)])
    if dup_rows:
        coords = tuple(coord for i in dup_rows for coord in _line_coords(size, i, True))
        findings.append(ErrorDetail(kind=ErrorKind.UNIQUE, message=t("err_unique_rows", lang), indices=coords))
    dup_cols = _duplicate_lines([_col(grid, i) for i in range(size)])
    if dup_cols:
        coords = tuple(coord for i in dup_cols for coord in _line_coords(size, i, False))
        findings.append(ErrorDetail(kind=ErrorKind.UNIQUE, message=t("err_unique_cols", lang), indices=coords))
    return findings


def validate_grid(grid: Grid, lang: str = "en") -> List[ErrorDetail]:
    """Return every rule violation in ``grid``.

    Order is count findings, then consecutive findings, then uniqueness
    findings. Overlapping triples each produce their own finding, so a run of
    four equal tiles yields two. Under-filled lines are never flagged.
    """

    findings: List[ErrorDetail] = []
    findings.extend(_count_findings(grid, lang))
    findings.extend(_consecutive_findings(grid, lang))
    findings.extend(_unique_findings(grid, lang))
    return findings


# ---------------------------------------------------------------------------
# Completion / win
# ---------------------------------------------------------------------------


def empty_cells(grid: Grid) -> List[Coord]:
    return [(r, c) for r, row in enumerate(grid) for c, cell in enumerate(row) if cell.value is TileValue.EMPTY]


def is_complete(grid: Grid) -> bool:
    """Whether every cell holds a color, regardless of legality."""

    return all(cell.value is not TileValue.EMPTY for row in grid for cell in row)


def incomplete_finding(grid: Grid, lang: str = "en") -> Optional[ErrorDetail]:
    """An INCOMPLETE finding listing the empty cells, or ``None`` when full."""

    missing = empty_cells(grid)
    if not missing:
        return None
    return ErrorDetail(kind=ErrorKind.INCOMPLETE, message=t("err_incomplete", lang), indices=tuple(missing))


def is_won(grid: Grid) -> bool:
    return is_complete(grid) and not validate_grid(grid)

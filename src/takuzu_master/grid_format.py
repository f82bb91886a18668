"""Plain-text grid notation.

A grid is written as N lines of N space-separated tokens, ``W`` for white,
``B`` for black and ``.`` for empty::

    W . . B . .
    . . B . . W

This is both the preset format and the snapshot handed to the hint service.
Squares are labelled with a column letter and a 1-based row number (``A1`` is
the top-left cell).
"""
from __future__ import annotations

import string
from typing import List, Tuple

from . import engine
from .types import Grid

COLUMNS = string.ascii_uppercase


def rc_to_label(r: int, c: int, size: int = engine.BOARD_SIZE) -> str:
    """Convert 0-based row/col to a square label (e.g., 0,0 -> "A1")."""

    if not (0 <= r < size and 0 <= c < size):
        raise ValueError(f"row/col out of bounds: {(r, c)}")
    return f"{COLUMNS[c]}{r + 1}"


def label_to_rc(label: str, size: int = engine.BOARD_SIZE) -> Tuple[int, int]:
    """Convert a square label (e.g., "C3") to 0-based row/col."""

    if not label or len(label) < 2:
        raise ValueError(f"Invalid square '{label}'")
    col_char = label[0].upper()
    row_part = label[1:]
    if col_char not in COLUMNS[:size]:
        raise ValueError(f"Invalid column in square '{label}'")
    if not row_part.isdigit() or not 1 <= int(row_part) <= size:
        raise ValueError(f"Invalid row in square '{label}'")
    return int(row_part) - 1, COLUMNS.index(col_char)


def parse_pattern(text: str) -> List[List[str]]:
    """Split pattern text into rows of single characters.

    Blank lines are ignored and all whitespace inside a line is dropped, so
    ``"W . B"`` and ``"W.B"`` read the same. Every row must be as long as the
    number of rows.
    """

    rows: List[List[str]] = []
    for raw_line in text.splitlines():
        compact = "".join(raw_line.split())
        if not compact:
            continue
        rows.append(list(compact))
    if not rows:
        raise ValueError("Pattern is empty")
    size = len(rows)
    for idx, row in enumerate(rows, start=1):
        if len(row) != size:
            raise ValueError(f"Pattern row {idx} has {len(row)} cells, expected {size}")
    if size % 2:
        raise ValueError(f"Pattern size must be even, got {size}")
    return rows


def grid_from_pattern(text: str) -> Grid:
    """Parse pattern text into a grid whose filled cells are fixed."""

    return engine.grid_from_rows(parse_pattern(text))


def dump_grid(grid: Grid) -> str:
    """Serialize a grid to pattern text (no trailing newline)."""

    return "\n".join(" ".join(cell.value.symbol for cell in row) for row in grid)

"""Takuzu Master game package."""

from .types import Cell, ClickPolicy, Effect, ErrorDetail, ErrorKind, GamePhase, Grid, Session, StepResult, TileValue
from .engine import (
    BOARD_SIZE,
    create_empty_grid,
    fix_filled_cells,
    grid_from_rows,
    is_complete,
    is_legal_move,
    is_won,
    mark_errors,
    set_cell,
    validate_grid,
    violates_count,
    violates_run,
)
from .game_controller import GameController
from .grid_format import dump_grid, grid_from_pattern
from .hints import GeminiHintProvider, HintConfig, HintProvider, StaticHintProvider
from .puzzles import available_presets, load_preset

__all__ = [
    "BOARD_SIZE",
    "Cell",
    "ClickPolicy",
    "Effect",
    "ErrorDetail",
    "ErrorKind",
    "GameController",
    "GamePhase",
    "GeminiHintProvider",
    "Grid",
    "HintConfig",
    "HintProvider",
    "Session",
    "StaticHintProvider",
    "StepResult",
    "TileValue",
    "available_presets",
    "create_empty_grid",
    "dump_grid",
    "fix_filled_cells",
    "grid_from_pattern",
    "grid_from_rows",
    "is_complete",
    "is_legal_move",
    "is_won",
    "load_preset",
    "mark_errors",
    "set_cell",
    "validate_grid",
    "violates_count",
    "violates_run",
]

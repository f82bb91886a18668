"""Core data structures for Takuzu Master.

Rule reminders:
- Board is N×N (N even, 6 by default) with coordinates (r, c) from top-left.
- Each line holds at most N/2 cells of each color.
- No three equal colors in a row along a line.
- Fully filled rows are pairwise distinct; the same holds for columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


Coord = Tuple[int, int]


class TileValue(Enum):
    """Tri-state cell value."""

    EMPTY = "EMPTY"
    WHITE = "WHITE"
    BLACK = "BLACK"

    def next(self) -> "TileValue":
        """Return the click-cycle successor: EMPTY -> WHITE -> BLACK -> EMPTY."""

        if self is TileValue.EMPTY:
            return TileValue.WHITE
        if self is TileValue.WHITE:
            return TileValue.BLACK
        return TileValue.EMPTY

    @property
    def symbol(self) -> str:
        if self is TileValue.WHITE:
            return "W"
        if self is TileValue.BLACK:
            return "B"
        return "."


@dataclass(frozen=True)
class Cell:
    """A single board cell."""

    value: TileValue = TileValue.EMPTY
    is_fixed: bool = False
    is_error: bool = False


Grid = Tuple[Tuple[Cell, ...], ...]


class ErrorKind(Enum):
    COUNT = "COUNT"
    CONSECUTIVE = "CONSECUTIVE"
    UNIQUE = "UNIQUE"
    INCOMPLETE = "INCOMPLETE"


@dataclass(frozen=True)
class ErrorDetail:
    """A single rule violation found by the validator.

    ``indices`` lists the offending cells; it may be empty.
    """

    kind: ErrorKind
    message: str
    indices: Tuple[Coord, ...] = ()


class GamePhase(Enum):
    SETUP = "SETUP"
    PLAYING = "PLAYING"
    WON = "WON"


class ClickPolicy(Enum):
    """How a cell click is handled during play.

    ``FREE_CYCLE`` always advances the value; mistakes surface on check.
    ``GATED_CYCLE`` refuses placements that break the run or count rule.
    """

    FREE_CYCLE = "free"
    GATED_CYCLE = "gated"


class Effect(Enum):
    """Side-effect requests emitted by controller actions."""

    VIOLATION_ALARM = "violation_alarm"
    SHOW_ERRORS = "show_errors"
    GAME_STARTED = "game_started"
    GAME_WON = "game_won"
    HINT_CLEARED = "hint_cleared"


@dataclass(frozen=True)
class Session:
    """Complete game state: the only thing a controller persists."""

    grid: Grid
    phase: GamePhase = GamePhase.SETUP
    errors: Tuple[ErrorDetail, ...] = ()
    show_errors: bool = False

    @property
    def size(self) -> int:
        return len(self.grid)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one controller action."""

    session: Session
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
    rejected: bool = False

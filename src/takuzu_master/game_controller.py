"""Game controller utilities for UI-driven or scripted play.

Each user action is a pure handler ``(session, ...) -> StepResult`` that
returns the next session plus the side effects a front-end should perform
(alarm, show errors, ...). :class:`GameController` keeps the current session,
dispatches effects to listeners and owns the hint request, so the sequencing
can be tested without driving a GUI.
"""
from __future__ import annotations

import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from . import engine
from .grid_format import dump_grid, grid_from_pattern
from .hints import GeminiHintProvider, HintProvider
from .i18n import t
from .puzzles import load_preset
from .types import ClickPolicy, Effect, ErrorDetail, GamePhase, Grid, Session, StepResult, TileValue

Listener = Callable[[Effect, Session], None]


def new_session(size: int = engine.BOARD_SIZE) -> Session:
    return Session(grid=engine.create_empty_grid(size))


def _gated_value(grid: Grid, r: int, c: int, current: TileValue) -> Tuple[TileValue, bool]:
    """Return ``(value, rejected)`` for a rule-gated click on (r, c)."""

    if current is TileValue.EMPTY:
        if engine.is_legal_move(grid, r, c, TileValue.WHITE):
            return TileValue.WHITE, False
        if engine.is_legal_move(grid, r, c, TileValue.BLACK):
            return TileValue.BLACK, False
        return TileValue.EMPTY, True
    candidate = current.next()
    if engine.is_legal_move(grid, r, c, candidate):
        return candidate, False
    return TileValue.EMPTY, True


def click_cell(session: Session, r: int, c: int, policy: ClickPolicy = ClickPolicy.FREE_CYCLE) -> StepResult:
    """Advance the clicked cell according to ``policy``.

    Setup placement is never gated. During play fixed cells ignore clicks and,
    under ``GATED_CYCLE``, a placement that breaks the run or count rule is
    rejected: the cell ends up empty and an alarm is requested.
    """

    if session.phase is GamePhase.WON:
        return StepResult(session=session)
    grid = session.grid
    if not (0 <= r < session.size and 0 <= c < session.size):
        raise ValueError(f"row/col out of bounds: {(r, c)}")
    cell = grid[r][c]
    if session.phase is GamePhase.PLAYING and cell.is_fixed:
        return StepResult(session=session, effects=(Effect.HINT_CLEARED,))

    rejected = False
    if session.phase is GamePhase.PLAYING and policy is ClickPolicy.GATED_CYCLE:
        value, rejected = _gated_value(grid, r, c, cell.value)
    else:
        value = cell.value.next()

    effects: Tuple[Effect, ...] = (Effect.HINT_CLEARED,)
    if rejected:
        effects = (Effect.VIOLATION_ALARM, Effect.HINT_CLEARED)
    if value is not cell.value:
        grid = engine.set_cell(grid, r, c, value)
    return StepResult(session=replace(session, grid=grid), effects=effects, rejected=rejected)


def start_game(session: Session, lang: str = "en") -> StepResult:
    """Lock the authored position and begin play, unless it already breaks a rule."""

    if session.phase is not GamePhase.SETUP:
        return StepResult(session=session)
    findings = tuple(engine.validate_grid(session.grid, lang))
    if findings:
        grid = engine.mark_errors(session.grid, findings)
        return StepResult(
            session=Session(grid=grid, phase=GamePhase.SETUP, errors=findings, show_errors=True),
            effects=(Effect.SHOW_ERRORS,),
            rejected=True,
        )
    grid = engine.mark_errors(engine.fix_filled_cells(session.grid), ())
    return StepResult(session=Session(grid=grid, phase=GamePhase.PLAYING), effects=(Effect.GAME_STARTED,))


def check_solution(session: Session, lang: str = "en") -> StepResult:
    """Validate the board, flag offending cells and declare a win when solved."""

    findings = tuple(engine.validate_grid(session.grid, lang))
    grid = engine.mark_errors(session.grid, findings)
    phase = session.phase
    effects: List[Effect] = [Effect.SHOW_ERRORS]
    if phase is GamePhase.PLAYING and not findings and engine.is_complete(grid):
        phase = GamePhase.WON
        effects.append(Effect.GAME_WON)
    return StepResult(
        session=Session(grid=grid, phase=phase, errors=findings, show_errors=True),
        effects=tuple(effects),
    )


def reset_game(session: Session) -> StepResult:
    return StepResult(session=new_session(session.size), effects=(Effect.HINT_CLEARED,))


def load_grid(session: Session, grid: Grid) -> StepResult:
    """Replace the board wholesale and return to setup."""

    _ = session
    return StepResult(session=Session(grid=grid), effects=(Effect.HINT_CLEARED,))


class GameController:
    """Manage a single Takuzu game: session, click policy, listeners and hints."""

    def __init__(
        self,
        size: int = engine.BOARD_SIZE,
        policy: ClickPolicy = ClickPolicy.FREE_CYCLE,
        hint_provider: Optional[HintProvider] = None,
        lang: str = "en",
        stderr=None,
        quiet: bool = False,
    ) -> None:
        self.policy = policy
        self.lang = lang
        self.hint_provider = hint_provider if hint_provider is not None else GeminiHintProvider()
        self.stderr = stderr or sys.stderr
        self.quiet = quiet
        self.session: Session = new_session(size)
        self.last_hint: Optional[str] = None
        self._listeners: List[Listener] = []
        self._executor: Optional[ThreadPoolExecutor] = None
        self._hint_lock = threading.Lock()
        self._hint_pending = False

    @property
    def grid(self) -> Grid:
        return self.session.grid

    @property
    def phase(self) -> GamePhase:
        return self.session.phase

    @property
    def errors(self) -> Tuple[ErrorDetail, ...]:
        return self.session.errors

    @property
    def hint_pending(self) -> bool:
        return self._hint_pending

    def _log(self, message: str) -> None:
        if self.quiet:
            return
        print(message, file=self.stderr)
        self.stderr.flush()

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _apply(self, result: StepResult) -> StepResult:
        self.session = result.session
        for effect in result.effects:
            if effect is Effect.HINT_CLEARED:
                self.last_hint = None
            for listener in self._listeners:
                listener(effect, self.session)
        return result

    def set_policy(self, policy: ClickPolicy) -> None:
        self.policy = policy

    def handle_cell_click(self, r: int, c: int) -> StepResult:
        return self._apply(click_cell(self.session, r, c, self.policy))

    def start_game(self) -> StepResult:
        return self._apply(start_game(self.session, self.lang))

    def check_solution(self) -> StepResult:
        return self._apply(check_solution(self.session, self.lang))

    def reset_game(self) -> StepResult:
        return self._apply(reset_game(self.session))

    def new_game(self, size: int) -> StepResult:
        return self._apply(load_grid(self.session, engine.create_empty_grid(size)))

    def load_preset(self, name: str) -> StepResult:
        return self._apply(load_grid(self.session, load_preset(name)))

    def load_pattern(self, text: str) -> StepResult:
        return self._apply(load_grid(self.session, grid_from_pattern(text)))

    def is_won(self) -> bool:
        return self.session.phase is GamePhase.WON

    def snapshot_text(self, grid: Optional[Grid] = None) -> str:
        return dump_grid(self.session.grid if grid is None else grid)

    def _fetch_hint(self, snapshot: str, size: int) -> str:
        try:
            text = self.hint_provider.get_hint(snapshot, size)
        except Exception as exc:  # noqa: BLE001
            self._log(f"Hint fallback due to {exc.__class__.__name__}: {exc}")
            return t("hint_unavailable", self.lang)
        if not text or not text.strip():
            return t("hint_unsure", self.lang)
        return text

    def request_hint(self, grid: Optional[Grid] = None) -> str:
        """Ask the hint provider about ``grid`` (default: current board).

        Provider failures never propagate; a fallback message is returned.
        """

        target = self.session.grid if grid is None else grid
        hint = self._fetch_hint(dump_grid(target), len(target))
        self.last_hint = hint
        return hint

    def request_hint_async(self, callback: Optional[Callable[[str], None]] = None) -> Optional[Future]:
        """Fetch a hint on a worker thread.

        Returns ``None`` without starting anything while another request is
        still pending. ``callback`` runs on the worker thread. The answer only
        becomes ``last_hint`` if the board still matches the snapshot it was
        asked about.
        """

        with self._hint_lock:
            if self._hint_pending:
                return None
            self._hint_pending = True
        snapshot = dump_grid(self.session.grid)
        size = self.session.size
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1)

        def _run() -> str:
            try:
                hint = self._fetch_hint(snapshot, size)
                if dump_grid(self.session.grid) == snapshot:
                    self.last_hint = hint
                else:
                    self._log("Dropping hint for a board that has since changed")
            finally:
                with self._hint_lock:
                    self._hint_pending = False
            if callback is not None:
                callback(hint)
            return hint

        return self._executor.submit(_run)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

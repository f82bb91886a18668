"""Stdio adapter for scripted or terminal play.

The adapter consumes a line-oriented protocol over stdin, one command per
line, and answers on stdout:

    NEW [size]          -> OK SETUP <size>
    PRESET <name>       -> OK SETUP <name>
    POLICY free|gated   -> OK POLICY <policy>
    CLICK <r> <c>       -> OK <square> <W|B|.>  or  REJECTED <square> <W|B|.>
    CLICK <square>         (e.g. CLICK C4)
    START               -> OK PLAYING           or  ERRORS <n> + findings
    CHECK               -> ERRORS <n> + findings, then one of WON, INCOMPLETE <k>
                           or OK SETUP (full legal board, game not started)
    RESET               -> OK SETUP <size>
    SHOW                -> BOARD + one line per row
    HINT                -> HINT <text>

Diagnostics go to stderr unless ``--quiet`` is given. Invalid input stops the
session with ``ERROR <message>`` and exit code 1.
"""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, List, Optional, Tuple

from . import engine
from .game_controller import GameController
from .grid_format import dump_grid, label_to_rc, rc_to_label
from .hints import GeminiHintProvider, HintConfig, HintProvider
from .i18n import available_langs
from .puzzles import available_presets
from .types import ClickPolicy, Effect, ErrorDetail, GamePhase, Session


class AdapterInputError(Exception):
    """Raised when the adapter receives invalid input."""


def _parse_policy(token: str) -> ClickPolicy:
    try:
        return ClickPolicy(token.lower())
    except ValueError as exc:
        raise AdapterInputError(f"Unknown policy '{token}'") from exc


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise AdapterInputError(f"{what} must be an integer") from exc


class StdioAdapter:
    """Line-oriented adapter that plays a game via stdin/stdout."""

    def __init__(
        self,
        *,
        size: int = engine.BOARD_SIZE,
        policy: ClickPolicy = ClickPolicy.FREE_CYCLE,
        hint_provider: Optional[HintProvider] = None,
        lang: str = "en",
        stdin=None,
        stdout=None,
        stderr=None,
        quiet: bool = False,
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.quiet = quiet
        self.controller = GameController(
            size=size,
            policy=policy,
            hint_provider=hint_provider,
            lang=lang,
            stderr=self.stderr,
            quiet=quiet,
        )
        self.controller.add_listener(self._on_effect)

    def _log(self, message: str, *, force: bool = False) -> None:
        if self.quiet and not force:
            return
        print(message, file=self.stderr)
        self.stderr.flush()

    def _emit(self, line: str) -> None:
        print(line, file=self.stdout)
        self.stdout.flush()

    def _on_effect(self, effect: Effect, session: Session) -> None:
        if effect is Effect.VIOLATION_ALARM:
            self._log("ALARM rule violation")
        elif effect is Effect.GAME_WON:
            self._log(f"phase={session.phase.name}")

    def _emit_error_and_exit(self, message: str) -> int:
        self._log(f"ERROR {message}", force=True)
        self._emit(f"ERROR {message}")
        return 1

    def _emit_findings(self, findings: Tuple[ErrorDetail, ...]) -> None:
        self._emit(f"ERRORS {len(findings)}")
        for finding in findings:
            self._emit(f"ERROR {finding.kind.name} {finding.message}")

    def _coord_from_tokens(self, tokens: List[str]) -> Tuple[int, int]:
        size = self.controller.session.size
        if len(tokens) == 2:
            try:
                return label_to_rc(tokens[1], size)
            except ValueError as exc:
                raise AdapterInputError(str(exc)) from exc
        if len(tokens) == 3:
            r = _parse_int(tokens[1], "row")
            c = _parse_int(tokens[2], "col")
            if not (0 <= r < size and 0 <= c < size):
                raise AdapterInputError(f"row/col out of bounds: {(r, c)}")
            return r, c
        raise AdapterInputError("CLICK requires a square or a row and column")

    def _handle_new(self, tokens: List[str]) -> None:
        size = _parse_int(tokens[1], "size") if len(tokens) > 1 else self.controller.session.size
        try:
            self.controller.new_game(size)
        except ValueError as exc:
            raise AdapterInputError(str(exc)) from exc
        self._emit(f"OK SETUP {size}")

    def _handle_preset(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise AdapterInputError(f"PRESET requires one of {', '.join(available_presets())}")
        try:
            self.controller.load_preset(tokens[1])
        except ValueError as exc:
            raise AdapterInputError(str(exc)) from exc
        self._emit(f"OK SETUP {tokens[1].upper()}")

    def _handle_policy(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise AdapterInputError("POLICY requires 'free' or 'gated'")
        policy = _parse_policy(tokens[1])
        self.controller.set_policy(policy)
        self._emit(f"OK POLICY {policy.value}")

    def _handle_click(self, tokens: List[str]) -> None:
        r, c = self._coord_from_tokens(tokens)
        result = self.controller.handle_cell_click(r, c)
        square = rc_to_label(r, c, result.session.size)
        symbol = result.session.grid[r][c].value.symbol
        status = "REJECTED" if result.rejected else "OK"
        self._emit(f"{status} {square} {symbol}")

    def _handle_start(self) -> None:
        result = self.controller.start_game()
        if result.rejected:
            self._emit_findings(result.session.errors)
            return
        self._emit(f"OK {result.session.phase.name}")

    def _handle_check(self) -> None:
        result = self.controller.check_solution()
        session = result.session
        self._emit_findings(session.errors)
        if session.phase is GamePhase.WON:
            self._emit("WON")
        elif not session.errors:
            missing = engine.incomplete_finding(session.grid, self.controller.lang)
            if missing is not None:
                self._emit(f"INCOMPLETE {len(missing.indices)}")
            elif session.phase is GamePhase.SETUP:
                self._emit("OK SETUP")

    def _handle_show(self) -> None:
        self._emit("BOARD")
        for line in dump_grid(self.controller.grid).splitlines():
            self._emit(line)

    def _handle_hint(self) -> None:
        hint = self.controller.request_hint()
        self._emit("HINT " + " ".join(hint.split()))

    def run(self) -> int:
        try:
            for raw_line in self.stdin:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                tokens = line.split()
                cmd = tokens[0].upper()
                if cmd == "NEW":
                    self._handle_new(tokens)
                elif cmd == "PRESET":
                    self._handle_preset(tokens)
                elif cmd == "POLICY":
                    self._handle_policy(tokens)
                elif cmd == "CLICK":
                    self._handle_click(tokens)
                elif cmd == "START":
                    self._handle_start()
                elif cmd == "CHECK":
                    self._handle_check()
                elif cmd == "RESET":
                    self.controller.reset_game()
                    self._emit(f"OK SETUP {self.controller.session.size}")
                elif cmd == "SHOW":
                    self._handle_show()
                elif cmd == "HINT":
                    self._handle_hint()
                else:
                    raise AdapterInputError(f"Unknown command '{cmd}'")
            return 0
        except AdapterInputError as exc:
            return self._emit_error_and_exit(str(exc))


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Stdio adapter for Takuzu Master")
    parser.add_argument("--size", type=int, default=engine.BOARD_SIZE, help="Board size (even)")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ClickPolicy],
        default=ClickPolicy.FREE_CYCLE.value,
        help="Click handling during play",
    )
    parser.add_argument("--lang", choices=available_langs(), default="en")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress stderr diagnostics (protocol still goes to stdout)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    adapter = StdioAdapter(
        size=args.size,
        policy=ClickPolicy(args.policy),
        hint_provider=GeminiHintProvider(HintConfig.from_env()),
        lang=args.lang,
        quiet=args.quiet,
    )
    sys.exit(adapter.run())


if __name__ == "__main__":
    main()

"""Tkinter front-end for Takuzu Master."""
from __future__ import annotations

import argparse
import os
import sys
import time
import tkinter as tk
from concurrent.futures import Future
from tkinter import ttk
from typing import List, Optional

from . import engine
from .game_controller import GameController
from .hints import GeminiHintProvider, HintConfig
from .i18n import available_langs, t
from .puzzles import available_presets
from .types import ClickPolicy, Effect, GamePhase, Session, TileValue
from .ui_contract import CONTROL_CHILD_WIDGETS, REQUIRED_MAPPED_WIDGETS, REQUIRED_WIDGET_ATTRS

CELL_COLORS = {
    "free": "#374151",
    "fixed": "#1f2937",
    "error": "#ef4444",
    "white": "#ffffff",
    "black": "#000000",
    "text_fixed": "#9ca3af",
}

TILE_GLYPH = {
    TileValue.EMPTY: "",
    TileValue.WHITE: "●",
    TileValue.BLACK: "●",
}

HINT_POLL_MS = 100


class TakuzuTkApp:
    """Tkinter UI: board, setup/play controls, presets and AI hints."""

    def __init__(self, lang: str = "en", policy: ClickPolicy = ClickPolicy.FREE_CYCLE, size: int = engine.BOARD_SIZE) -> None:
        self.lang = lang if lang in available_langs() else "en"
        self.root = tk.Tk()
        self.root.title(t("window_title", self.lang))

        self.controller = GameController(
            size=size,
            policy=policy,
            hint_provider=GeminiHintProvider(HintConfig.from_env()),
            lang=self.lang,
        )
        self.controller.add_listener(self._on_effect)

        self.lang_var = tk.StringVar(value=self.lang)
        self.policy_var = tk.StringVar(value=policy.value)
        self.preset_var = tk.StringVar(value=available_presets()[0])
        self.phase_var = tk.StringVar(value="")
        self.status_var = tk.StringVar(value=t("status_ready", self.lang))
        self.hint_var = tk.StringVar(value="")
        self._hint_future: Optional[Future] = None

        self.board_buttons: List[List[tk.Button]] = []
        self._build_layout()
        self._refresh_texts()
        self._refresh_board()
        self._refresh_ui_state()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        contract_errors = self._run_ui_contract_check()
        for err in contract_errors:
            print(f"UI contract error: {err}")

    def _build_layout(self) -> None:
        outer = ttk.Frame(self.root, padding=8)
        outer.grid(row=0, column=0, sticky="nsew")
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        self.subtitle_label = ttk.Label(outer)
        self.subtitle_label.grid(row=0, column=0, columnspan=2, pady=(0, 6))

        self._build_board_area(outer)
        self._build_control_panel(outer)

        status = ttk.Label(outer, textvariable=self.status_var)
        status.grid(row=2, column=0, columnspan=2, sticky="w", pady=(6, 0))
        self.status_label = status

    def _build_board_area(self, parent: ttk.Frame) -> None:
        board_frame = ttk.Frame(parent, padding=6, borderwidth=1, relief=tk.SOLID)
        self.board_frame = board_frame
        board_frame.grid(row=1, column=0, sticky="nsew", padx=8)
        self._populate_board(self.controller.session.size)

    def _populate_board(self, size: int) -> None:
        """(Re)create one button per cell; stale buttons are destroyed first."""

        board_frame = self.board_frame
        old_size = len(self.board_buttons)
        for child in board_frame.winfo_children():
            child.destroy()
        self.board_buttons = []
        for idx in range(size, old_size):
            board_frame.columnconfigure(idx, weight=0, uniform="")
            board_frame.rowconfigure(idx, weight=0, uniform="")
        for idx in range(size):
            board_frame.columnconfigure(idx, weight=1, uniform="board")
            board_frame.rowconfigure(idx, weight=1, uniform="board")
        for r in range(size):
            row_buttons: List[tk.Button] = []
            for c in range(size):
                btn = tk.Button(
                    board_frame,
                    text="",
                    width=3,
                    height=1,
                    font=("DejaVu Sans", 24, "bold"),
                    relief=tk.RAISED,
                    command=lambda rr=r, cc=c: self._on_square_click(rr, cc),
                )
                btn.grid(row=r, column=c, padx=2, pady=2, sticky="nsew")
                row_buttons.append(btn)
            self.board_buttons.append(row_buttons)

    def _build_control_panel(self, parent: ttk.Frame) -> None:
        control_frame = ttk.Frame(parent, padding=4)
        self.control_frame = control_frame
        control_frame.grid(row=1, column=1, sticky="nsew", padx=8)
        control_frame.columnconfigure(0, weight=1)

        self.game_group = ttk.LabelFrame(control_frame, padding=6)
        self.game_group.grid(row=0, column=0, sticky="ew", pady=4)
        ttk.Label(self.game_group, textvariable=self.phase_var).grid(row=0, column=0, sticky="w")
        self.btn_start = ttk.Button(self.game_group, command=self._on_start)
        self.btn_start.grid(row=1, column=0, sticky="ew", pady=2)
        self.btn_check = ttk.Button(self.game_group, command=self._on_check)
        self.btn_check.grid(row=2, column=0, sticky="ew", pady=2)
        self.btn_reset = ttk.Button(self.game_group, command=self._on_reset)
        self.btn_reset.grid(row=3, column=0, sticky="ew", pady=2)

        self.preset_group = ttk.LabelFrame(control_frame, padding=6)
        self.preset_group.grid(row=1, column=0, sticky="ew", pady=4)
        self.cb_preset = ttk.Combobox(
            self.preset_group, textvariable=self.preset_var, values=available_presets(), state="readonly", width=12
        )
        self.cb_preset.grid(row=0, column=0, sticky="ew")
        self.btn_load_preset = ttk.Button(self.preset_group, command=self._on_load_preset)
        self.btn_load_preset.grid(row=0, column=1, padx=4)

        self.policy_group = ttk.LabelFrame(control_frame, padding=6)
        self.policy_group.grid(row=2, column=0, sticky="ew", pady=4)
        self.rb_policy_free = ttk.Radiobutton(
            self.policy_group, variable=self.policy_var, value=ClickPolicy.FREE_CYCLE.value, command=self._on_policy
        )
        self.rb_policy_free.grid(row=0, column=0, sticky="w")
        self.rb_policy_gated = ttk.Radiobutton(
            self.policy_group, variable=self.policy_var, value=ClickPolicy.GATED_CYCLE.value, command=self._on_policy
        )
        self.rb_policy_gated.grid(row=1, column=0, sticky="w")

        self.btn_hint = ttk.Button(control_frame, command=self._on_hint)
        self.btn_hint.grid(row=3, column=0, sticky="ew", pady=4)
        self.hint_title = ttk.Label(control_frame)
        self.hint_title.grid(row=4, column=0, sticky="w")
        self.hint_label = ttk.Label(control_frame, textvariable=self.hint_var, wraplength=240, justify=tk.LEFT)
        self.hint_label.grid(row=5, column=0, sticky="ew")

        self.conflicts_title = ttk.Label(control_frame)
        self.conflicts_title.grid(row=6, column=0, sticky="w", pady=(8, 0))
        self.errors_list = tk.Listbox(control_frame, height=6, width=44)
        self.errors_list.grid(row=7, column=0, sticky="ew")

        lang_row = ttk.Frame(control_frame)
        lang_row.grid(row=8, column=0, sticky="w", pady=(8, 0))
        self.language_label = ttk.Label(lang_row)
        self.language_label.grid(row=0, column=0)
        for idx, code in enumerate(available_langs(), start=1):
            ttk.Radiobutton(
                lang_row, text=code, variable=self.lang_var, value=code, command=self._on_language_changed
            ).grid(row=0, column=idx, padx=2)

    def _run_ui_contract_check(self) -> List[str]:
        errors: List[str] = []
        for attr in REQUIRED_WIDGET_ATTRS:
            if not hasattr(self, attr):
                errors.append(f"missing attribute '{attr}'")
        for _ in range(2):
            self.root.update_idletasks()
            self.root.update()
        for attr in REQUIRED_MAPPED_WIDGETS:
            if not hasattr(self, attr):
                continue
            try:
                mapped = getattr(self, attr).winfo_ismapped()
            except tk.TclError:
                mapped = 0
            if mapped != 1:
                errors.append(f"widget '{attr}' is not mapped")
        control = getattr(self, "control_frame", None)
        if control is not None:
            for attr in CONTROL_CHILD_WIDGETS:
                widget = getattr(self, attr, None)
                if widget is None:
                    continue
                if not str(widget).startswith(str(control)):
                    errors.append(f"widget '{attr}' not under control_frame")
        return errors

    def _refresh_texts(self) -> None:
        self.root.title(t("window_title", self.lang))
        self.subtitle_label.configure(text=t("subtitle", self.lang))
        self.game_group.configure(text=t("game_group", self.lang))
        self.btn_start.configure(text=t("start_game", self.lang))
        self.btn_check.configure(text=t("check_rules", self.lang))
        self.btn_reset.configure(text=t("reset_all", self.lang))
        self.preset_group.configure(text=t("preset_group", self.lang))
        self.btn_load_preset.configure(text=t("load_preset", self.lang))
        self.policy_group.configure(text=t("policy_group", self.lang))
        self.rb_policy_free.configure(text=t("policy_free", self.lang))
        self.rb_policy_gated.configure(text=t("policy_gated", self.lang))
        self.hint_title.configure(text=t("hint_title", self.lang))
        self.conflicts_title.configure(text=t("conflicts_title", self.lang))
        self.language_label.configure(text=t("language_label", self.lang))
        self._refresh_hint_button()

    def _refresh_hint_button(self) -> None:
        key = "hint_pending" if self.controller.hint_pending else "hint_button"
        self.btn_hint.configure(text=t(key, self.lang))

    def _render_cell(self, r: int, c: int) -> None:
        cell = self.controller.grid[r][c]
        show_errors = self.controller.session.show_errors
        bg = CELL_COLORS["fixed"] if cell.is_fixed else CELL_COLORS["free"]
        fg = CELL_COLORS["white"] if cell.value is TileValue.WHITE else CELL_COLORS["black"]
        border = CELL_COLORS["error"] if show_errors and cell.is_error else bg
        self.board_buttons[r][c].configure(
            text=TILE_GLYPH[cell.value],
            background=bg,
            activebackground=bg,
            foreground=fg,
            activeforeground=fg,
            highlightthickness=3 if show_errors and cell.is_error else 0,
            highlightbackground=border,
            relief=tk.SUNKEN if cell.is_fixed else tk.RAISED,
        )

    def _refresh_board(self) -> None:
        size = self.controller.session.size
        for r in range(size):
            for c in range(size):
                self._render_cell(r, c)

    def _refresh_errors(self) -> None:
        self.errors_list.delete(0, tk.END)
        session = self.controller.session
        if not session.show_errors:
            return
        for finding in session.errors:
            self.errors_list.insert(tk.END, finding.message)

    def _set_widget_state(self, widget, enabled: bool) -> None:
        widget.state(["!disabled"] if enabled else ["disabled"])

    def _refresh_ui_state(self) -> None:
        phase = self.controller.phase
        self.phase_var.set(t(f"phase_{phase.name}", self.lang))
        self._set_widget_state(self.btn_start, phase is GamePhase.SETUP)
        self._set_widget_state(self.btn_check, phase is GamePhase.PLAYING)
        self._set_widget_state(self.btn_hint, phase is GamePhase.PLAYING and not self.controller.hint_pending)
        self._refresh_hint_button()
        self._refresh_errors()

    def _on_effect(self, effect: Effect, session: Session) -> None:
        if effect is Effect.VIOLATION_ALARM:
            self.root.bell()
            self.status_var.set(t("status_rejected", self.lang))
        elif effect is Effect.HINT_CLEARED:
            self.hint_var.set("")
        elif effect is Effect.GAME_STARTED:
            self.status_var.set(t("status_started", self.lang))
        elif effect is Effect.GAME_WON:
            self.status_var.set(t("solved", self.lang))
        elif effect is Effect.SHOW_ERRORS:
            if session.errors and session.phase is GamePhase.SETUP:
                self.status_var.set(t("status_fix_setup", self.lang))
            elif session.errors:
                self.status_var.set(t("status_errors", self.lang).format(count=len(session.errors)))
            elif not engine.is_complete(session.grid):
                self.status_var.set(t("status_incomplete", self.lang))
            else:
                self.status_var.set(t("status_no_errors", self.lang))

    def _after_action(self) -> None:
        if self.controller.session.size != len(self.board_buttons):
            self._populate_board(self.controller.session.size)
        self._refresh_board()
        self._refresh_ui_state()

    def _on_square_click(self, r: int, c: int) -> None:
        self.controller.handle_cell_click(r, c)
        self._after_action()

    def _on_start(self) -> None:
        self.controller.start_game()
        self._after_action()

    def _on_check(self) -> None:
        self.controller.check_solution()
        self._after_action()

    def _on_reset(self) -> None:
        self.controller.reset_game()
        self.status_var.set(t("status_ready", self.lang))
        self._after_action()

    def _on_load_preset(self) -> None:
        name = self.preset_var.get()
        try:
            self.controller.load_preset(name)
        except ValueError as exc:
            self.status_var.set(t("status_error_prefix", self.lang).format(msg=exc))
            return
        label = t(f"preset_{name}", self.lang)
        self.status_var.set(t("status_preset_loaded", self.lang).format(name=label))
        self._after_action()

    def _on_policy(self) -> None:
        self.controller.set_policy(ClickPolicy(self.policy_var.get()))

    def _on_language_changed(self) -> None:
        self.lang = self.lang_var.get()
        self.controller.lang = self.lang
        self._refresh_texts()
        self._refresh_ui_state()

    def _on_hint(self) -> None:
        future = self.controller.request_hint_async()
        if future is None:
            return
        self._hint_future = future
        self._refresh_ui_state()
        self.root.after(HINT_POLL_MS, self._poll_hint)

    def _poll_hint(self) -> None:
        future = self._hint_future
        if future is None:
            return
        if not future.done():
            self.root.after(HINT_POLL_MS, self._poll_hint)
            return
        self._hint_future = None
        future.result()
        # None when the board changed while the request was in flight.
        self.hint_var.set(self.controller.last_hint or "")
        self._refresh_ui_state()

    def _on_close(self) -> None:
        self.controller.close()
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Takuzu Master Tkinter UI")
    parser.add_argument("--lang", choices=available_langs(), default="en")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ClickPolicy],
        default=ClickPolicy.FREE_CYCLE.value,
    )
    parser.add_argument("--size", type=int, default=engine.BOARD_SIZE)
    parser.add_argument("--preset", choices=available_presets(), help="load a built-in puzzle on start")
    parser.add_argument("--self-check", action="store_true", help="run UI contract self-check and exit")
    args = parser.parse_args()
    if args.self_check and os.environ.get("DISPLAY") is None:
        print("UI_SELF_CHECK_SKIP: DISPLAY not set")
        sys.exit(0)

    app = TakuzuTkApp(lang=args.lang, policy=ClickPolicy(args.policy), size=args.size)
    if args.preset:
        app.preset_var.set(args.preset)
        app._on_load_preset()
    if args.self_check:
        for _ in range(50):
            app.root.update_idletasks()
            app.root.update()
            time.sleep(0.01)
        errors = app._run_ui_contract_check()
        if errors:
            print("UI_SELF_CHECK_FAIL")
            for err in errors:
                print(err)
            app._on_close()
            sys.exit(1)
        print("UI_SELF_CHECK_PASS")
        app._on_close()
        sys.exit(0)

    app.run()


if __name__ == "__main__":
    main()

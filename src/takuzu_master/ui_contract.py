"""UI contract constants to ensure essential widgets remain available."""

from __future__ import annotations

from typing import List

REQUIRED_WIDGET_ATTRS: List[str] = [
    "board_frame",
    "control_frame",
    "btn_start",
    "btn_check",
    "btn_reset",
    "cb_preset",
    "btn_load_preset",
    "rb_policy_free",
    "rb_policy_gated",
    "btn_hint",
    "errors_list",
    "hint_label",
]

CONTROL_CHILD_WIDGETS: List[str] = [
    "btn_start",
    "btn_check",
    "btn_reset",
    "cb_preset",
    "btn_hint",
]

REQUIRED_MAPPED_WIDGETS: List[str] = [
    "board_frame",
    "control_frame",
    "btn_reset",
    "cb_preset",
    "btn_hint",
]

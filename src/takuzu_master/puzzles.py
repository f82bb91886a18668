"""Built-in 6×6 starting positions."""
from __future__ import annotations

import textwrap
from typing import Dict, List

from .grid_format import grid_from_pattern
from .types import Grid

PRESET_PATTERNS: Dict[str, str] = {
    "EASY": """
        W . . B . .
        . . B . . W
        . W . . W .
        B . . B . .
        . . W . . B
        W . . . B .
    """,
    "MEDIUM": """
        . . B . . .
        W . . . B .
        . . . W . .
        . B . . . W
        . . . . B .
        B . W . . .
    """,
    "HARD": """
        . . . . . W
        . B . . . .
        . . . . W .
        . . B . . .
        W . . . . .
        . . . B . .
    """,
    "EXPERT": """
        . . . B . .
        . . . . . .
        W . . . . .
        . . . . . B
        . . . . . .
        . . W . . .
    """,
}


def available_presets() -> List[str]:
    return list(PRESET_PATTERNS.keys())


def load_preset(name: str) -> Grid:
    """Return a fresh grid for the named preset (case-insensitive)."""

    key = name.strip().upper()
    if key not in PRESET_PATTERNS:
        raise ValueError(f"Unknown preset '{name}'")
    return grid_from_pattern(textwrap.dedent(PRESET_PATTERNS[key]))

"""Simple bilingual strings for validator messages and the front-ends."""
from __future__ import annotations

from typing import Dict, List

LANG_ES: Dict[str, str] = {
    "window_title": "Takuzu Master",
    "subtitle": "Lógica 6x6 - Colores iguales - Máx. 2 adyacentes - Líneas únicas",
    "language_label": "Idioma",
    "game_group": "Partida",
    "phase_SETUP": "Modo preparación",
    "phase_PLAYING": "Jugando",
    "phase_WON": "¡Has ganado!",
    "setup_help": "Coloca las fichas iniciales para crear tu puzle y empieza.",
    "start_game": "Empezar",
    "check_rules": "Comprobar reglas",
    "reset_all": "Reiniciar todo",
    "preset_group": "Puzles",
    "load_preset": "Cargar",
    "preset_EASY": "Fácil",
    "preset_MEDIUM": "Medio",
    "preset_HARD": "Difícil",
    "preset_EXPERT": "Experto",
    "policy_group": "Clics",
    "policy_free": "Ciclo libre",
    "policy_gated": "Ciclo con reglas",
    "hint_button": "Pista del Maestro IA",
    "hint_pending": "Pensando...",
    "hint_title": "Consejo IA",
    "conflicts_title": "Conflictos encontrados:",
    "solved": "¡PUZLE RESUELTO!",
    "legend_white": "Ficha blanca",
    "legend_black": "Ficha negra",
    "status_ready": "Listo",
    "status_started": "Partida iniciada",
    "status_fix_setup": "Corrige los conflictos antes de empezar",
    "status_errors": "{count} conflicto(s)",
    "status_no_errors": "Sin conflictos por ahora",
    "status_incomplete": "Sin conflictos, pero faltan casillas",
    "status_rejected": "Movimiento no permitido",
    "status_preset_loaded": "Puzle cargado: {name}",
    "status_error_prefix": "Error: {msg}",
    "err_count_row": "La fila {line} tiene más de {quota} fichas de un color.",
    "err_count_col": "La columna {line} tiene más de {quota} fichas de un color.",
    "err_consecutive_row": "Hay 3 fichas iguales seguidas en la fila {line}.",
    "err_consecutive_col": "Hay 3 fichas iguales seguidas en la columna {line}.",
    "err_unique_rows": "Al menos dos filas son idénticas.",
    "err_unique_cols": "Al menos dos columnas son idénticas.",
    "err_incomplete": "El tablero aún tiene casillas vacías.",
    "hint_unsure": "No estoy seguro de cuál es el siguiente movimiento, ¡sigue intentándolo!",
    "hint_unavailable": "El Maestro IA está durmiendo ahora mismo. ¡Revisa las reglas tú mismo!",
}

LANG_EN: Dict[str, str] = {
    "window_title": "Takuzu Master",
    "subtitle": "6x6 Logic Puzzle - Equal Colors - Max 2 Adjacent - Unique Lines",
    "language_label": "Language",
    "game_group": "Game",
    "phase_SETUP": "Setup Mode",
    "phase_PLAYING": "Playing",
    "phase_WON": "You Won!",
    "setup_help": "Place initial pieces to create your puzzle, then start.",
    "start_game": "Start Game",
    "check_rules": "Check Rules",
    "reset_all": "Reset All",
    "preset_group": "Puzzles",
    "load_preset": "Load",
    "preset_EASY": "Easy",
    "preset_MEDIUM": "Medium",
    "preset_HARD": "Hard",
    "preset_EXPERT": "Expert",
    "policy_group": "Clicks",
    "policy_free": "Free cycle",
    "policy_gated": "Rule-gated cycle",
    "hint_button": "AI Master Hint",
    "hint_pending": "Thinking...",
    "hint_title": "AI Advice",
    "conflicts_title": "Conflicts Found:",
    "solved": "PUZZLE SOLVED!",
    "legend_white": "White tile",
    "legend_black": "Black tile",
    "status_ready": "Ready",
    "status_started": "Game started",
    "status_fix_setup": "Fix the conflicts before starting",
    "status_errors": "{count} conflict(s)",
    "status_no_errors": "No conflicts so far",
    "status_incomplete": "No conflicts, but the board is not full yet",
    "status_rejected": "Move not allowed",
    "status_preset_loaded": "Puzzle loaded: {name}",
    "status_error_prefix": "Error: {msg}",
    "err_count_row": "Row {line} has more than {quota} tiles of one color.",
    "err_count_col": "Column {line} has more than {quota} tiles of one color.",
    "err_consecutive_row": "There are 3 equal tiles in a row in row {line}.",
    "err_consecutive_col": "There are 3 equal tiles in a row in column {line}.",
    "err_unique_rows": "At least two rows are identical.",
    "err_unique_cols": "At least two columns are identical.",
    "err_incomplete": "The board still has empty cells.",
    "hint_unsure": "I'm not sure what the next move is, keep trying!",
    "hint_unavailable": "The AI Master is sleeping right now. Check the rules yourself!",
}


_LANG_MAP: Dict[str, Dict[str, str]] = {"en": LANG_EN, "es": LANG_ES}


def t(key: str, lang: str) -> str:
    """Translate a key for the provided language or raise when missing."""

    if lang not in _LANG_MAP:
        raise ValueError(f"Unsupported language '{lang}'")
    table = _LANG_MAP[lang]
    if key not in table:
        raise ValueError(f"Missing translation for key '{key}'")
    return table[key]


def available_langs() -> List[str]:
    return list(_LANG_MAP.keys())

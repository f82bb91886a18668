"""Hint providers.

A provider receives a read-only text snapshot of the board (see
:mod:`takuzu_master.grid_format`) and answers with a short natural-language
suggestion. Providers may raise; the controller falls back to a static
message when they do.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
SYSTEM_INSTRUCTION = "You are a friendly Takuzu Master helping a player. Be concise."

PROMPT_TEMPLATE = """Analyze this {size}x{size} Takuzu (Binairo) puzzle grid.
W = White, B = Black, . = Empty.
Rules:
1. Each row and column must have exactly {quota} W and {quota} B.
2. No more than two consecutive cells can have the same color.
3. Every row and column must be unique.

Current Grid:
{grid}

Task: Find ONE logical next move. Explain the rule used (e.g., "In row 2, there are already two B together, so the next must be W").
Keep the answer short, encouraging and helpful.
"""


class HintUnavailableError(Exception):
    """Raised when a provider cannot produce a hint at all."""


@dataclass
class HintConfig:
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    endpoint: str = DEFAULT_ENDPOINT
    temperature: float = 0.7
    timeout_s: float = 15.0

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "HintConfig":
        """Read ``GEMINI_API_KEY`` (or ``API_KEY``), ``TAKUZU_HINT_MODEL`` and ``TAKUZU_HINT_TIMEOUT``."""

        env = os.environ if environ is None else environ
        timeout_raw = env.get("TAKUZU_HINT_TIMEOUT")
        try:
            timeout_s = float(timeout_raw) if timeout_raw else cls.timeout_s
        except ValueError as exc:
            raise ValueError(f"TAKUZU_HINT_TIMEOUT must be a number, got '{timeout_raw}'") from exc
        return cls(
            api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
            model=env.get("TAKUZU_HINT_MODEL") or DEFAULT_MODEL,
            timeout_s=timeout_s,
        )


def build_prompt(grid_text: str, size: int) -> str:
    return PROMPT_TEMPLATE.format(size=size, quota=size // 2, grid=grid_text)


class HintProvider:
    """Base class for hint providers."""

    def get_hint(self, grid_text: str, size: int) -> str:  # noqa: D401
        """Return a hint for the given board snapshot."""

        raise NotImplementedError


class StaticHintProvider(HintProvider):
    """Provider that always answers with the same text."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def get_hint(self, grid_text: str, size: int) -> str:
        _ = grid_text, size
        return self.text


class GeminiHintProvider(HintProvider):
    """Ask the Google Generative Language REST API for a hint."""

    def __init__(self, config: Optional[HintConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or HintConfig.from_env()
        self.session = session

    def _url(self) -> str:
        return f"{self.config.endpoint.rstrip('/')}/models/{self.config.model}:generateContent"

    def _payload(self, grid_text: str, size: int) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": build_prompt(grid_text, size)}]}],
            "generationConfig": {"temperature": self.config.temperature},
        }

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts).strip()

    def get_hint(self, grid_text: str, size: int) -> str:
        if not self.config.api_key:
            raise HintUnavailableError("no API key configured (set GEMINI_API_KEY)")
        post = self.session.post if self.session is not None else requests.post
        response = post(
            self._url(),
            headers={"x-goog-api-key": self.config.api_key, "Content-Type": "application/json"},
            json=self._payload(grid_text, size),
            timeout=self.config.timeout_s,
        )
        response.raise_for_status()
        return self._extract_text(response.json())

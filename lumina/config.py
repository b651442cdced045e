"""
config.py — Runtime settings loaded from the environment / .env.

Required env vars (in .env):
    GEMINI_API_KEY=...

Optional:
    LUMINA_STRATEGY_MODEL=gemini-3-pro-preview
    LUMINA_IMAGE_MODEL=gemini-2.5-flash-image
    LUMINA_CHAT_MODEL=gemini-3-pro-preview
    LUMINA_THINKING_BUDGET=2048
    LUMINA_MAX_OUTPUT_TOKENS=8192
    LUMINA_REQUEST_TIMEOUT=90        # seconds per Gemini request
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv
from google import genai
from google.genai import types

from .errors import ConfigurationError

DEFAULT_STRATEGY_MODEL = "gemini-3-pro-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_CHAT_MODEL = "gemini-3-pro-preview"


@dataclass(frozen=True)
class Settings:
    api_key: str = field(repr=False)
    strategy_model: str = DEFAULT_STRATEGY_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    chat_model: str = DEFAULT_CHAT_MODEL
    thinking_budget: int = 2048
    max_output_tokens: int = 8192
    request_timeout: Optional[float] = None   # seconds; None = client default

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv: bool = True,
    ) -> "Settings":
        """Build settings from ``environ`` (defaults to os.environ, after loading .env)."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        api_key = environ.get("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY not set.",
                details="Create a .env file from .env.example and add your key.",
            )

        timeout_raw = environ.get("LUMINA_REQUEST_TIMEOUT", "").strip()
        return cls(
            api_key=api_key,
            strategy_model=environ.get("LUMINA_STRATEGY_MODEL") or DEFAULT_STRATEGY_MODEL,
            image_model=environ.get("LUMINA_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
            chat_model=environ.get("LUMINA_CHAT_MODEL") or DEFAULT_CHAT_MODEL,
            thinking_budget=_int_setting(environ, "LUMINA_THINKING_BUDGET", 2048),
            max_output_tokens=_int_setting(environ, "LUMINA_MAX_OUTPUT_TOKENS", 8192),
            request_timeout=_float(timeout_raw, "LUMINA_REQUEST_TIMEOUT") if timeout_raw else None,
        )

    def make_client(self) -> genai.Client:
        if self.request_timeout is None:
            return genai.Client(api_key=self.api_key)
        # HttpOptions.timeout is in milliseconds
        return genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(self.request_timeout * 1000)),
        )


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer", details=f"got {raw!r}") from None
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative", details=f"got {value}")
    return value


def _float(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number", details=f"got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive", details=f"got {value}")
    return value

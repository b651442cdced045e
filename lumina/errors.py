"""
errors.py — Exception hierarchy for Lumina.

  LuminaError
    ├── ConfigurationError    missing API key / bad numeric setting
    ├── InputValidationError  blank mission, prompt or chat message (no remote call made)
    └── GenerationError       any Gemini call failure: transport, empty payload,
                              or output that does not match the schema
"""

from __future__ import annotations

from typing import Optional


class LuminaError(Exception):
    """Base exception. ``message`` is safe to show to the user."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class ConfigurationError(LuminaError):
    pass


class InputValidationError(LuminaError, ValueError):
    pass


class GenerationError(LuminaError):
    pass

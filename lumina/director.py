"""
Director — uses Gemini to turn a company mission into one brand strategy.

The strategy includes:
  - A 5-color palette (hex, creative name, usage note)
  - A Google Fonts typography pairing with reasoning
  - Image prompts for the primary logo and a simplified secondary mark
  - A short brand voice description

The response is requested as JSON against the BrandStrategy schema and
validated again locally; anything that doesn't fit becomes GenerationError.
"""

from __future__ import annotations

import logging
from typing import Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from .config import Settings
from .errors import GenerationError, InputValidationError
from .models import PALETTE_SIZE, BrandStrategy

logger = logging.getLogger(__name__)


# ── Prompt ────────────────────────────────────────────────────────────────────

STRATEGY_PROMPT_TEMPLATE = """\
You are a world-class Brand Identity Expert.
Analyze the following company mission statement and create a cohesive brand identity foundation.

MISSION:
"{mission}"

Generate:
1. A {palette_size}-color palette (Hex codes, creative names, usage notes).
2. A typography pairing using Google Fonts (Header + Body). Use two different families.
3. Detailed image generation prompts for a Primary Logo and a Secondary Mark. The prompts should be descriptive enough for a high-quality image generator.
4. A brief description of the brand voice.
"""


def validate_mission(mission: str) -> str:
    """Return the mission unchanged, or raise if it is blank."""
    if not mission or not mission.strip():
        raise InputValidationError("Please describe your company mission first.")
    return mission


def build_strategy_prompt(mission: str) -> str:
    return STRATEGY_PROMPT_TEMPLATE.format(mission=mission, palette_size=PALETTE_SIZE)


# ── Director ──────────────────────────────────────────────────────────────────

class StrategyDirector:
    """Single-shot strategy generation. No retries: any failure is final for the run."""

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.settings = settings
        self.client = client or settings.make_client()

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=BrandStrategy,
            thinking_config=types.ThinkingConfig(
                thinking_budget=self.settings.thinking_budget,
            ),
            max_output_tokens=self.settings.max_output_tokens,
        )

    def generate(self, mission: str) -> BrandStrategy:
        validate_mission(mission)
        logger.info("Drafting brand strategy with %s", self.settings.strategy_model)
        logger.debug("Mission: %s", mission)

        try:
            response = self.client.models.generate_content(
                model=self.settings.strategy_model,
                contents=build_strategy_prompt(mission),
                config=self._config(),
            )
        except Exception as e:
            logger.warning("Strategy request failed: %s", e)
            raise GenerationError(
                "Failed to draft a brand strategy. Please try again.",
                details=f"{type(e).__name__}: {e}",
            ) from e

        text = response.text
        if not text:
            raise GenerationError("No response from strategy generation")

        strategy = parse_strategy(text)
        logger.info(
            "Strategy ready: %d colors, %s / %s",
            len(strategy.colors),
            strategy.typography.header_font,
            strategy.typography.body_font,
        )
        return strategy


def parse_strategy(text: str) -> BrandStrategy:
    """Validate raw JSON text against the strategy schema."""
    try:
        return BrandStrategy.model_validate_json(text)
    except ValidationError as e:
        logger.warning("Strategy output did not match schema (%d error(s))", e.error_count())
        raise GenerationError(
            "The strategy response was malformed. Please try again.",
            details=str(e),
        ) from e

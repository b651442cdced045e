"""
models.py — Brand identity data model.

  ColorSwatch / Typography / LogoPrompts / BrandStrategy
      Pydantic schema sent to Gemini as the structured-output contract,
      and used to validate whatever comes back.

  BrandIdentity   — mission + strategy + the two rendered logo images
  ChatMessage     — one turn in the brand assistant transcript
  LogoSlot        — which of the two logo images a regeneration targets
  GenerationStage — orchestration progress states with UI labels
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

PALETTE_SIZE = 5

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")
_RGB_RE = re.compile(r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+%?\s*)?\)$", re.I)


# ── Strategy schema (structured Gemini output) ───────────────────────────────

class ColorSwatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    hex: str = Field(description="Hex color code e.g. #FF5733")
    name: str = Field(description="Creative name for the color, e.g. 'Roasted Ember'")
    usage: str = Field(description="When to use this color (Primary, Accent, Background)")

    @field_validator("hex")
    @classmethod
    def _normalize_hex(cls, value: str) -> str:
        """Coerce to #RRGGBB. Alpha channels are dropped."""
        text = value.strip()
        rgb = _RGB_RE.match(text)
        if rgb:
            channels = [int(c) for c in rgb.groups()]
            if any(c > 255 for c in channels):
                raise ValueError(f"rgb channel out of range: {value!r}")
            return "#" + "".join(f"{c:02X}" for c in channels)

        match = _HEX_RE.match(text)
        if not match:
            raise ValueError(f"not a hex color: {value!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits[:6].upper()}"


class Typography(BaseModel):
    model_config = ConfigDict(frozen=True)

    header_font: str = Field(description="Name of a popular Google Font for headers")
    body_font: str = Field(description="Name of a popular Google Font for body text")
    reasoning: str = Field(description="Why this pairing fits the brand")


class LogoPrompts(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str = Field(
        description=(
            "A highly detailed, artistic image generation prompt for the primary logo. "
            "Mention style, colors, and key symbols."
        )
    )
    secondary: str = Field(
        description="A detailed image generation prompt for a simplified secondary mark or icon."
    )

    @field_validator("primary", "secondary")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("logo prompt must not be empty")
        return value


class BrandStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    colors: List[ColorSwatch] = Field(description="A 5-color palette")
    typography: Typography
    logo_prompts: LogoPrompts
    brand_voice: Optional[str] = Field(
        default=None,
        description="A short description of the brand's personality and voice.",
    )

    @field_validator("colors")
    @classmethod
    def _check_palette(cls, value: List[ColorSwatch]) -> List[ColorSwatch]:
        if not value:
            raise ValueError("palette must contain at least one color")
        if len(value) != PALETTE_SIZE:
            logger.warning(
                "Palette has %d colors (expected %d)", len(value), PALETTE_SIZE
            )
        return value

    def color_names(self) -> List[str]:
        return [c.name for c in self.colors]


# ── Logo slots ────────────────────────────────────────────────────────────────

class LogoSlot(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def label(self) -> str:
        return "Primary Logo" if self is LogoSlot.PRIMARY else "Secondary Mark"

    @property
    def field_name(self) -> str:
        """Attribute on BrandIdentity that holds this slot's image."""
        return "primary_logo_url" if self is LogoSlot.PRIMARY else "secondary_mark_url"

    def prompt_for(self, strategy: BrandStrategy) -> str:
        return getattr(strategy.logo_prompts, self.value)


# ── Identity ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BrandIdentity:
    """Output bundle of one generation run. Replaced wholesale on a new run."""
    mission: str
    strategy: Optional[BrandStrategy] = None
    primary_logo_url: Optional[str] = None    # data:image/...;base64,...
    secondary_mark_url: Optional[str] = None

    def image_for(self, slot: LogoSlot) -> Optional[str]:
        return getattr(self, slot.field_name)

    def with_image(self, slot: LogoSlot, url: str) -> "BrandIdentity":
        """Copy with only ``slot`` replaced; mission, strategy and the other slot carry over."""
        return replace(self, **{slot.field_name: url})

    def is_complete(self) -> bool:
        return bool(self.strategy and self.primary_logo_url and self.secondary_mark_url)


# ── Chat ──────────────────────────────────────────────────────────────────────

def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["user", "model"]
    text: str
    timestamp: int  # epoch millis

    @classmethod
    def user(cls, text: str) -> "ChatMessage":
        return cls(role="user", text=text, timestamp=now_ms())

    @classmethod
    def model(cls, text: str) -> "ChatMessage":
        return cls(role="model", text=text, timestamp=now_ms())


# ── Orchestration progress ────────────────────────────────────────────────────

class GenerationStage(Enum):
    IDLE = "idle"
    STRATEGIZING = "strategizing"
    RENDERING_PRIMARY = "rendering_primary"
    RENDERING_SECONDARY = "rendering_secondary"
    DONE = "done"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]

    @property
    def is_busy(self) -> bool:
        return self in (
            GenerationStage.STRATEGIZING,
            GenerationStage.RENDERING_PRIMARY,
            GenerationStage.RENDERING_SECONDARY,
        )


_STAGE_LABELS = {
    GenerationStage.IDLE: "",
    GenerationStage.STRATEGIZING: "Drafting Brand Strategy...",
    GenerationStage.RENDERING_PRIMARY: "Rendering Primary Logo...",
    GenerationStage.RENDERING_SECONDARY: "Rendering Secondary Mark...",
    GenerationStage.DONE: "Brand identity ready.",
    GenerationStage.FAILED: "Failed to generate brand identity. Please try again.",
}

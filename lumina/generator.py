"""
Generator — uses Gemini image models to render square logo images.

  render(prompt)                → data URI for one 1:1 image
  render_slot(strategy, slot)   → same, for the primary logo or secondary mark prompt

Every call is a fresh, independent request: the same prompt is expected to
produce a different image each time, which is what regeneration relies on.
"""

from __future__ import annotations

import base64
import logging
from typing import Optional

from google import genai
from google.genai import types

from .config import Settings
from .errors import GenerationError, InputValidationError
from .models import BrandStrategy, LogoSlot

logger = logging.getLogger(__name__)

LOGO_ASPECT_RATIO = "1:1"
DEFAULT_MIME = "image/png"


def to_data_uri(data, mime_type: Optional[str] = None) -> str:
    """Inline image payload → ``data:<mime>;base64,<payload>``.

    The SDK normally hands back raw bytes; a str payload is already base64.
    """
    if isinstance(data, str):
        encoded = data
    else:
        encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME};base64,{encoded}"


def extract_image(response) -> Optional[str]:
    """Return the first inline image in ``response`` as a data URI, or None."""
    for candidate in response.candidates or []:
        content = candidate.content
        if content is None:
            continue
        for part in content.parts or []:
            inline = getattr(part, "inline_data", None)
            if inline and inline.data:
                return to_data_uri(inline.data, inline.mime_type)
    return None


class LogoRenderer:
    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.settings = settings
        self.client = client or settings.make_client()

    def render(self, prompt: str) -> str:
        if not prompt or not prompt.strip():
            raise InputValidationError("Logo prompt must not be empty.")

        logger.info("Rendering logo with %s", self.settings.image_model)
        try:
            response = self.client.models.generate_content(
                model=self.settings.image_model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"],
                    image_config=types.ImageConfig(aspect_ratio=LOGO_ASPECT_RATIO),
                ),
            )
        except Exception as e:
            logger.warning("Logo request failed: %s", e)
            raise GenerationError(
                "Failed to generate image",
                details=f"{type(e).__name__}: {e}",
            ) from e

        uri = extract_image(response)
        if uri is None:
            logger.warning("No image returned for logo prompt")
            raise GenerationError("Failed to generate image", details="response had no inline image data")
        return uri

    def render_slot(self, strategy: BrandStrategy, slot: LogoSlot) -> str:
        logger.debug("Rendering %s", slot.label)
        return self.render(slot.prompt_for(strategy))

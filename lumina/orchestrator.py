"""
Orchestrator — turns one mission into a complete BrandIdentity.

Pipeline steps (strictly sequential so each one can report progress):
  1. Validate mission                       (no remote call if blank)
  2. Draft strategy             STRATEGIZING
  3. Re-seed the brand assistant with the new strategy
  4. Render primary logo        RENDERING_PRIMARY
  5. Render secondary mark      RENDERING_SECONDARY
  6. Assemble identity          DONE

Any GenerationError aborts the whole run (FAILED): no partial identity is
returned and the previously held identity stays current.

Regeneration re-renders one slot of the current identity and swaps only that
slot in; it never touches the strategy, the mission or the other slot.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from google import genai

from .assistant import BrandAssistant
from .config import Settings
from .director import StrategyDirector, validate_mission
from .errors import GenerationError
from .generator import LogoRenderer
from .models import BrandIdentity, BrandStrategy, GenerationStage, LogoSlot

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[GenerationStage], None]


class IdentityOrchestrator:
    def __init__(
        self,
        director: StrategyDirector,
        renderer: LogoRenderer,
        assistant: BrandAssistant,
    ) -> None:
        self.director = director
        self.renderer = renderer
        self.assistant = assistant
        self.stage = GenerationStage.IDLE
        self._current: Optional[BrandIdentity] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[genai.Client] = None) -> "IdentityOrchestrator":
        """Wire director, renderer and assistant around one shared Gemini client."""
        client = client or settings.make_client()
        return cls(
            director=StrategyDirector(settings, client=client),
            renderer=LogoRenderer(settings, client=client),
            assistant=BrandAssistant(settings, client=client),
        )

    @property
    def current(self) -> Optional[BrandIdentity]:
        """The identity on display: last successful run plus any regenerations."""
        return self._current

    def _advance(self, stage: GenerationStage, on_progress: Optional[ProgressCallback]) -> None:
        self.stage = stage
        logger.info("Stage → %s", stage.value)
        if on_progress is not None:
            on_progress(stage)

    # ── Full generation ───────────────────────────────────────────────────────

    def generate(self, mission: str, on_progress: Optional[ProgressCallback] = None) -> BrandIdentity:
        validate_mission(mission)

        try:
            self._advance(GenerationStage.STRATEGIZING, on_progress)
            strategy = self.director.generate(mission)

            self.assistant.init_session(strategy)

            self._advance(GenerationStage.RENDERING_PRIMARY, on_progress)
            primary_url = self.renderer.render(strategy.logo_prompts.primary)

            self._advance(GenerationStage.RENDERING_SECONDARY, on_progress)
            secondary_url = self.renderer.render(strategy.logo_prompts.secondary)
        except GenerationError:
            self._advance(GenerationStage.FAILED, on_progress)
            raise

        identity = BrandIdentity(
            mission=mission,
            strategy=strategy,
            primary_logo_url=primary_url,
            secondary_mark_url=secondary_url,
        )
        with self._lock:
            self._current = identity
        self._advance(GenerationStage.DONE, on_progress)
        return identity

    # ── Single-slot regeneration ──────────────────────────────────────────────

    def regenerate_image(self, strategy: BrandStrategy, slot: LogoSlot) -> str:
        """Fresh render of one slot's prompt. The strategy is only read."""
        return self.renderer.render_slot(strategy, slot)

    def regenerate(self, slot: LogoSlot) -> BrandIdentity:
        """Re-render ``slot`` of the current identity and swap it in.

        The render runs outside the lock so the other slot can regenerate at
        the same time. If a new generation replaced the identity while this
        render was in flight, the image belongs to a stale strategy and is
        dropped.
        """
        with self._lock:
            base = self._current
        if base is None or base.strategy is None:
            raise GenerationError("Nothing to regenerate yet. Generate an identity first.")

        url = self.regenerate_image(base.strategy, slot)

        with self._lock:
            latest = self._current
            if latest is None or latest.strategy is not base.strategy:
                raise GenerationError(
                    f"{slot.label} regeneration discarded",
                    details="identity was replaced while the image was rendering",
                )
            updated = latest.with_image(slot, url)
            self._current = updated
        logger.info("%s regenerated", slot.label)
        return updated

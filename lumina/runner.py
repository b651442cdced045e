"""
runner.py — Async front for the identity orchestrator.

Designed for event-loop front ends (terminal UI, web handlers). Each call runs
the blocking Gemini work in the default thread pool so the loop stays
responsive, and reports the outcome as a result object instead of raising.

Progress callbacks are sync and are called from the worker thread.

Two regenerations for different slots may be awaited concurrently; neither
blocks or invalidates the other.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

from .director import validate_mission
from .errors import InputValidationError, LuminaError
from .models import BrandIdentity, ChatMessage, LogoSlot
from .orchestrator import IdentityOrchestrator, ProgressCallback

logger = logging.getLogger(__name__)


# ── Result models ─────────────────────────────────────────────────────────────

@dataclass
class GenerationResult:
    """Output from a full generation run."""
    success: bool
    identity: Optional[BrandIdentity] = None
    error: str = ""              # user-facing message
    elapsed_seconds: float = 0.0


@dataclass
class RegenerationResult:
    """Output from a single-slot regeneration."""
    success: bool
    slot: LogoSlot
    identity: Optional[BrandIdentity] = None    # current identity after the swap
    error: str = ""
    elapsed_seconds: float = 0.0


# ── Runner ────────────────────────────────────────────────────────────────────

class IdentityRunner:
    def __init__(self, orchestrator: IdentityOrchestrator) -> None:
        self.orchestrator = orchestrator

    @property
    def current(self) -> Optional[BrandIdentity]:
        return self.orchestrator.current

    async def generate(
        self,
        mission: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        # Blank missions never reach the thread pool
        try:
            validate_mission(mission)
        except InputValidationError as e:
            return GenerationResult(success=False, error=e.message)

        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._generate_sync, mission, on_progress)

    def _generate_sync(self, mission: str, on_progress: Optional[ProgressCallback]) -> GenerationResult:
        start = time.time()
        try:
            identity = self.orchestrator.generate(mission, on_progress=on_progress)
        except LuminaError as e:
            logger.error("Generation failed: %s", e)
            return GenerationResult(
                success=False,
                error=e.message,
                elapsed_seconds=time.time() - start,
            )
        return GenerationResult(
            success=True,
            identity=identity,
            elapsed_seconds=time.time() - start,
        )

    async def regenerate(self, slot: LogoSlot) -> RegenerationResult:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._regenerate_sync, slot)

    def _regenerate_sync(self, slot: LogoSlot) -> RegenerationResult:
        start = time.time()
        try:
            identity = self.orchestrator.regenerate(slot)
        except LuminaError as e:
            logger.error("%s regeneration failed: %s", slot.label, e)
            return RegenerationResult(
                success=False,
                slot=slot,
                identity=self.orchestrator.current,
                error=e.message,
                elapsed_seconds=time.time() - start,
            )
        return RegenerationResult(
            success=True,
            slot=slot,
            identity=identity,
            elapsed_seconds=time.time() - start,
        )

    async def chat(self, text: str) -> ChatMessage:
        """One assistant turn. Blank input raises InputValidationError; service errors don't."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.orchestrator.assistant.converse, text)

"""
assistant.py — Brand Assistant chat session backed by a Gemini chat.

One BrandAssistant holds at most one remote chat. The remote side keeps the
turn history; locally we keep a transcript of ChatMessage for display.
Re-seeding replaces only the remote chat; the transcript lives on.

  init_session(strategy)  → fresh chat seeded with the brand's colors, fonts, voice
  send_message(text)      → reply text (lazy generic session if none yet)
  converse(text)          → send + transcript bookkeeping; errors become an apology

Calls are sequential; the embedding UI is expected to block input while a
message is in flight.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from google import genai
from google.genai import types

from .config import Settings
from .errors import GenerationError, InputValidationError
from .models import BrandStrategy, ChatMessage

logger = logging.getLogger(__name__)

GENERIC_INSTRUCTION = "You are a helpful Brand Identity Assistant."
EMPTY_REPLY_FALLBACK = "I'm having trouble thinking of a response right now."
ERROR_REPLY = "Sorry, I encountered an error. Please try again."


def build_system_instruction(strategy: Optional[BrandStrategy] = None) -> str:
    if strategy is None:
        return GENERIC_INSTRUCTION
    return (
        "You are the Brand Assistant for a company with the following identity:\n"
        f"Colors: {', '.join(strategy.color_names())}.\n"
        f"Fonts: {strategy.typography.header_font} & {strategy.typography.body_font}.\n"
        f"Voice: {strategy.brand_voice or 'not specified'}.\n"
        "Help the user refine their brand, suggest marketing copy, or explain design choices."
    )


class BrandAssistant:
    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.settings = settings
        self.client = client or settings.make_client()
        self._chat = None
        self._system_instruction: Optional[str] = None
        self._transcript: List[ChatMessage] = []

    @property
    def system_instruction(self) -> Optional[str]:
        return self._system_instruction

    @property
    def has_session(self) -> bool:
        return self._chat is not None

    @property
    def transcript(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._transcript)

    def init_session(self, strategy: Optional[BrandStrategy] = None) -> None:
        """Start a new remote chat. The local transcript is kept."""
        instruction = build_system_instruction(strategy)
        self._chat = self.client.chats.create(
            model=self.settings.chat_model,
            config=types.GenerateContentConfig(system_instruction=instruction),
        )
        self._system_instruction = instruction
        logger.info("Brand assistant session started (%s)", "brand context" if strategy else "generic")

    def send_message(self, text: str) -> str:
        if self._chat is None:
            self.init_session()

        try:
            response = self._chat.send_message(text)
        except Exception as e:
            logger.warning("Assistant request failed: %s", e)
            raise GenerationError(ERROR_REPLY, details=f"{type(e).__name__}: {e}") from e

        return response.text or EMPTY_REPLY_FALLBACK

    def converse(self, text: str) -> ChatMessage:
        """Send one user turn and record both sides. Never raises GenerationError."""
        if not text or not text.strip():
            raise InputValidationError("Message must not be empty.")

        user_msg = ChatMessage.user(text)
        self._transcript.append(user_msg)
        try:
            reply = ChatMessage.model(self.send_message(user_msg.text))
        except GenerationError:
            reply = ChatMessage.model(ERROR_REPLY)
        self._transcript.append(reply)
        return reply

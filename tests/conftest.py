"""Shared fixtures: settings, sample strategy and fake Gemini responses."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from lumina.assistant import BrandAssistant
from lumina.config import Settings
from lumina.director import StrategyDirector
from lumina.generator import LogoRenderer
from lumina.models import BrandStrategy
from lumina.orchestrator import IdentityOrchestrator

COFFEE_MISSION = "A sustainable coffee roastery in Seattle, modern and earthy"

COFFEE_STRATEGY = {
    "colors": [
        {"hex": "#3B2A20", "name": "Roasted Ember", "usage": "Primary"},
        {"hex": "#7A8B5C", "name": "Cascade Moss", "usage": "Secondary"},
        {"hex": "#D9A441", "name": "Golden Crema", "usage": "Accent"},
        {"hex": "#F4EDE4", "name": "Oat Paper", "usage": "Background"},
        {"hex": "#1F2A30", "name": "Puget Slate", "usage": "Text"},
    ],
    "typography": {
        "header_font": "Playfair Display",
        "body_font": "Inter",
        "reasoning": "A confident serif for craft, a clean sans for readability.",
    },
    "logo_prompts": {
        "primary": "Minimal flat vector coffee bean merged with an evergreen tree, deep brown on cream",
        "secondary": "Simplified coffee bean icon, single color moss green, flat vector",
    },
    "brand_voice": "Warm, grounded and quietly confident.",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def strategy_json() -> str:
    return json.dumps(COFFEE_STRATEGY)


@pytest.fixture
def sample_strategy() -> BrandStrategy:
    return BrandStrategy.model_validate(COFFEE_STRATEGY)


@pytest.fixture
def text_response():
    def _make(text):
        return SimpleNamespace(text=text)
    return _make


@pytest.fixture
def image_response():
    def _make(data=b"\x89PNG fake image", mime_type="image/png"):
        parts = [
            SimpleNamespace(text="Here is your logo", inline_data=None),
            SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
        ]
        return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])
    return _make


@pytest.fixture
def empty_image_response():
    parts = [SimpleNamespace(text="I can't draw that.", inline_data=None)]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


class FakeGemini:
    """Routes generate_content by model: strategy model → JSON, image model → PNG."""

    def __init__(self, settings: Settings, strategy_text: str) -> None:
        self.settings = settings
        self.strategy_text = strategy_text
        self.strategy_error: Exception | None = None
        self.image_errors: dict = {}          # prompt → exception
        self.image_prompts: list = []
        self.strategy_calls = 0
        self._image_counter = 0

        self.client = MagicMock()
        self.client.models.generate_content.side_effect = self._generate_content
        self.chat = MagicMock()
        self.chat.send_message.return_value = SimpleNamespace(text="Happy to help!")
        self.client.chats.create.return_value = self.chat

    def _generate_content(self, model, contents, config=None):
        if model == self.settings.strategy_model:
            self.strategy_calls += 1
            if self.strategy_error:
                raise self.strategy_error
            return SimpleNamespace(text=self.strategy_text)

        self.image_prompts.append(contents)
        if contents in self.image_errors:
            raise self.image_errors[contents]
        self._image_counter += 1
        data = f"image-{self._image_counter}".encode()
        part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="image/png"))
        return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


@pytest.fixture
def fake_gemini(settings, strategy_json) -> FakeGemini:
    return FakeGemini(settings, strategy_json)


@pytest.fixture
def orchestrator(settings, fake_gemini) -> IdentityOrchestrator:
    client = fake_gemini.client
    return IdentityOrchestrator(
        director=StrategyDirector(settings, client=client),
        renderer=LogoRenderer(settings, client=client),
        assistant=BrandAssistant(settings, client=client),
    )

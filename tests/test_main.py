"""Tests for the terminal front end helpers."""

import threading

import pytest

from lumina import main as cli
from lumina.errors import InputValidationError
from lumina.main import _ask, _image_summary, display_identity, parse_args, parse_command, regen_slots
from lumina.models import BrandIdentity, LogoSlot


class TestParseArgs:
    def test_mission_positional(self) -> None:
        args = parse_args(["A coffee roastery"])
        assert args.mission == "A coffee roastery"
        assert not args.verbose

    def test_no_mission(self) -> None:
        assert parse_args(["-v"]).mission is None


class TestParseCommand:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("/regen primary", ("regen", "primary")),
            ("/REGEN Secondary", ("regen", "secondary")),
            ("/regen", ("regen", "")),
            ("/quit", ("quit", "")),
            ("/q", ("quit", "")),
            ("/new", ("new", "")),
            ("  suggest a tagline  ", ("chat", "suggest a tagline")),
        ],
    )
    def test_commands(self, line, expected) -> None:
        assert parse_command(line) == expected


class TestRegenSlots:
    def test_both(self) -> None:
        assert regen_slots("") == [LogoSlot.PRIMARY, LogoSlot.SECONDARY]
        assert regen_slots("both") == [LogoSlot.PRIMARY, LogoSlot.SECONDARY]

    def test_single(self) -> None:
        assert regen_slots("secondary") == [LogoSlot.SECONDARY]

    def test_unknown(self) -> None:
        with pytest.raises(InputValidationError):
            regen_slots("tertiary")


class TestDisplay:
    def test_image_summary(self) -> None:
        assert "not generated" in _image_summary(None)
        assert "image/png" in _image_summary("data:image/png;base64," + "A" * 4096)

    def test_display_identity_prints_palette_and_fonts(self, sample_strategy, capsys) -> None:
        identity = BrandIdentity(
            mission="m",
            strategy=sample_strategy,
            primary_logo_url="data:image/png;base64,AAAA",
            secondary_mark_url=None,
        )
        display_identity(identity)
        out = capsys.readouterr().out
        assert "Roasted Ember" in out
        assert "Playfair Display" in out
        assert "Secondary Mark" in out
        assert "/regen" in out

    def test_complete_identity_has_no_regen_hint(self, sample_strategy, capsys) -> None:
        identity = BrandIdentity(
            mission="m",
            strategy=sample_strategy,
            primary_logo_url="data:image/png;base64,AAAA",
            secondary_mark_url="data:image/png;base64,BBBB",
        )
        display_identity(identity)
        assert "/regen" not in capsys.readouterr().out


class TestAsk:
    @pytest.mark.asyncio
    async def test_prompt_runs_off_the_event_loop_thread(self, monkeypatch) -> None:
        seen = {}

        def fake_ask(prompt):
            seen["prompt"] = prompt
            seen["thread"] = threading.current_thread()
            return "hello"

        monkeypatch.setattr(cli.Prompt, "ask", fake_ask)

        assert await _ask("💬 You") == "hello"
        assert seen["prompt"] == "💬 You"
        assert seen["thread"] is not threading.current_thread()

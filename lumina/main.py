"""
Lumina — AI-Powered Brand Identity Generator (terminal front end)

Usage:
  lumina "A sustainable coffee roastery in Seattle, modern and earthy"
  lumina                 # prompts for the mission
  lumina --verbose       # show pipeline logs

After the identity is shown, type anything to talk to the Brand Assistant, or:
  /regen primary | secondary | both   — re-render a logo slot
  /new                                — start a new identity
  /quit                               — exit
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.rule import Rule
from rich.table import Table

from .config import Settings
from .errors import ConfigurationError, InputValidationError
from .models import BrandIdentity, GenerationStage, LogoSlot
from .orchestrator import IdentityOrchestrator
from .runner import IdentityRunner

console = Console()

LOG_FORMAT = "%(asctime)s — %(levelname)s — %(name)s — %(message)s"


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lumina",
        description="Lumina — AI-Powered Brand Identity Generator",
    )
    parser.add_argument(
        "mission",
        nargs="?",
        default=None,
        help="Describe your company mission & vision (prompted if omitted)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log pipeline steps to stderr",
    )
    return parser.parse_args(argv)


def parse_command(line: str):
    """
    Split chat-loop input into (command, argument).

      "/regen primary" → ("regen", "primary")
      "/quit"          → ("quit", "")
      "hello"          → ("chat", "hello")
    """
    text = line.strip()
    if not text.startswith("/"):
        return ("chat", text)
    head, _, rest = text[1:].partition(" ")
    head = head.lower()
    if head in ("q", "exit"):
        head = "quit"
    return (head, rest.strip().lower())


def regen_slots(arg: str) -> List[LogoSlot]:
    if arg in ("", "both", "all"):
        return [LogoSlot.PRIMARY, LogoSlot.SECONDARY]
    try:
        return [LogoSlot(arg)]
    except ValueError:
        raise InputValidationError(f"Unknown logo slot '{arg}'. Use primary, secondary or both.") from None


# ── Display ───────────────────────────────────────────────────────────────────

def _image_summary(url: Optional[str]) -> str:
    if not url:
        return "[dim]not generated[/dim]"
    header, _, payload = url.partition(",")
    mime = header[5:].split(";", 1)[0] if header.startswith("data:") else "image"
    approx_kb = len(payload) * 3 // 4 // 1024
    return f"[green]✓[/green] {mime} ({approx_kb} KB)"


def display_identity(identity: BrandIdentity) -> None:
    """Print the Brand Bible: voice, palette, typography, logo status."""
    strategy = identity.strategy
    if strategy is None:
        return

    console.print(Rule("[bold]Brand Bible[/bold]"))
    if strategy.brand_voice:
        console.print(Panel(f'[italic]"{strategy.brand_voice}"[/italic]', title="Brand Voice", border_style="blue"))

    palette = Table(title="Color Palette", show_lines=False)
    palette.add_column("")
    palette.add_column("Name", style="bold")
    palette.add_column("Hex")
    palette.add_column("Usage", style="dim")
    for c in strategy.colors:
        palette.add_row(f"[on {c.hex}]      [/]", c.name, c.hex, c.usage)
    console.print(palette)

    t = strategy.typography
    console.print(
        Panel(
            f"[bold]Header:[/bold] {t.header_font}\n"
            f"[bold]Body:[/bold]   {t.body_font}\n\n"
            f"{t.reasoning}",
            title="Typography",
            border_style="magenta",
        )
    )

    console.print(f"  [bold]Primary Logo:[/bold]   {_image_summary(identity.primary_logo_url)}")
    console.print(f"  [bold]Secondary Mark:[/bold] {_image_summary(identity.secondary_mark_url)}")
    if not identity.is_complete():
        console.print("  [yellow]⚠ Some logos are missing. Use /regen to render them.[/yellow]")


# ── Session ───────────────────────────────────────────────────────────────────

async def _ask(prompt: str) -> str:
    """Prompt.ask on a worker thread so the event loop stays free."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, Prompt.ask, prompt)


async def _generate(runner: IdentityRunner, mission: str) -> Optional[BrandIdentity]:
    with console.status(GenerationStage.STRATEGIZING.label) as status:
        def on_progress(stage: GenerationStage) -> None:
            if stage.is_busy:
                status.update(stage.label)

        result = await runner.generate(mission, on_progress=on_progress)

    if not result.success:
        console.print(f"[bold red]✗[/bold red] {result.error}")
        return None
    console.print(f"  [green]✓ Identity generated in {result.elapsed_seconds:.1f}s[/green]")
    display_identity(result.identity)
    return result.identity


async def _regenerate(runner: IdentityRunner, slots: List[LogoSlot]) -> None:
    names = " + ".join(s.label for s in slots)
    with console.status(f"Regenerating {names}..."):
        results = await asyncio.gather(*(runner.regenerate(s) for s in slots))
    for r in results:
        if r.success:
            console.print(f"  [green]✓ {r.slot.label}[/green] {_image_summary(r.identity.image_for(r.slot))}")
        else:
            console.print(f"  [yellow]⚠ {r.slot.label}: {r.error}[/yellow]")


async def run_session(runner: IdentityRunner, mission: Optional[str]) -> None:
    identity: Optional[BrandIdentity] = None

    while True:
        if identity is None:
            if not mission:
                mission = (await _ask("Describe your company mission & vision")).strip()
                if not mission:
                    continue
            identity = await _generate(runner, mission)
            mission = None
            if identity is None:
                # prior identity (if any) is still the one on display
                identity = runner.current
                if identity is None:
                    continue
            console.print(
                "\n  [dim]Ask the Brand Assistant anything, or use "
                "/regen primary|secondary|both, /new, /quit[/dim]\n"
            )

        line = await _ask("💬 You")
        command, arg = parse_command(line)

        if command == "quit":
            break
        elif command == "new":
            identity = None
        elif command == "regen":
            try:
                slots = regen_slots(arg)
            except InputValidationError as e:
                console.print(f"  [yellow]⚠ {e.message}[/yellow]")
                continue
            await _regenerate(runner, slots)
        elif command == "chat":
            if not arg:
                continue
            with console.status("Brand Assistant is thinking..."):
                reply = await runner.chat(arg)
            console.print(Panel(reply.text, title="Brand Assistant", border_style="cyan"))
        else:
            console.print(f"  [yellow]⚠ Unknown command /{command}[/yellow]")


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.INFO if args.verbose else logging.WARNING,
    )

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        if e.details:
            console.print(e.details)
        sys.exit(1)

    console.print(Rule("[bold magenta]Lumina[/bold magenta]"))
    console.print("  [dim]AI-Powered Brand Identity Generator[/dim]\n")

    runner = IdentityRunner(IdentityOrchestrator.from_settings(settings))
    try:
        asyncio.run(run_session(runner, args.mission))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[dim]Bye.[/dim]")


if __name__ == "__main__":
    main()

"""Rich UI primitives and rendering helpers."""

from __future__ import annotations

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from forks.config.constants import (
    APP_NAME,
    APP_VERSION,
    COLOR_ACCENT,
    COLOR_AGENT,
    COLOR_DIM,
    COLOR_ERROR,
    COLOR_SYSTEM,
    COLOR_USER,
    TRAIT_KEYS,
    TRAIT_NAMES,
)
from forks.simulation.models import EventRecord, Scenario

console = Console()


def trait_bar(value: float, width: int = 20) -> str:
    filled = round(value / 100 * width)
    return "█" * filled + "░" * (width - filled)


def render_welcome() -> None:
    console.print(
        Panel(
            f"[bold {COLOR_ACCENT}]{APP_NAME}[/bold {COLOR_ACCENT}] [{COLOR_DIM}]v{APP_VERSION}[/{COLOR_DIM}]\n"
            f"[{COLOR_DIM}]Discover who you are, then live a life shaped by it.[/{COLOR_DIM}]",
            box=box.ROUNDED,
            border_style="grey35",
            padding=(0, 4),
        )
    )


def render_question(text: str, options: list[str], answered: int, total: int) -> None:
    console.print()
    console.print(f"[{COLOR_DIM}]Question {answered + 1} of {total}[/{COLOR_DIM}]")
    console.print(Text(text, style=f"bold {COLOR_USER}"))
    for i, option in enumerate(options, start=1):
        console.print(f"  [{COLOR_ACCENT}]{i}[/{COLOR_ACCENT}]  {option}")


def render_profile(ocean: dict[str, float], mbti: dict[str, str], enneagram: dict[str, Any]) -> None:
    """Trait bars plus the derived type labels."""
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
    table.add_column(style=COLOR_DIM, justify="right")
    table.add_column()
    table.add_column(style="bold white", justify="right")
    for key in TRAIT_KEYS:
        value = ocean[key]
        table.add_row(TRAIT_NAMES[key], f"[{COLOR_AGENT}]{trait_bar(value)}[/{COLOR_AGENT}]", str(round(value)))

    console.print(Panel(table, title=f"[{COLOR_ACCENT}]PROFILE[/{COLOR_ACCENT}]", border_style="grey35"))
    console.print(f"  [bold]MBTI:[/bold] {mbti['type']} - {mbti['description']}")
    console.print(f"  [bold]Enneagram:[/bold] {enneagram['description']}")


def render_scenario(
    scenario: Scenario,
    age: int,
    stage_label: str,
    hints: dict[str, str],
    trajectories: list[str],
) -> None:
    header = Text()
    header.append(f" {stage_label} ", style=f"bold reverse {COLOR_ACCENT}")
    header.append(f"  Age: {age}", style=COLOR_DIM)
    console.print()
    console.print(header)
    console.print(Panel(
        f"[bold]{scenario.title}[/bold]\n{scenario.description}",
        border_style="grey23",
        padding=(0, 2),
    ))
    for i, choice in enumerate(scenario.choices, start=1):
        hint = hints.get(choice.id, "neutral")
        hint_text = f" [{COLOR_DIM}]({hint})[/{COLOR_DIM}]" if hint != "neutral" else ""
        console.print(f"  [{COLOR_ACCENT}]{i}[/{COLOR_ACCENT}]  [bold]{choice.title}[/bold]{hint_text}")
        if choice.description:
            console.print(f"     [{COLOR_DIM}]{choice.description}[/{COLOR_DIM}]")
    if trajectories:
        console.print(f"  [{COLOR_DIM}]trajectory: {' · '.join(trajectories)}[/{COLOR_DIM}]")


def render_outcome(event: EventRecord, prompt: Optional[str]) -> None:
    console.print()
    console.print(Text(event.outcome, style="white"))
    if event.ocean_changes:
        for trait, change in event.ocean_changes.items():
            style = "green" if change > 0 else "red"
            sign = "+" if change > 0 else ""
            console.print(f"  [{style}]{TRAIT_NAMES.get(trait, trait)} {sign}{change:g}[/{style}]")
    else:
        console.print(f"  [{COLOR_DIM}]No significant trait changes[/{COLOR_DIM}]")
    if prompt:
        console.print(f'\n  [italic {COLOR_SYSTEM}]"{prompt}"[/italic {COLOR_SYSTEM}]')


def render_timeline(timeline: list[dict[str, Any]], stage_labels: dict[str, str], closing: str, final_age: int) -> None:
    table = Table(
        title="Your Life",
        box=box.SIMPLE_HEAVY,
        border_style="grey35",
    )
    table.add_column("Age", style="bold", width=5)
    table.add_column("Stage", style="dim", width=11)
    table.add_column("Event", width=32)
    table.add_column("Choice", width=32)
    for entry in timeline:
        table.add_row(
            str(entry["age"]),
            stage_labels.get(entry["stage"], entry["stage"]),
            entry["title"],
            entry["choice"],
        )
    console.print(table)
    console.print(
        Panel(closing, title=f"Journey's End - Age {final_age}", border_style=COLOR_ACCENT)
    )


def render_system_message(message: str, style: str = COLOR_SYSTEM) -> None:
    console.print(f"[{style}]  {message}[/{style}]")


def render_error(message: str) -> None:
    console.print(f"[{COLOR_ERROR}] ERROR  {message}[/{COLOR_ERROR}]")

"""Click CLI commands — forks play | forks summary | forks check."""

from __future__ import annotations

import asyncio

import click
from rich import box
from rich.panel import Panel

from forks.cli import ui
from forks.config import Settings, get_settings
from forks.config.constants import APP_VERSION
from forks.session import LifeSession

console = ui.console


def _settings_with_seed(seed: int | None) -> Settings:
    settings = get_settings()
    if seed is not None:
        settings = settings.model_copy(update={"rng_seed": seed})
    settings.ensure_data_dirs()
    return settings


def _stage_labels(session: LifeSession) -> dict[str, str]:
    return {stage.value: band.label for stage, band in session.sim.stages.items()}


def _pick(count: int) -> int:
    """Prompt for a 1-based option number, return a 0-based index."""
    return click.prompt("Your choice", type=click.IntRange(1, count)) - 1


def _run_assessment(session: LifeSession) -> None:
    session.begin_assessment()
    while not session.assessment_complete:
        question = session.current_question
        answered, total = session.assessment_progress
        ui.render_question(question.text, [c.text for c in question.choices], answered, total)
        session.answer(_pick(len(question.choices)))


def _run_life(session: LifeSession) -> None:
    while (scenario := session.next_scenario()) is not None:
        ui.render_scenario(
            scenario,
            session.sim.current_age,
            session.sim.stage_label(),
            session.choice_hints(),
            session.traits.get_dominant_trajectories(5),
        )
        choice = scenario.choices[_pick(len(scenario.choices))]
        event = session.choose(choice.id)
        ui.render_outcome(event, session.reflection_prompt())
        click.pause("\nPress any key to continue…")


def _render_ending(session: LifeSession) -> None:
    ui.render_timeline(
        session.sim.get_timeline(),
        _stage_labels(session),
        session.final_reflection(),
        session.sim.current_age,
    )


@click.group()
@click.version_option(version=APP_VERSION, prog_name="forks")
def cli() -> None:
    """Forks — take a personality assessment, then live the life it leads to."""
    pass


@cli.command()
@click.option("--seed", default=None, type=int, help="Seed for reproducible scenario selection")
@click.option("--resume", is_flag=True, help="Continue the saved session instead of starting fresh")
def play(seed: int | None, resume: bool) -> None:
    """Play an interactive session: assessment, life simulation, timeline."""
    session = LifeSession(_settings_with_seed(seed))

    async def _run() -> None:
        await session.start()
        try:
            if not session.sim.scenarios:
                ui.render_error("No scenarios available. Run 'forks check' for details.")
                raise SystemExit(1)

            ui.render_welcome()
            resumed = resume and await session.load()
            if resume and not resumed:
                ui.render_system_message("No saved session found; starting fresh.")

            if not resumed:
                _run_assessment(session)
                ui.render_profile(
                    session.traits.ocean,
                    session.traits.get_mbti_description(),
                    session.traits.derive_enneagram(),
                )
                click.pause("\nPress any key to begin your life…")
                session.begin_simulation()

            while True:
                _run_life(session)
                _render_ending(session)
                await session.save()
                if not click.confirm("\nExplore a different branch with the same personality?", default=False):
                    break
                session.explore_branch()
        except click.Abort:
            await session.save()
            ui.render_system_message("Session saved. Resume with 'forks play --resume'.")
        finally:
            await session.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@cli.command()
def summary() -> None:
    """Show the saved session's profile and life timeline."""
    session = LifeSession(_settings_with_seed(None))

    async def _run() -> bool:
        await session.start()
        found = await session.load()
        await session.stop()
        return found

    if not asyncio.run(_run()):
        ui.render_system_message("No saved session yet. Start one with 'forks play'.")
        return

    ui.render_profile(
        session.traits.ocean,
        session.traits.get_mbti_description(),
        session.traits.derive_enneagram(),
    )
    _render_ending(session)


@cli.command()
def check() -> None:
    """Load both catalogues and report what was found."""
    session = LifeSession(_settings_with_seed(None))

    async def _run() -> bool:
        loaded = await session.start()
        await session.stop()
        return loaded

    loaded = asyncio.run(_run())
    scenarios = session.sim.scenarios
    stages: dict[str, int] = {}
    for scenario in scenarios:
        stages[scenario.life_stage] = stages.get(scenario.life_stage, 0) + 1

    console.print(Panel(
        f"  Questions:   [bold]{len(session.questions)}[/bold]\n"
        f"  Scenarios:   [bold]{len(scenarios)}[/bold]\n"
        + "\n".join(f"    {stage:<8} {count}" for stage, count in sorted(stages.items()))
        + f"\n  Trajectories described: [bold]{len(session.sim.trajectory_descriptions)}[/bold]",
        title="Catalogues",
        box=box.ROUNDED,
        border_style="grey35",
    ))
    if not loaded:
        ui.render_error("One or more catalogues failed to load (see data/logs/forks.log).")
        raise SystemExit(1)

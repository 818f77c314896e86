"""
Typer CLI for the GeoLearn engine.

Commands:
    geolearn simulate                 - Run a simulated learner through a quiz session
    geolearn simulate --estimator bkt - Same, using Bayesian Knowledge Tracing
    geolearn info                     - Show effective configuration

Usage:
    geolearn --help
    geolearn simulate --questions 60 --seed 7 --skill Europe=0.9 --skill Asia=0.4
"""

from __future__ import annotations

import random
import sys
from typing import Annotated

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import Settings, get_settings
from geolearn.adaptive.badges import badge_label
from geolearn.adaptive.estimators import EstimatorKind
from geolearn.adaptive.learning_engine import AnswerOutcome, LearningEngine
from geolearn.core.errors import EngineError
from geolearn.core.profile import LearnerProfile

app = typer.Typer(
    name="geolearn",
    help="GeoLearn adaptive learner-modeling engine",
    no_args_is_help=True,
)

console = Console()

DIFFICULTY_STYLE = {"easy": "green", "medium": "yellow", "hard": "red"}


def load_settings() -> Settings:
    """Load settings, exiting with a readable message when they are invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def configure_logging(level: str, verbose: bool = False) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def parse_skills(values: list[str], domains: tuple[str, ...], default: float) -> dict[str, float]:
    """
    Parse DOMAIN=PROBABILITY pairs into a per-domain skill table.

    Raises:
        typer.BadParameter: On malformed pairs, unknown domains or bad probabilities
    """
    skills = {domain: default for domain in domains}
    for raw in values:
        name, sep, prob = raw.partition("=")
        name = name.strip()
        if not sep:
            raise typer.BadParameter(f"Expected DOMAIN=PROBABILITY, got {raw!r}")
        if name not in skills:
            raise typer.BadParameter(f"Unknown domain {name!r} (known: {', '.join(domains)})")
        try:
            value = float(prob)
        except ValueError:
            raise typer.BadParameter(f"Probability for {name} is not a number: {prob!r}") from None
        if not 0.0 <= value <= 1.0:
            raise typer.BadParameter(f"Probability for {name} must be within [0, 1]")
        skills[name] = value
    return skills


def render_profile(engine: LearningEngine, profile: LearnerProfile) -> Table:
    """Build a rich table of the learner profile."""
    badges = engine.badges(profile)
    weights = engine.weights(profile)
    show_belief = engine.estimator.kind is EstimatorKind.BKT

    table = Table(title=f"Learner Profile ({engine.estimator.kind.value})")
    table.add_column("Domain", style="cyan")
    table.add_column("Correct", justify="right")
    table.add_column("Incorrect", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Difficulty")
    if show_belief:
        table.add_column("P(L)", justify="right")
    table.add_column("Weight", justify="right", style="dim")
    table.add_column("Badge")

    for domain, state in profile.items():
        level = state.current_difficulty.value
        row = [
            domain,
            str(state.correct_count),
            str(state.incorrect_count),
            str(state.points),
            f"[{DIFFICULTY_STYLE[level]}]{state.current_difficulty.display_name}[/]",
        ]
        if show_belief:
            belief = state.mastery_belief
            row.append("-" if belief is None else f"{belief:.3f}")
        row.append(f"{weights[domain]:.2f}")
        row.append(badge_label(domain) if domain in badges else "")
        table.add_row(*row)
    return table


@app.command()
def simulate(
    estimator: Annotated[
        EstimatorKind | None,
        typer.Option("--estimator", "-e", help="Estimator strategy (defaults to GEOLEARN_ESTIMATOR)"),
    ] = None,
    questions: Annotated[int, typer.Option("--questions", "-n", min=1, help="Questions to ask")] = 40,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Random seed")] = None,
    skill: Annotated[
        list[str] | None,
        typer.Option("--skill", help="Per-domain answer probability, DOMAIN=P (repeatable)"),
    ] = None,
    default_skill: Annotated[
        float, typer.Option("--default-skill", min=0.0, max=1.0, help="Probability for unlisted domains")
    ] = 0.7,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Drive a simulated learner through the engine and show the result."""
    settings = load_settings()
    configure_logging(settings.log_level, verbose)
    rng = random.Random(seed)

    try:
        engine = LearningEngine.from_settings(settings, kind=estimator, rng=rng)
        skills = parse_skills(skill or [], engine.registry.domains, default_skill)
        profile = engine.start_profile()
        for _ in range(questions):
            request = engine.next_question(profile)
            outcome = AnswerOutcome(
                domain=request.domain,
                was_correct=rng.random() < skills[request.domain],
                difficulty_used=request.difficulty,
            )
            result = engine.record_answer(profile, outcome)
            profile = result.profile
            for domain in sorted(result.new_badges):
                console.print(f"[bold green]Badge earned:[/] {badge_label(domain)}")
    except EngineError as e:
        console.print(f"[red]Simulation failed:[/] {e}")
        raise typer.Exit(code=1) from e

    console.print(render_profile(engine, profile))
    summary = engine.summary(profile)
    console.print(
        f"Total correct: [bold]{summary['total_correct']}[/]  "
        f"Total points: [bold]{summary['total_points']}[/]  "
        f"Badges: [bold]{len(summary['badges'])}[/]/{len(engine.registry)}"
    )


@app.command("info")
def show_info() -> None:
    """Show effective engine configuration."""
    settings = load_settings()

    table = Table(title="GeoLearn Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Domains", ", ".join(settings.domains))
    table.add_row("Estimator", settings.estimator.value)
    table.add_row("Region Max", str(settings.region_max))
    table.add_row(
        "Points (easy/medium/hard)",
        f"{settings.points_easy}/{settings.points_medium}/{settings.points_hard}",
    )
    table.add_row("Selection Ceiling", str(settings.selection_ceiling))
    table.add_row("Cold Start Attempts", str(settings.cold_start_attempts))
    table.add_row(
        "BKT (P_L0, P_T, P_G, P_S)",
        f"{settings.bkt_p_l0}, {settings.bkt_p_t}, {settings.bkt_p_g}, {settings.bkt_p_s}",
    )
    table.add_row("Log Level", settings.log_level)

    console.print(table)


def run() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    run()

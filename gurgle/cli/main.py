"""Command line interface for rolling dice expressions."""

import logging
import random
from typing import Optional

import typer
from rich.logging import RichHandler

from gurgle.cli.display import (
    console,
    display_gurgle_error,
    display_roll,
    display_roll_table,
    display_summary,
)
from gurgle.compiled import Gurgle
from gurgle.config import Language, get_settings
from gurgle.errors import GurgleError

app = typer.Typer(
    name="gurgle",
    help="Roll dice using TRPG-like expressions, e.g. '3d6+2d4+1>15'",
    add_completion=False,
)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def roll(
    expression: str = typer.Argument(..., help="Dice expression, e.g. '3d6+1>=10'"),
    times: int = typer.Option(1, "--times", "-n", min=1, help="Roll the expression N times"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible rolls"),
    no_detail: bool = typer.Option(False, "--no-detail", help="Show only the value"),
    lang: Optional[Language] = typer.Option(None, "--lang", help="Language of the verdict"),
) -> None:
    """Compile an expression once and roll it."""
    rng = random.Random(seed) if seed is not None else None
    with_detail = False if no_detail else None
    try:
        gurgle = Gurgle.compile(expression)
        results = [
            gurgle.roll(rng=rng, with_detail=with_detail, language=lang) for _ in range(times)
        ]
    except GurgleError as e:
        display_gurgle_error(e)
        raise typer.Exit(1)

    if times == 1:
        display_roll(results[0])
    else:
        display_roll_table(results)


@app.command()
def check(
    expression: str = typer.Argument(..., help="Dice expression to validate"),
) -> None:
    """Validate an expression without rolling it."""
    try:
        gurgle = Gurgle.compile(expression)
    except GurgleError as e:
        display_gurgle_error(e)
        raise typer.Exit(1)
    display_summary(gurgle)


@app.command()
def limits() -> None:
    """Show the configured compile limits."""
    settings = get_settings()
    for name, value in settings.limits.model_dump().items():
        console.print(f"[bold]{name}:[/bold] {value}")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Gurgle - roll dice using TRPG-like expressions.

    Use 'gurgle roll 3d6+1' to roll, 'gurgle check 3d6+1' to validate.
    Prefix expressions that start with '-' with '--', e.g. 'gurgle roll -- -1+1d6'.
    """
    if debug or get_settings().debug:
        _configure_logging()


if __name__ == "__main__":
    app()

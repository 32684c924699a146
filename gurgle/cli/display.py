"""Rich display helpers for CLI output."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gurgle.compiled import Gurgle
from gurgle.dice.types import Dice, PostProcessor, RollResult
from gurgle.errors import DiceParseError, GurgleError


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)


def display_success(message: str) -> None:
    console.print(f"[bold green]{message}[/bold green]")


def display_info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def display_gurgle_error(error: GurgleError) -> None:
    """Display a compile or roll error, with a pointer for syntax errors."""
    display_error(str(error))
    if isinstance(error, DiceParseError) and error.text:
        console.print(error.pointer(), markup=False, highlight=False, soft_wrap=True)


def _verdict_markup(success: bool | None) -> str:
    if success is None:
        return ""
    return "[green]success[/green]" if success else "[red]failed[/red]"


def display_roll(result: RollResult) -> None:
    """Display one roll: the detail trace if present, else the value.

    Args:
        result: Roll to display.
    """
    if result.detail_text is not None:
        console.print(result.detail_text, markup=False, highlight=False, soft_wrap=True)
        return
    line = f"[bold cyan]{result.value}[/bold cyan]"
    verdict = _verdict_markup(result.success)
    if verdict:
        line += f" {verdict}"
    console.print(line)


def display_roll_table(results: list[RollResult]) -> None:
    """Display several rolls of the same command as a table.

    Args:
        results: Rolls in the order they were made.
    """
    show_verdict = any(r.success is not None for r in results)
    show_detail = any(r.detail is not None for r in results)

    table = Table(title="Rolls", box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Value", style="cyan", justify="right")
    if show_verdict:
        table.add_column("Result")
    if show_detail:
        table.add_column("Detail", style="white")

    for index, result in enumerate(results, start=1):
        row = [str(index), str(result.value)]
        if show_verdict:
            row.append(_verdict_markup(result.success))
        if show_detail:
            row.append(result.detail_text or "")
        table.add_row(*row)

    console.print(table)

    if show_verdict:
        successes = sum(1 for r in results if r.success)
        display_info(f"{successes}/{len(results)} succeeded")


def _format_dice(dice: Dice) -> str:
    suffix = "" if dice.post_processor is PostProcessor.SUM else dice.post_processor.value
    return f"{dice.times}d{dice.sides}{suffix}"


def display_summary(gurgle: Gurgle) -> None:
    """Display what a compiled command contains.

    Args:
        gurgle: Compiled command.
    """
    display_success(f"'{escape(gurgle.source)}' is valid")
    display_info(f"Items: {gurgle.item_count}")
    dice = gurgle.dice
    if dice:
        terms = ", ".join(_format_dice(d) for d in dice)
        display_info(f"Dice: {terms}")
    if gurgle.checker is not None:
        display_info(f"Checker: {gurgle.checker.compare.value}{gurgle.checker.target}")

#!/usr/bin/env python3
"""
Habit tracking CLI.

Mark daily habits done and watch the streaks.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.core.utils import normalize_date
from disciplinetx.review.stats import get_habit_stats, get_habits_with_stats
from disciplinetx.store import create_store

app = typer.Typer(help="Track daily habits")
console = Console()


def _open_store():
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return create_store(config)


@app.command("list")
def list_habits(
    day: str = typer.Option(None, "--date", "-d", help="Reference date (YYYY-MM-DD), default today"),
):
    """
    Show active habits with streaks and monthly completion.
    """
    store = _open_store()
    day = normalize_date(day or date.today())

    table = Table(title=f"Habits for {day}", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right")
    table.add_column("Habit")
    table.add_column("Category")
    table.add_column("Today", justify="center")
    table.add_column("Streak", justify="right")
    table.add_column("Month", justify="right")

    for stats in get_habits_with_stats(store, day):
        table.add_row(
            str(stats.habit.id),
            stats.habit.name,
            stats.habit.category,
            "✅" if stats.completed_today else "·",
            f"{stats.current_streak}d",
            f"{stats.monthly_completions}/{stats.total_days_this_month} ({stats.completion_rate}%)",
        )

    console.print(table)


@app.command()
def add(
    name: str = typer.Argument(..., help="Habit name"),
    description: str = typer.Option(None, "--description", "-D", help="What the habit means"),
    category: str = typer.Option("custom", "--category", "-c", help="Habit category"),
):
    """
    Add a new habit.
    """
    store = _open_store()
    habit = store.create_habit(name=name, description=description, category=category)
    console.print(f"\n[green]Habit #{habit.id} '{habit.name}' added.[/green]\n")


def _set_completion(habit_id: int, day: str, completed: bool) -> None:
    store = _open_store()

    habit = store.get_habit(habit_id)
    if not habit:
        console.print(f"[red]Habit #{habit_id} not found.[/red]")
        raise typer.Exit(1)

    day = normalize_date(day or date.today())
    store.upsert_habit_completion(habit_id, day, completed=completed)

    stats = get_habit_stats(store, habit_id, day)
    state = "done" if completed else "not done"
    console.print(
        f"\n[green]'{habit.name}' marked {state} for {day}. "
        f"Streak: {stats.current_streak}d[/green]\n"
    )


@app.command()
def done(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    day: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
):
    """
    Mark a habit completed.
    """
    _set_completion(habit_id, day, True)


@app.command()
def undo(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    day: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
):
    """
    Mark a habit not completed.
    """
    _set_completion(habit_id, day, False)


@app.command()
def remove(
    habit_id: int = typer.Argument(..., help="Habit ID"),
):
    """
    Retire a habit. History is kept.
    """
    store = _open_store()

    if not store.delete_habit(habit_id):
        console.print(f"[red]Habit #{habit_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[yellow]Habit #{habit_id} retired.[/yellow]\n")


@app.command()
def stats(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    day: str = typer.Option(None, "--date", "-d", help="Reference date (YYYY-MM-DD), default today"),
):
    """
    Show streak and monthly stats for one habit.
    """
    store = _open_store()
    result = get_habit_stats(store, habit_id, day or date.today())

    if result is None:
        console.print(f"[red]Habit #{habit_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]{result.habit.name}[/bold]")
    console.print(f"  Current streak: {result.current_streak} day(s)")
    console.print(f"  Completed today: {'Yes' if result.completed_today else 'No'}")
    console.print(
        f"  This month: {result.monthly_completions}/{result.total_days_this_month} "
        f"({result.completion_rate}%)\n"
    )


if __name__ == "__main__":
    app()

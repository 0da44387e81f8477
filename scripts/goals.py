#!/usr/bin/env python3
"""
Goal tracking CLI.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.core.utils import parse_decimal, percent
from disciplinetx.store import create_store

app = typer.Typer(help="Track trading goals")
console = Console()


def _open_store():
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return create_store(config)


@app.command("list")
def list_goals():
    """
    Show active goals and progress.
    """
    store = _open_store()

    table = Table(title="Goals", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right")
    table.add_column("Goal")
    table.add_column("Category")
    table.add_column("Progress", justify="right")
    table.add_column("Deadline")

    for goal in store.list_goals():
        current = parse_decimal(goal.current_value) or 0
        target = parse_decimal(goal.target_value) or 0
        table.add_row(
            str(goal.id),
            goal.title,
            goal.category,
            f"{goal.current_value}/{goal.target_value} {goal.unit} ({percent(current, target)}%)",
            goal.deadline or "-",
        )

    console.print(table)


@app.command()
def add(
    title: str = typer.Argument(..., help="Goal title"),
    target: str = typer.Option(..., "--target", "-t", help="Target value"),
    unit: str = typer.Option(..., "--unit", "-u", help="Unit (USD, percent, trades)"),
    category: str = typer.Option("discipline", "--category", "-c", help="Goal category"),
    deadline: str = typer.Option(None, "--deadline", help="Deadline (YYYY-MM-DD)"),
    description: str = typer.Option(None, "--description", "-D", help="Description"),
):
    """
    Add a goal.
    """
    store = _open_store()
    goal = store.create_goal(
        title=title,
        description=description,
        target_value=target,
        unit=unit,
        category=category,
        deadline=deadline,
    )
    console.print(f"\n[green]Goal #{goal.id} '{goal.title}' added.[/green]\n")


@app.command()
def progress(
    goal_id: int = typer.Argument(..., help="Goal ID"),
    value: str = typer.Argument(..., help="New current value"),
):
    """
    Update a goal's current value.
    """
    store = _open_store()

    goal = store.update_goal(goal_id, current_value=value)
    if not goal:
        console.print(f"[red]Goal #{goal_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[green]{goal.title}: {goal.current_value}/{goal.target_value} {goal.unit}[/green]\n")


@app.command()
def remove(
    goal_id: int = typer.Argument(..., help="Goal ID"),
):
    """
    Retire a goal.
    """
    store = _open_store()

    if not store.delete_goal(goal_id):
        console.print(f"[red]Goal #{goal_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[yellow]Goal #{goal_id} retired.[/yellow]\n")


if __name__ == "__main__":
    app()

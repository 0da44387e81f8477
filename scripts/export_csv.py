#!/usr/bin/env python3
"""
Export data to CSV.

Exports trade reviews or habit history to CSV format for external analysis.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import csv
import typer
from datetime import datetime
from dotenv import load_dotenv
from rich.console import Console

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.core.utils import iter_dates
from disciplinetx.store import create_store

app = typer.Typer(help="Export data to CSV")
console = Console()


def _open_store():
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return create_store(config)


def _default_output(kind: str) -> str:
    Path("data").mkdir(exist_ok=True)
    return f"data/{kind}_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"


@app.command()
def trades(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
    start: str = typer.Option(None, "--start", help="First date (YYYY-MM-DD)"),
    end: str = typer.Option(None, "--end", help="Last date (YYYY-MM-DD)"),
):
    """
    Export trade reviews to CSV.
    """
    store = _open_store()
    output = output or _default_output("trades")

    reviews = sorted(store.list_trade_reviews(start, end), key=lambda t: (t.date, t.id))

    with open(output, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "id",
            "date",
            "symbol",
            "side",
            "entry_price",
            "exit_price",
            "quantity",
            "pnl",
            "emotional_state",
            "rating",
            "tags",
            "setup",
            "mistakes",
            "lessons",
        ])

        for trade in reviews:
            writer.writerow([
                trade.id,
                trade.date,
                trade.symbol,
                trade.side,
                trade.entry_price,
                trade.exit_price or "",
                trade.quantity,
                trade.pnl or "",
                trade.emotional_state or "",
                trade.rating or "",
                trade.tags or "",
                trade.setup or "",
                trade.mistakes or "",
                trade.lessons or "",
            ])

    console.print(f"[green]Exported {len(reviews)} trades to {output}[/green]")


@app.command()
def habits(
    start: str = typer.Option(..., "--start", help="First date (YYYY-MM-DD)"),
    end: str = typer.Option(..., "--end", help="Last date (YYYY-MM-DD)"),
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export a day-by-habit completion grid to CSV.
    """
    store = _open_store()
    output = output or _default_output("habits")

    active = store.list_habits()
    completed = {
        habit.id: {c.date for c in store.get_habit_completions(habit.id, start, end) if c.completed}
        for habit in active
    }
    days = list(iter_dates(start, end))

    with open(output, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["date"] + [habit.name for habit in active])

        for day in days:
            writer.writerow([day] + [
                "Yes" if day in completed[habit.id] else "No"
                for habit in active
            ])

    console.print(f"[green]Exported {len(days)} days x {len(active)} habits to {output}[/green]")


if __name__ == "__main__":
    app()

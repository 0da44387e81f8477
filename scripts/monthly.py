#!/usr/bin/env python3
"""
Monthly summary script.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import typer
from dotenv import load_dotenv
from rich.console import Console

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.core.utils import month_bounds
from disciplinetx.review.stats import get_monthly_stats, get_trading_stats
from disciplinetx.store import create_store

app = typer.Typer(help="Monthly discipline and trading summary")
console = Console()


@app.command()
def main(
    year: int = typer.Option(None, "--year", "-y", help="Year, default current"),
    month: int = typer.Option(None, "--month", "-m", help="Month 1-12, default current"),
):
    """
    Show perfect days, best all-habit streak and trading stats for a month.
    """
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    store = create_store(config)

    today = date.today()
    year = year or today.year
    month = month or today.month

    try:
        stats = get_monthly_stats(store, year, month)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    start, end = month_bounds(year, month)
    trading = get_trading_stats(store, start, end)

    console.print(f"\n[bold]DisciplineTX - {year}-{month:02d}[/bold]\n")
    console.print(f"Habits tracked: {stats.total_habits}")
    console.print(f"Completion rate: {stats.completion_rate}%")
    console.print(f"Perfect days: {stats.perfect_days}")
    console.print(f"Best all-habit streak: {stats.best_streak} day(s)\n")

    if trading.total_trades:
        console.print(f"Trades: {trading.total_trades}  Win rate: {trading.win_rate}%")
        console.print(f"Total PnL: {trading.total_pnl:+.2f}  Profit factor: {trading.profit_factor:.2f}")
        if trading.emotional_states:
            states = ", ".join(f"{k}: {v}" for k, v in sorted(trading.emotional_states.items()))
            console.print(f"Emotional states: {states}")
        console.print("")
    else:
        console.print("[dim]No trades reviewed this month.[/dim]\n")


if __name__ == "__main__":
    app()

#!/usr/bin/env python3
"""
Log a trade review.

Forces reflection: setup, emotional state, mistakes and one lesson.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Prompt, IntPrompt

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.core.models import Mood, TradeSide
from disciplinetx.core.utils import normalize_date
from disciplinetx.guardrails.rules import print_guardrails
from disciplinetx.store import create_store
from disciplinetx.store.base import calculate_pnl

app = typer.Typer(help="Log and review trades")
console = Console()


def _open():
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return config, create_store(config)


@app.command()
def main(
    symbol: str = typer.Option(..., "--symbol", "-s", help="Instrument symbol (e.g., ES, AAPL)"),
    entry_price: str = typer.Option(..., "--entry", "-e", help="Entry price"),
    side: TradeSide = typer.Option(TradeSide.LONG, "--side", help="long or short"),
    quantity: str = typer.Option("1", "--qty", "-q", help="Quantity"),
    exit_price: str = typer.Option(None, "--exit", "-x", help="Exit price if already closed"),
    pnl: str = typer.Option(None, "--pnl", help="Realized PnL if already closed"),
    day: str = typer.Option(None, "--date", "-d", help="Trade date (YYYY-MM-DD), default today"),
):
    """
    Log a new trade with mandatory review questions.
    """
    config, store = _open()
    day = normalize_date(day or date.today())

    # Print guardrails first
    console.print("\n[bold]Checking guardrails...[/bold]\n")
    print_guardrails(store, config, day)

    console.print("[yellow]Review Questions[/yellow]\n")

    setup = Prompt.ask("What was the setup?", console=console)
    emotional_state = Prompt.ask(
        "Emotional state at entry",
        choices=[m.value for m in Mood],
        default=Mood.NEUTRAL.value,
        console=console,
    )
    mistakes = Prompt.ask("Any mistakes? (blank if none)", default="", console=console)
    lessons = Prompt.ask("One sentence lesson", console=console)
    tags = Prompt.ask("Tags (comma separated, optional)", default="", console=console)
    rating = IntPrompt.ask(
        "Execution rating",
        choices=["1", "2", "3", "4", "5"],
        default=3,
        console=console,
    )

    if exit_price and pnl is None:
        pnl = calculate_pnl(side.value, entry_price, exit_price, quantity)

    trade = store.create_trade_review(
        date=day,
        symbol=symbol,
        side=side.value,
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        pnl=pnl,
        tags=tags or None,
        emotional_state=emotional_state,
        setup=setup,
        mistakes=mistakes or None,
        lessons=lessons,
        rating=rating,
    )

    console.print(f"\n[green]Trade #{trade.id} logged successfully.[/green]\n")


@app.command()
def close(
    trade_id: int = typer.Argument(..., help="Trade ID"),
    exit_price: str = typer.Option(..., "--price", "-p", help="Exit price"),
):
    """
    Mark a trade as closed and compute its PnL.
    """
    _, store = _open()

    trade = store.get_trade_review(trade_id)
    if not trade:
        console.print(f"[red]Trade #{trade_id} not found.[/red]")
        raise typer.Exit(1)

    if trade.exit_price:
        console.print(f"[yellow]Trade #{trade_id} already closed at {trade.exit_price}[/yellow]")
        raise typer.Exit(1)

    pnl = calculate_pnl(trade.side, trade.entry_price, exit_price, trade.quantity)
    store.update_trade_review(trade_id, exit_price=exit_price, pnl=pnl)

    console.print(f"\n[green]Trade #{trade_id} closed at {exit_price} (PnL {pnl})[/green]\n")


@app.command()
def remove(
    trade_id: int = typer.Argument(..., help="Trade ID"),
):
    """
    Delete a trade review.
    """
    _, store = _open()

    if not store.delete_trade_review(trade_id):
        console.print(f"[red]Trade #{trade_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[yellow]Trade #{trade_id} deleted.[/yellow]\n")


if __name__ == "__main__":
    app()

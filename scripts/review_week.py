#!/usr/bin/env python3
"""
Weekly review script.

Shows habit consistency, mindset and trading metrics, and suggests ONE change for next week.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from dotenv import load_dotenv
from rich.console import Console

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.review.weekly import format_weekly_review, export_weekly_review
from disciplinetx.store import create_store

app = typer.Typer(help="Weekly review")
console = Console()


@app.command()
def main(
    days: int = typer.Option(7, "--days", "-d", help="Number of days to review"),
    end: str = typer.Option(None, "--end", help="Last day of the review (YYYY-MM-DD), default today"),
    export: bool = typer.Option(False, "--export", "-e", help="Export to file"),
    telegram: bool = typer.Option(False, "--telegram", "-t", help="Send to Telegram"),
):
    """
    Generate weekly review.
    """
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    store = create_store(config)

    review_text = format_weekly_review(store, end, days)

    if export:
        filepath = export_weekly_review(store, end, days)
        console.print(f"[green]Review exported to {filepath}[/green]")
    elif telegram:
        from disciplinetx.notify.telegram import TelegramNotifier
        telegram_notifier = TelegramNotifier(config)
        if telegram_notifier.send_review(review_text):
            console.print("[green]Review sent to Telegram[/green]")
        else:
            console.print("[yellow]Telegram send failed, printing to console[/yellow]\n")
            print(review_text)
    else:
        print(review_text)


if __name__ == "__main__":
    app()

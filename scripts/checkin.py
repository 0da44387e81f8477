#!/usr/bin/env python3
"""
Daily check-in CLI.

Record mood, journal and risk numbers for the day.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Prompt

from disciplinetx.core.config import Config, setup_logging
from disciplinetx.core.models import Mood
from disciplinetx.core.utils import normalize_date
from disciplinetx.guardrails.rules import print_guardrails
from disciplinetx.notify.telegram import TelegramNotifier
from disciplinetx.store import create_store

app = typer.Typer(help="Daily mood, journal and risk check-in")
console = Console()

MOOD_EMOJI = {
    Mood.EXCELLENT.value: "😊",
    Mood.GOOD.value: "🙂",
    Mood.NEUTRAL.value: "😐",
    Mood.STRESSED.value: "😰",
    Mood.ANGRY.value: "😠",
}


def _open():
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return config, create_store(config)


@app.command()
def mood(
    label: str = typer.Argument(None, help="excellent, good, neutral, stressed or angry"),
    day: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
):
    """
    Record how you feel before trading.
    """
    _, store = _open()
    day = normalize_date(day or date.today())

    if not label:
        label = Prompt.ask(
            "How do you feel?",
            choices=[m.value for m in Mood],
            default=Mood.NEUTRAL.value,
            console=console,
        )

    try:
        check_in = store.upsert_emotional_check_in(day, label)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[green]{MOOD_EMOJI[check_in.mood]} Mood '{check_in.mood}' saved for {day}.[/green]\n")


@app.command()
def journal(
    content: str = typer.Argument(None, help="Journal text (prompted if omitted)"),
    day: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
):
    """
    Write (or replace) the day's journal entry.
    """
    _, store = _open()
    day = normalize_date(day or date.today())

    if not content:
        content = Prompt.ask("What did you learn today?", console=console)

    store.upsert_journal_entry(day, content)
    console.print(f"\n[green]Journal saved for {day}.[/green]\n")


@app.command()
def risk(
    day: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
    balance: str = typer.Option(None, "--balance", "-b", help="Account balance"),
    drawdown: str = typer.Option(None, "--drawdown", help="Max drawdown"),
    daily_risk: str = typer.Option(None, "--daily-risk", help="Planned daily risk"),
    position_size: str = typer.Option(None, "--position-size", help="Position size"),
    rr: str = typer.Option(None, "--rr", help="Risk/reward ratio"),
):
    """
    Record risk numbers. Only the options given are changed.
    """
    _, store = _open()
    day = normalize_date(day or date.today())

    fields = {
        "account_balance": balance,
        "max_drawdown": drawdown,
        "daily_risk": daily_risk,
        "position_size": position_size,
        "risk_reward_ratio": rr,
    }
    fields = {k: v for k, v in fields.items() if v is not None}

    if not fields:
        console.print("[yellow]Nothing to record. Pass at least one option.[/yellow]")
        raise typer.Exit(1)

    store.upsert_risk_metrics(day, **fields)
    console.print(f"\n[green]Risk metrics saved for {day}.[/green]\n")


@app.command()
def show(
    day: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
    telegram: bool = typer.Option(False, "--telegram", help="Send guardrail warnings to Telegram"),
):
    """
    Show the day's check-in, journal, risk numbers and guardrails.
    """
    config, store = _open()
    day = normalize_date(day or date.today())

    console.print(f"\n[bold]Check-in for {day}[/bold]\n")

    check_in = store.get_emotional_check_in(day)
    if check_in:
        console.print(f"Mood: {MOOD_EMOJI.get(check_in.mood, '')} {check_in.mood}")
    else:
        console.print("Mood: [dim]not recorded[/dim]")

    entry = store.get_journal_entry(day)
    console.print(f"Journal: {entry.content if entry else '[dim]empty[/dim]'}")

    metrics = store.get_risk_metrics(day)
    if metrics:
        console.print(
            f"Risk: balance={metrics.account_balance or '-'} "
            f"drawdown={metrics.max_drawdown or '-'} "
            f"daily_risk={metrics.daily_risk or '-'} "
            f"size={metrics.position_size or '-'} "
            f"rr={metrics.risk_reward_ratio or '-'}"
        )

    console.print("")
    warnings = print_guardrails(store, config, day)

    if telegram and warnings:
        notifier = TelegramNotifier(config)
        if notifier.send_guardrails(warnings):
            console.print("[green]Guardrail warnings sent to Telegram.[/green]")
        else:
            console.print("[yellow]Telegram delivery failed or not configured.[/yellow]")


if __name__ == "__main__":
    app()

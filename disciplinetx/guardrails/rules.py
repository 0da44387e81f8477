"""
Behavioral guardrails.

Checks for patterns that indicate overtrading or lapsed discipline.
Logs warnings but never blocks execution.
"""

import logging
from datetime import date
from typing import List, Optional

from disciplinetx.core.config import Config
from disciplinetx.core.utils import DateLike, normalize_date, parse_decimal, to_decimal
from disciplinetx.store.base import RecordStore

logger = logging.getLogger(__name__)


class GuardrailWarning:
    """A guardrail warning message."""

    def __init__(self, category: str, message: str):
        self.category = category
        self.message = message

    def __str__(self) -> str:
        return f"[{self.category}] {self.message}"


def check_daily_trade_limit(store: RecordStore, config: Config, day: str) -> Optional[GuardrailWarning]:
    """
    Check if daily trade limit reached.

    Warns if trades >= max_trades_per_day.
    """
    trade_count = len(store.list_trade_reviews(day, day))

    if trade_count >= config.max_trades_per_day:
        return GuardrailWarning(
            "OVERTRADING",
            f"You have taken {trade_count} trade(s) today. "
            f"Consider stopping for the day."
        )

    return None


def check_daily_loss_limit(store: RecordStore, config: Config, day: str) -> Optional[GuardrailWarning]:
    """
    Check if the day's realized loss exceeds max_daily_loss_pct of the balance.

    Skipped when no account balance is recorded for the day.
    """
    metrics = store.get_risk_metrics(day)
    balance = parse_decimal(metrics.account_balance) if metrics else None
    if not balance or balance <= 0:
        return None

    day_pnl = sum(
        pnl for pnl in (parse_decimal(t.pnl) for t in store.list_trade_reviews(day, day))
        if pnl is not None
    )
    limit = balance * to_decimal(config.max_daily_loss_pct) / 100

    if day_pnl < 0 and abs(day_pnl) >= limit:
        return GuardrailWarning(
            "DAILY_LOSS",
            f"Down {abs(day_pnl):,.2f} today, limit is {limit:,.2f} "
            f"({config.max_daily_loss_pct}% of {balance:,.2f}). Stop trading."
        )

    return None


def check_journal_entry(store: RecordStore, day: str) -> Optional[GuardrailWarning]:
    """
    Check if the day has a journal entry.
    """
    if store.get_journal_entry(day) is None:
        return GuardrailWarning(
            "JOURNAL_MISSING",
            f"No journal entry for {day}. Reflect before trading again."
        )

    return None


def check_emotional_check_in(store: RecordStore, day: str) -> Optional[GuardrailWarning]:
    """
    Check if the day has a mood check-in.
    """
    if store.get_emotional_check_in(day) is None:
        return GuardrailWarning(
            "CHECKIN_MISSING",
            f"No emotional check-in for {day}. Name your state before the open."
        )

    return None


def check_pending_habits(store: RecordStore, day: str) -> Optional[GuardrailWarning]:
    """
    Check for active habits not yet completed on the day.
    """
    pending = []
    for habit in store.list_habits():
        completion = store.get_habit_completion(habit.id, day)
        if not completion or not completion.completed:
            pending.append(habit.name)

    if pending:
        return GuardrailWarning(
            "HABITS_PENDING",
            f"{len(pending)} habit(s) not done: {', '.join(pending)}"
        )

    return None


def run_all_guardrails(
    store: RecordStore,
    config: Config,
    day: Optional[DateLike] = None,
) -> List[GuardrailWarning]:
    """
    Run all guardrail checks for a day (default today).

    Returns list of warnings (empty if none).
    """
    day = normalize_date(day or date.today())

    checks = [
        check_daily_trade_limit(store, config, day),
        check_daily_loss_limit(store, config, day),
        check_emotional_check_in(store, day),
        check_journal_entry(store, day),
        check_pending_habits(store, day),
    ]
    warnings = [warning for warning in checks if warning]

    for warning in warnings:
        logger.warning(f"Guardrail: {warning}")

    return warnings


def print_guardrails(
    store: RecordStore,
    config: Config,
    day: Optional[DateLike] = None,
) -> List[GuardrailWarning]:
    """
    Run guardrails and print warnings to stdout.

    Returns the warnings so callers can forward them.
    """
    warnings = run_all_guardrails(store, config, day)

    if not warnings:
        print("No guardrail warnings.")
        return warnings

    print("\nGuardrail Warnings:")
    print("-" * 50)
    for warning in warnings:
        print(f"  {warning}")
    print()

    return warnings

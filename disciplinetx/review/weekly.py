"""
Weekly review module.

Generates behavioral summaries for weekly reflection.
"""

import logging
from collections import Counter
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional

from disciplinetx.core.models import Mood
from disciplinetx.core.utils import DateLike, format_date, parse_date, round_half_up
from disciplinetx.review.stats import (
    get_habits_with_stats,
    get_trading_stats,
    get_weekly_progress,
)
from disciplinetx.store.base import RecordStore

logger = logging.getLogger(__name__)

NEGATIVE_MOODS = (Mood.STRESSED.value, Mood.ANGRY.value)
POSITIVE_MOODS = (Mood.EXCELLENT.value, Mood.GOOD.value)


def get_weekly_review(
    store: RecordStore,
    end_date: Optional[DateLike] = None,
    days: int = 7,
) -> dict:
    """
    Collect habit, mood, journal and trading figures for the N days ending on end_date.
    """
    end = parse_date(end_date) if end_date else date.today()
    start = end - timedelta(days=days - 1)
    start_key, end_key = format_date(start), format_date(end)

    progress = get_weekly_progress(store, start_key, end_key)
    habit_stats = get_habits_with_stats(store, end_key)
    trading = get_trading_stats(store, start_key, end_key)

    average_completion = 0
    if progress:
        average_completion = int(round_half_up(
            Decimal(sum(day.completion_rate for day in progress)) / len(progress)
        ))

    weakest = min(habit_stats, key=lambda s: s.completion_rate, default=None)

    moods = Counter(c.mood for c in store.list_emotional_check_ins(start_key, end_key))
    journal_days = len(store.list_journal_entries(start_key, end_key))

    return {
        "start_date": start_key,
        "end_date": end_key,
        "days": days,
        "progress": progress,
        "average_completion": average_completion,
        "perfect_days": sum(1 for day in progress if day.completion_rate == 100),
        "best_streak": max((s.current_streak for s in habit_stats), default=0),
        "weakest_habit": weakest.habit.name if weakest else None,
        "trading": trading,
        "moods": dict(moods),
        "journal_days": journal_days,
    }


def _suggest_change(review: dict) -> Optional[str]:
    """Pick ONE behavior to change next week."""
    moods = review["moods"]
    negative = sum(moods.get(m, 0) for m in NEGATIVE_MOODS)
    positive = sum(moods.get(m, 0) for m in POSITIVE_MOODS)
    trading = review["trading"]

    if negative > positive:
        return "Skip trading on stressed or angry days"
    if review["average_completion"] < 50 and review["weakest_habit"]:
        return f"Commit to '{review['weakest_habit']}' every day"
    if review["journal_days"] < review["days"] / 2:
        return "Write a journal entry after every session"
    if trading.total_trades > 0 and trading.losing_trades > 0 and trading.profit_factor < 1:
        return "Cut trade count and wait for A+ setups"
    return None


def format_weekly_review(
    store: RecordStore,
    end_date: Optional[DateLike] = None,
    days: int = 7,
) -> str:
    """
    Format weekly review as plain text.
    """
    review = get_weekly_review(store, end_date, days)

    lines = [
        f"DisciplineTX - Weekly Review ({review['start_date']} to {review['end_date']})",
        "",
        "Habits:",
    ]

    for day in review["progress"]:
        lines.append(f"  {day.date}: {day.completion_rate}%")

    lines.extend([
        f"Average completion: {review['average_completion']}%",
        f"Perfect days: {review['perfect_days']}/{review['days']}",
        f"Best current streak: {review['best_streak']} day(s)",
        "",
        "Mindset:",
        f"Journal entries: {review['journal_days']}/{review['days']}",
    ])

    if review["moods"]:
        breakdown = ", ".join(
            f"{mood.value}: {review['moods'][mood.value]}"
            for mood in Mood
            if mood.value in review["moods"]
        )
        lines.append(f"Moods: {breakdown}")
    else:
        lines.append("Moods: no check-ins")
    lines.append("")

    trading = review["trading"]
    if trading.total_trades == 0:
        lines.extend([
            "No trades reviewed in this period.",
            "",
        ])
    else:
        lines.extend([
            "Trading:",
            f"Trades: {trading.total_trades}",
            f"Win rate: {trading.win_rate}%",
            f"Total PnL: {trading.total_pnl:+.2f}",
            f"Avg win: {trading.avg_win:.2f}",
            f"Avg loss: {trading.avg_loss:.2f}",
            f"Profit factor: {trading.profit_factor:.2f}",
            "",
        ])

    change = _suggest_change(review)
    if change:
        lines.append("ONE CHANGE NEXT WEEK:")
        lines.append(f"-> {change}")
        lines.append("")

    return "\n".join(lines)


def export_weekly_review(
    store: RecordStore,
    end_date: Optional[DateLike] = None,
    days: int = 7,
    filepath: Optional[str] = None,
) -> str:
    """
    Export weekly review to file.

    Returns file path.
    """
    review_text = format_weekly_review(store, end_date, days)

    if not filepath:
        end = parse_date(end_date) if end_date else date.today()
        filepath = f"data/weekly_review_{end.strftime('%Y%m%d')}.txt"

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as f:
        f.write(review_text)

    logger.info(f"Weekly review exported to {filepath}")
    return filepath

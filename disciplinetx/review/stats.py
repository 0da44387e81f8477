"""
Discipline and trading statistics.

Pure read-reduce queries over a RecordStore: per-habit streaks,
daily completion series, monthly summaries and trade performance.
Nothing is cached; every call reads the store's current contents.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from disciplinetx.core.models import Habit
from disciplinetx.core.utils import (
    DateLike,
    days_in_month,
    format_date,
    iter_dates,
    month_bounds,
    parse_date,
    parse_decimal,
    percent,
    round_half_up,
)
from disciplinetx.store.base import RecordStore

logger = logging.getLogger(__name__)

# Backward walk limit for a single habit streak
MAX_STREAK_DAYS = 365

# Profit factor reported when there are wins but no losses
PROFIT_FACTOR_NO_LOSSES = 999.0


@dataclass
class HabitStats:
    """Per-habit stats for a reference date."""
    habit: Habit
    current_streak: int
    completion_rate: int
    completed_today: bool
    monthly_completions: int
    total_days_this_month: int

    def to_dict(self) -> dict:
        return {
            "id": self.habit.id,
            "name": self.habit.name,
            "description": self.habit.description,
            "category": self.habit.category,
            "isActive": self.habit.is_active,
            "currentStreak": self.current_streak,
            "completionRate": self.completion_rate,
            "completedToday": self.completed_today,
            "monthlyCompletions": self.monthly_completions,
            "totalDaysThisMonth": self.total_days_this_month,
        }


@dataclass
class DailyProgress:
    """Share of active habits completed on one day."""
    date: str
    completion_rate: int

    def to_dict(self) -> dict:
        return {"date": self.date, "completionRate": self.completion_rate}


@dataclass
class MonthlyStats:
    """Whole-month discipline summary."""
    best_streak: int
    total_habits: int
    completion_rate: int
    perfect_days: int

    def to_dict(self) -> dict:
        return {
            "bestStreak": self.best_streak,
            "totalHabits": self.total_habits,
            "completionRate": self.completion_rate,
            "perfectDays": self.perfect_days,
        }


@dataclass
class TradingStats:
    """Trade performance over a date range."""
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: int = 0
    total_pnl: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    profit_factor: float = 0.0
    emotional_states: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalTrades": self.total_trades,
            "winningTrades": self.winning_trades,
            "losingTrades": self.losing_trades,
            "winRate": self.win_rate,
            "totalPnL": self.total_pnl,
            "avgWin": self.avg_win,
            "avgLoss": self.avg_loss,
            "profitFactor": self.profit_factor,
            "emotionalStates": dict(self.emotional_states),
        }


def count_streak(completed_days: set, reference: DateLike, limit: int = MAX_STREAK_DAYS) -> int:
    """
    Count consecutive completed days walking backward from reference.

    Stops at the first day missing from completed_days, so an
    incomplete reference day gives 0.
    """
    current = parse_date(reference)
    streak = 0

    for _ in range(limit):
        if format_date(current) not in completed_days:
            break
        streak += 1
        current -= timedelta(days=1)

    return streak


def longest_run(flags: Sequence[bool]) -> int:
    """Length of the longest run of True values."""
    best = 0
    current = 0
    for flag in flags:
        if flag:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def _habit_stats(store: RecordStore, habit: Habit, reference: DateLike) -> HabitStats:
    day = parse_date(reference)
    day_key = format_date(day)
    month_start, month_end = month_bounds(day.year, day.month)

    # One fetch covers both the streak walk and the calendar month
    window_start = min(format_date(day - timedelta(days=MAX_STREAK_DAYS - 1)), month_start)
    window_end = max(day_key, month_end)
    completed_days = {
        c.date
        for c in store.get_habit_completions(habit.id, window_start, window_end)
        if c.completed
    }

    monthly_completions = sum(1 for d in completed_days if month_start <= d <= month_end)
    total_days = days_in_month(day.year, day.month)

    return HabitStats(
        habit=habit,
        current_streak=count_streak(completed_days, day),
        completion_rate=percent(monthly_completions, total_days),
        completed_today=day_key in completed_days,
        monthly_completions=monthly_completions,
        total_days_this_month=total_days,
    )


def get_habit_stats(store: RecordStore, habit_id: int, date: DateLike) -> Optional[HabitStats]:
    """
    Streak and monthly completion for one habit.

    Returns None when the habit id is unknown. Soft-deleted habits
    are still answered by id.
    """
    habit = store.get_habit(habit_id)
    if not habit:
        return None

    return _habit_stats(store, habit, date)


def get_habits_with_stats(store: RecordStore, date: DateLike) -> List[HabitStats]:
    """
    Stats for every active habit on a reference date.
    """
    return [_habit_stats(store, habit, date) for habit in store.list_habits()]


def _daily_completion_counts(
    store: RecordStore,
    habits: List[Habit],
    start_date: DateLike,
    end_date: DateLike,
) -> List[Tuple[str, int]]:
    """
    Completed-habit count for each day in range.

    Fetches each habit's completions for the whole range once.
    """
    days = list(iter_dates(start_date, end_date))
    if not days:
        return []

    completed_by_day: Counter = Counter()
    for habit in habits:
        for completion in store.get_habit_completions(habit.id, days[0], days[-1]):
            if completion.completed:
                completed_by_day[completion.date] += 1

    return [(day, completed_by_day[day]) for day in days]


def _progress_series(counts: List[Tuple[str, int]], total_habits: int) -> List[DailyProgress]:
    return [
        DailyProgress(date=day, completion_rate=percent(completed, total_habits))
        for day, completed in counts
    ]


def get_weekly_progress(
    store: RecordStore,
    start_date: DateLike,
    end_date: DateLike,
) -> List[DailyProgress]:
    """
    Daily completion rate across active habits, one entry per day.

    Both bounds are inclusive. Active habits are read once so every
    day shares the same denominator. Empty when start is after end.
    """
    habits = store.list_habits()
    counts = _daily_completion_counts(store, habits, start_date, end_date)
    return _progress_series(counts, len(habits))


def get_monthly_stats(store: RecordStore, year: int, month: int) -> MonthlyStats:
    """
    Monthly discipline summary.

    best_streak is the longest run of consecutive days where every
    active habit was completed, not any single habit's own streak.

    Raises ValueError when month is outside 1..12.
    """
    total_days = days_in_month(year, month)
    month_start, month_end = month_bounds(year, month)

    habits = store.list_habits()
    total_habits = len(habits)
    counts = _daily_completion_counts(store, habits, month_start, month_end)
    series = _progress_series(counts, total_habits)

    total_completed = sum(completed for _, completed in counts)
    perfect_days = 0
    if total_habits > 0:
        perfect_days = sum(1 for _, completed in counts if completed == total_habits)

    return MonthlyStats(
        best_streak=longest_run([day.completion_rate == 100 for day in series]),
        total_habits=total_habits,
        completion_rate=percent(total_completed, total_habits * total_days),
        perfect_days=perfect_days,
    )


def get_trading_stats(
    store: RecordStore,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
) -> TradingStats:
    """
    Win/loss statistics for trade reviews in range (inclusive).

    Trades without a numeric PnL count toward total_trades only.
    PnL is summed as Decimal and rounded only when reported.
    Profit factor is PROFIT_FACTOR_NO_LOSSES when there are wins
    and no losses, 0 when there are neither.
    """
    trades = store.list_trade_reviews(start_date, end_date)

    wins: List[Decimal] = []
    losses: List[Decimal] = []
    trades_with_pnl = 0
    total_pnl = Decimal(0)

    for trade in trades:
        pnl = parse_decimal(trade.pnl)
        if pnl is None:
            if trade.pnl not in (None, ""):
                logger.debug(f"Skipping non-numeric PnL on trade {trade.id}: {trade.pnl!r}")
            continue

        trades_with_pnl += 1
        total_pnl += pnl
        if pnl > 0:
            wins.append(pnl)
        elif pnl < 0:
            losses.append(abs(pnl))

    total_wins = sum(wins, Decimal(0))
    total_losses = sum(losses, Decimal(0))

    if total_losses > 0:
        profit_factor = round_half_up(total_wins / total_losses, 2)
    elif total_wins > 0:
        profit_factor = PROFIT_FACTOR_NO_LOSSES
    else:
        profit_factor = 0.0

    emotional_states = Counter(t.emotional_state for t in trades if t.emotional_state)

    return TradingStats(
        total_trades=len(trades),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=percent(len(wins), trades_with_pnl),
        total_pnl=round_half_up(total_pnl, 2),
        avg_win=round_half_up(total_wins / len(wins), 2) if wins else 0.0,
        avg_loss=round_half_up(total_losses / len(losses), 2) if losses else 0.0,
        profit_factor=profit_factor,
        emotional_states=dict(emotional_states),
    )

"""
Unit tests for discipline and trading statistics.

Covers:
- Per-habit streaks and monthly completion
- Daily completion series
- Monthly summary (perfect days, best all-habit streak)
- Trade performance statistics
"""

from datetime import date, timedelta

import pytest

from disciplinetx.core.utils import format_date
from disciplinetx.review.stats import (
    MAX_STREAK_DAYS,
    PROFIT_FACTOR_NO_LOSSES,
    count_streak,
    get_habit_stats,
    get_habits_with_stats,
    get_monthly_stats,
    get_trading_stats,
    get_weekly_progress,
    longest_run,
)
from disciplinetx.store.memory import MemoryStore


def complete(store, habit, *days, completed=True):
    for day in days:
        store.upsert_habit_completion(habit.id, day, completed=completed)


def add_trade(store, pnl, day="2024-03-01", emotional_state=None):
    return store.create_trade_review(
        date=day,
        symbol="ES",
        entry_price="5000",
        pnl=pnl,
        emotional_state=emotional_state,
    )


class TestHabitStreak:
    """Test backward streak walk for a single habit."""

    def test_no_records_gives_zero(self, store, make_habits):
        """A habit with no completions has no streak and 0% completion."""
        habit, = make_habits("Honor Stop Losses")

        stats = get_habit_stats(store, habit.id, "2024-03-03")

        assert stats.current_streak == 0
        assert stats.completion_rate == 0
        assert stats.completed_today is False
        assert stats.monthly_completions == 0

    def test_streak_stops_at_gap(self, store, make_habits):
        """Completed 03-01..03-03, not 02-29: streak at 03-03 is 3."""
        habit, = make_habits("Wait for Setup")
        complete(store, habit, "2024-03-01", "2024-03-02", "2024-03-03")
        complete(store, habit, "2024-02-29", completed=False)

        stats = get_habit_stats(store, habit.id, "2024-03-03")

        assert stats.current_streak == 3
        assert stats.completed_today is True

    def test_reference_day_incomplete_gives_zero(self, store, make_habits):
        """Streak is 0 when the reference day itself is not completed."""
        habit, = make_habits("Review Trades Daily")
        complete(store, habit, "2024-03-01", "2024-03-02")

        stats = get_habit_stats(store, habit.id, "2024-03-03")

        assert stats.current_streak == 0
        assert stats.completed_today is False

    def test_streak_crosses_month_boundary(self, store, make_habits):
        """The walk continues into the previous month."""
        habit, = make_habits("Avoid Overtrading")
        complete(store, habit, "2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02")

        stats = get_habit_stats(store, habit.id, "2024-03-02")

        assert stats.current_streak == 5
        assert stats.monthly_completions == 2

    def test_streak_is_capped(self):
        """The walk never exceeds MAX_STREAK_DAYS."""
        store = MemoryStore()
        habit = store.create_habit(name="Meditate")
        end = date(2024, 12, 31)
        for offset in range(MAX_STREAK_DAYS + 30):
            store.upsert_habit_completion(habit.id, end - timedelta(days=offset), completed=True)

        stats = get_habit_stats(store, habit.id, end)

        assert stats.current_streak == MAX_STREAK_DAYS

    def test_count_streak_helper(self):
        """count_streak only needs the set of completed day keys."""
        days = {"2024-01-01", "2024-01-02", "2024-01-04"}
        assert count_streak(days, "2024-01-02") == 2
        assert count_streak(days, "2024-01-04") == 1
        assert count_streak(days, "2024-01-03") == 0


class TestHabitMonthlyStats:
    """Test monthly completion figures for one habit."""

    def test_completion_rate_over_days_in_month(self, store, make_habits):
        """3 completions in March -> round(3/31*100) = 10."""
        habit, = make_habits("Journal")
        complete(store, habit, "2024-03-01", "2024-03-02", "2024-03-03")

        stats = get_habit_stats(store, habit.id, "2024-03-03")

        assert stats.monthly_completions == 3
        assert stats.total_days_this_month == 31
        assert stats.completion_rate == 10

    def test_later_days_in_month_count(self, store, make_habits):
        """Completions later in the same month count toward the month."""
        habit, = make_habits("Journal")
        complete(store, habit, "2024-02-03", "2024-02-20")
        complete(store, habit, "2024-03-01")

        stats = get_habit_stats(store, habit.id, "2024-02-03")

        assert stats.monthly_completions == 2
        assert stats.total_days_this_month == 29
        assert stats.current_streak == 1

    def test_unknown_habit_returns_none(self, store):
        """Unknown habit ids are absent, not errors."""
        assert get_habit_stats(store, 999, "2024-03-03") is None

    def test_soft_deleted_habit(self, store, make_habits):
        """Retired habits answer by id but drop out of the active list."""
        kept, retired = make_habits("Keep", "Retire")
        complete(store, retired, "2024-03-03")
        store.delete_habit(retired.id)

        assert get_habit_stats(store, retired.id, "2024-03-03").current_streak == 1

        listed = get_habits_with_stats(store, "2024-03-03")
        assert [s.habit.id for s in listed] == [kept.id]

    def test_to_dict_uses_wire_names(self, store, make_habits):
        habit, = make_habits("Journal")
        complete(store, habit, "2024-03-03")

        data = get_habit_stats(store, habit.id, "2024-03-03").to_dict()

        assert data["name"] == "Journal"
        assert data["currentStreak"] == 1
        assert data["completedToday"] is True
        assert data["totalDaysThisMonth"] == 31


class TestWeeklyProgress:
    """Test the daily completion-rate series."""

    def test_partial_day_rounds(self, store, make_habits):
        """3 habits, 2 completed -> 67."""
        a, b, c = make_habits("A", "B", "C")
        complete(store, a, "2024-03-04")
        complete(store, b, "2024-03-04")

        series = get_weekly_progress(store, "2024-03-04", "2024-03-04")

        assert [d.to_dict() for d in series] == [{"date": "2024-03-04", "completionRate": 67}]

    def test_length_and_order(self, store, make_habits):
        """One ascending entry per day, bounds inclusive."""
        make_habits("A")

        series = get_weekly_progress(store, "2024-02-26", "2024-03-03")

        assert len(series) == 7
        assert [d.date for d in series] == sorted(d.date for d in series)
        assert series[0].date == "2024-02-26"
        assert series[-1].date == "2024-03-03"

    def test_no_habits_is_zero(self, store):
        """Zero active habits gives 0 for every day."""
        series = get_weekly_progress(store, "2024-03-01", "2024-03-03")

        assert [d.completion_rate for d in series] == [0, 0, 0]

    def test_reversed_range_is_empty(self, store, make_habits):
        make_habits("A")
        assert get_weekly_progress(store, "2024-03-05", "2024-03-01") == []

    def test_uncompleted_records_and_retired_habits(self, store, make_habits):
        """completed=False counts as missing; retired habits leave the denominator."""
        a, b, retired = make_habits("A", "B", "Old")
        complete(store, a, "2024-03-01")
        complete(store, b, "2024-03-01", completed=False)
        complete(store, retired, "2024-03-01")
        store.delete_habit(retired.id)

        series = get_weekly_progress(store, "2024-03-01", "2024-03-01")

        assert series[0].completion_rate == 50


class TestMonthlyStats:
    """Test the whole-month summary."""

    def test_perfect_days_and_best_streak(self, store, make_habits):
        """Best streak is the longest run of all-habit days."""
        a, b = make_habits("A", "B")
        for day in ("2024-02-01", "2024-02-02", "2024-02-03", "2024-02-10", "2024-02-11"):
            complete(store, a, day)
            complete(store, b, day)
        complete(store, a, "2024-02-05")

        stats = get_monthly_stats(store, 2024, 2)

        assert stats.total_habits == 2
        assert stats.perfect_days == 5
        assert stats.best_streak == 3
        # 11 completions over 2 habits x 29 days
        assert stats.completion_rate == 19

    def test_no_habits(self, store):
        """A month without habits has no perfect days."""
        stats = get_monthly_stats(store, 2024, 3)

        assert stats.to_dict() == {
            "bestStreak": 0,
            "totalHabits": 0,
            "completionRate": 0,
            "perfectDays": 0,
        }

    def test_full_month(self, store, make_habits):
        habit, = make_habits("A")
        for day in range(1, 31):
            complete(store, habit, format_date(date(2024, 4, day)))

        stats = get_monthly_stats(store, 2024, 4)

        assert stats.perfect_days == 30
        assert stats.best_streak == 30
        assert stats.completion_rate == 100

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, store, month):
        with pytest.raises(ValueError):
            get_monthly_stats(store, 2024, month)

    def test_longest_run_helper(self):
        assert longest_run([]) == 0
        assert longest_run([True, True, False, True]) == 2
        assert longest_run([False, True, True, True]) == 3


class TestTradingStats:
    """Test trade performance statistics."""

    def test_reference_example(self, store):
        """PnL 100, -50, -50."""
        add_trade(store, "100")
        add_trade(store, "-50")
        add_trade(store, "-50")

        stats = get_trading_stats(store, "2024-03-01", "2024-03-01")

        assert stats.total_trades == 3
        assert stats.win_rate == 33
        assert stats.total_pnl == 0
        assert stats.avg_win == 100
        assert stats.avg_loss == 50
        assert stats.profit_factor == 1

    def test_no_trades(self, store):
        stats = get_trading_stats(store, "2024-03-01", "2024-03-31")

        assert stats.total_trades == 0
        assert stats.win_rate == 0
        assert stats.profit_factor == 0
        assert stats.emotional_states == {}

    def test_no_losses_uses_sentinel(self, store):
        """Wins without losses report the documented sentinel."""
        add_trade(store, "120.5")
        add_trade(store, "30")

        stats = get_trading_stats(store)

        assert stats.profit_factor == PROFIT_FACTOR_NO_LOSSES
        assert stats.avg_loss == 0
        assert stats.win_rate == 100

    def test_only_breakeven_trades(self, store):
        """Zero PnL is neither a win nor a loss."""
        add_trade(store, "0")
        add_trade(store, "0.00")

        stats = get_trading_stats(store)

        assert stats.profit_factor == 0
        assert stats.win_rate == 0
        assert stats.winning_trades == 0
        assert stats.losing_trades == 0

    def test_unparseable_pnl_excluded(self, store):
        """Missing or garbage PnL counts toward total only."""
        add_trade(store, "100")
        add_trade(store, "abc")
        add_trade(store, None)
        add_trade(store, "0")

        stats = get_trading_stats(store)

        assert stats.total_trades == 4
        # 1 win out of 2 trades with numeric PnL
        assert stats.win_rate == 50
        assert stats.total_pnl == 100
        zero_or_unparsed = stats.total_trades - stats.winning_trades - stats.losing_trades
        assert zero_or_unparsed == 3

    def test_rounding_to_cents(self, store):
        add_trade(store, "10.005")
        add_trade(store, "-3.333")
        add_trade(store, "-3.333")

        stats = get_trading_stats(store)

        assert stats.avg_win == 10.01
        assert stats.avg_loss == 3.33
        assert stats.total_pnl == 3.34
        assert stats.profit_factor == 1.5

    def test_date_range_is_inclusive(self, store):
        add_trade(store, "10", day="2024-02-29")
        add_trade(store, "20", day="2024-03-01")
        add_trade(store, "30", day="2024-03-31")
        add_trade(store, "40", day="2024-04-01")

        stats = get_trading_stats(store, "2024-03-01", "2024-03-31")

        assert stats.total_trades == 2
        assert stats.total_pnl == 50

    def test_emotional_states(self, store):
        """Untagged trades are left out of the mapping."""
        add_trade(store, "10", emotional_state="neutral")
        add_trade(store, "-5", emotional_state="stressed")
        add_trade(store, "-5", emotional_state="stressed")
        add_trade(store, "7", emotional_state=None)
        add_trade(store, "7", emotional_state="")

        stats = get_trading_stats(store)

        assert stats.total_trades == 5
        assert stats.emotional_states == {"neutral": 1, "stressed": 2}
        assert stats.to_dict()["emotionalStates"] == {"neutral": 1, "stressed": 2}

    def test_pnl_sums_are_exact(self, store):
        """Decimal PnL strings sum without float drift before rounding."""
        add_trade(store, "0.1")
        add_trade(store, "0.7")
        add_trade(store, "0.005")

        stats = get_trading_stats(store)

        assert stats.total_pnl == 0.81
        assert stats.avg_win == 0.27

    def test_win_rate_rounds_exact_half_up(self, store):
        """29 wins out of 200 trades is 14.5%, reported as 15."""
        for _ in range(29):
            add_trade(store, "10")
        for _ in range(171):
            add_trade(store, "-1")

        stats = get_trading_stats(store)

        assert stats.win_rate == 15

    def test_comma_decimal_pnl_is_not_numeric(self, store):
        """A comma decimal is not read as a thousands separator."""
        add_trade(store, "1,5")
        add_trade(store, "1,250.50")

        stats = get_trading_stats(store)

        assert stats.total_pnl == 1250.5
        assert stats.winning_trades == 1

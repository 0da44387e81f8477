"""
Unit tests for behavioral guardrails.
"""

import logging
from unittest.mock import MagicMock, patch

from disciplinetx.core.config import Config
from disciplinetx.guardrails.rules import (
    check_daily_loss_limit,
    check_daily_trade_limit,
    check_pending_habits,
    print_guardrails,
    run_all_guardrails,
)
from disciplinetx.notify.telegram import TelegramNotifier

DAY = "2024-03-04"


def add_trade(store, pnl="0"):
    store.create_trade_review(date=DAY, symbol="ES", entry_price="5000", pnl=pnl)


class TestTradeLimit:
    """Test overtrading detection."""

    def test_under_limit(self, store):
        config = Config(max_trades_per_day=3)
        add_trade(store)
        add_trade(store)

        assert check_daily_trade_limit(store, config, DAY) is None

    def test_at_limit_warns(self, store):
        config = Config(max_trades_per_day=2)
        add_trade(store)
        add_trade(store)

        warning = check_daily_trade_limit(store, config, DAY)

        assert warning.category == "OVERTRADING"
        assert "2 trade(s)" in warning.message


class TestLossLimit:
    """Test daily loss limit against the recorded balance."""

    def test_no_balance_skips(self, store):
        add_trade(store, "-5000")
        assert check_daily_loss_limit(store, Config(), DAY) is None

    def test_loss_over_limit(self, store):
        """2% of 10,000 is 200."""
        store.upsert_risk_metrics(DAY, account_balance="10000")
        add_trade(store, "-150")
        add_trade(store, "-50")

        warning = check_daily_loss_limit(store, Config(max_daily_loss_pct=2.0), DAY)

        assert warning.category == "DAILY_LOSS"
        assert "200.00" in warning.message

    def test_loss_under_limit(self, store):
        store.upsert_risk_metrics(DAY, account_balance="10000")
        add_trade(store, "-199")
        add_trade(store, None)

        assert check_daily_loss_limit(store, Config(max_daily_loss_pct=2.0), DAY) is None


class TestAllGuardrails:
    """Test the combined run."""

    def test_fresh_day_warnings(self, store):
        """Empty day: missing check-in and journal, pending habit."""
        store.create_habit(name="Honor Stop Losses")

        warnings = run_all_guardrails(store, Config(), DAY)

        assert [w.category for w in warnings] == [
            "CHECKIN_MISSING",
            "JOURNAL_MISSING",
            "HABITS_PENDING",
        ]

    def test_clean_day(self, store, caplog):
        habit = store.create_habit(name="Honor Stop Losses")
        store.upsert_habit_completion(habit.id, DAY, completed=True)
        store.upsert_emotional_check_in(DAY, "neutral")
        store.upsert_journal_entry(DAY, "Followed the plan")

        with caplog.at_level(logging.WARNING):
            warnings = run_all_guardrails(store, Config(), DAY)

        assert warnings == []
        assert "Guardrail" not in caplog.text

    def test_pending_habits_lists_names(self, store):
        done = store.create_habit(name="A")
        store.create_habit(name="B")
        store.upsert_habit_completion(done.id, DAY, completed=True)

        warning = check_pending_habits(store, DAY)

        assert warning.message == "1 habit(s) not done: B"

    def test_warnings_are_logged_and_printed(self, store, caplog, capsys):
        with caplog.at_level(logging.WARNING):
            print_guardrails(store, Config(), DAY)

        assert "JOURNAL_MISSING" in caplog.text
        assert "Guardrail Warnings:" in capsys.readouterr().out

    def test_print_returns_warnings(self, store, capsys):
        """Printed warnings are returned for forwarding to Telegram."""
        warnings = print_guardrails(store, Config(), DAY)

        assert [w.category for w in warnings] == ["CHECKIN_MISSING", "JOURNAL_MISSING"]

    def test_printed_warnings_forwarded(self, store, capsys):
        config = Config(telegram_bot_token="123:abc", telegram_chat_id="42")
        warnings = print_guardrails(store, config, DAY)

        with patch("disciplinetx.notify.telegram.requests.post", return_value=MagicMock()) as post:
            assert TelegramNotifier(config).send_guardrails(warnings) is True

        text = post.call_args.kwargs["json"]["text"]
        assert "[CHECKIN_MISSING]" in text
        assert "[JOURNAL_MISSING]" in text

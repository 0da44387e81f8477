"""
Unit tests for configuration loading, store selection and default seeding.
"""

import json
from datetime import date

import pytest

from disciplinetx.core.config import Config
from disciplinetx.store import MemoryStore, SqlStore, create_store, seed_defaults
from disciplinetx.store.seed import DEFAULT_GOALS, DEFAULT_HABITS


def write_profile(root, name, data):
    profiles = root / "config" / "profiles"
    profiles.mkdir(parents=True, exist_ok=True)
    (profiles / f"{name}.json").write_text(json.dumps(data))


class TestConfig:
    """Test profile + environment loading."""

    def test_from_env(self, tmp_path, monkeypatch):
        write_profile(tmp_path, "tight", {
            "guardrails": {"max_trades_per_day": 1, "max_daily_loss_pct": 0.5},
            "default_habits": [{"name": "Pre-Market Plan"}],
        })
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PROFILE_TEMPLATE", "tight")
        monkeypatch.setenv("STORE_BACKEND", "MEMORY")
        monkeypatch.setenv("SEED_DEFAULTS", "no")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)

        config = Config.from_env()

        assert config.profile_template == "tight"
        assert config.store_backend == "memory"
        assert config.seed_defaults is False
        assert config.log_level == "DEBUG"
        assert config.max_trades_per_day == 1
        assert config.max_daily_loss_pct == 0.5
        assert config.default_habits == [{"name": "Pre-Market Plan"}]
        assert config.default_goals is None
        assert "not configured" in config.get_summary()

    def test_guardrail_defaults(self, tmp_path, monkeypatch):
        write_profile(tmp_path, "default", {"name": "Bare"})
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PROFILE_TEMPLATE", raising=False)

        config = Config.from_env()

        assert config.max_trades_per_day == 3
        assert config.max_daily_loss_pct == 2.0

    def test_missing_profile(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PROFILE_TEMPLATE", "nope")

        with pytest.raises(FileNotFoundError):
            Config.from_env()


class TestCreateStore:
    """Test backend selection."""

    def test_backends(self, memory_config, sql_config):
        assert isinstance(create_store(memory_config), MemoryStore)
        assert isinstance(create_store(sql_config), SqlStore)

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            create_store(Config(store_backend="redis", seed_defaults=False))

    def test_seeds_when_enabled(self):
        store = create_store(Config(database_path=":memory:", store_backend="sql"))

        assert [h.name for h in store.list_habits()] == sorted(h["name"] for h in DEFAULT_HABITS)
        assert len(store.list_goals()) == len(DEFAULT_GOALS)

    def test_file_database_persists(self, tmp_path):
        config = Config(database_path=str(tmp_path / "data" / "dtx.db"), seed_defaults=False)
        create_store(config).create_habit(name="Wait for Setup")

        reopened = create_store(config)

        assert [h.name for h in reopened.list_habits()] == ["Wait for Setup"]


class TestSeedDefaults:
    """Test first-run seeding."""

    def test_seed_once(self, store):
        assert seed_defaults(store, today=date(2024, 3, 1)) is True
        assert seed_defaults(store, today=date(2024, 3, 1)) is False

        assert len(store.list_habits()) == 4
        assert len(store.list_goals()) == 3

    def test_goal_deadlines_relative_to_seed_day(self, store):
        seed_defaults(store, today=date(2024, 3, 1))

        deadlines = {g.title: g.deadline for g in store.list_goals()}

        assert deadlines["Monthly Profit Target"] == "2024-03-31"
        assert deadlines["Trading Journal Consistency"] == "2024-05-30"
        assert all(g.current_value == "0" for g in store.list_goals())

    def test_profile_lists_override(self, store):
        config = Config(
            default_habits=[{"name": "One Trade Maximum", "category": "Risk Management"}],
            default_goals=[{
                "title": "Green Weeks",
                "target_value": "4",
                "unit": "weeks",
                "category": "profit",
            }],
        )

        seed_defaults(store, config)

        habits = store.list_habits()
        assert [h.name for h in habits] == ["One Trade Maximum"]
        assert habits[0].category == "Risk Management"
        goal, = store.list_goals()
        assert goal.title == "Green Weeks"
        assert goal.deadline is None

    def test_non_empty_store_untouched(self, store):
        store.create_habit(name="Mine")

        assert seed_defaults(store) is False
        assert [h.name for h in store.list_habits()] == ["Mine"]

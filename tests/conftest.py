"""
Shared fixtures.

Aggregation tests run against both store backends.
"""

import sys
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from disciplinetx.core.config import Config
from disciplinetx.store.memory import MemoryStore
from disciplinetx.store.sql import SqlStore


@pytest.fixture
def memory_config() -> Config:
    return Config(database_path=":memory:", store_backend="memory", seed_defaults=False)


@pytest.fixture
def sql_config() -> Config:
    return Config(database_path=":memory:", store_backend="sql", seed_defaults=False)


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_config, sql_config):
    """An empty store of each backend."""
    if request.param == "memory":
        return MemoryStore()
    return SqlStore.from_config(sql_config)


@pytest.fixture
def make_habits(store):
    """Create N habits and return them."""
    def _make(*names):
        return [store.create_habit(name=name) for name in names]
    return _make

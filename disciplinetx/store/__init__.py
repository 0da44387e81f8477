"""
Record store backends for DisciplineTX.

Pick one at startup with create_store() and pass it to the
analytics functions; there is no module-level store.
"""

import logging

from disciplinetx.core.config import Config
from disciplinetx.store.base import RecordStore
from disciplinetx.store.memory import MemoryStore
from disciplinetx.store.seed import seed_defaults
from disciplinetx.store.sql import SqlStore

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "sql")


def create_store(config: Config) -> RecordStore:
    """
    Build the configured store and seed defaults if it is empty.

    Raises ValueError for an unknown backend name.
    """
    backend = config.store_backend.lower()
    if backend == "memory":
        store: RecordStore = MemoryStore()
    elif backend == "sql":
        store = SqlStore.from_config(config)
    else:
        raise ValueError(f"Invalid store backend: {config.store_backend} (expected one of: {', '.join(BACKENDS)})")

    logger.info(f"Using {backend} store")

    if config.seed_defaults:
        seed_defaults(store, config)

    return store


__all__ = ["RecordStore", "MemoryStore", "SqlStore", "create_store", "seed_defaults"]

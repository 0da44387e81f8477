"""
Database session management.

Provides explicit ORM session handling with SQLAlchemy.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from disciplinetx.core.config import Config
from disciplinetx.core.models import Base

MEMORY_DATABASE = ":memory:"


def get_engine(config: Config) -> Engine:
    """
    Create SQLAlchemy engine.

    Uses SQLite with WAL mode for file databases. An in-memory
    database shares a single connection so every session sees the same data.
    """
    if config.database_path == MEMORY_DATABASE:
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    db_path = Path(config.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )

    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    return engine


def init_db(engine: Engine) -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist.
    """
    Base.metadata.create_all(engine)


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Build a session factory bound to the engine.

    Objects stay readable after commit so they can be returned
    to callers once the session is closed.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Provide transactional scope around a series of operations.

    Usage:
        with session_scope(factory) as session:
            session.add(habit)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

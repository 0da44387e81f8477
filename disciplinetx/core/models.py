"""
Database models for DisciplineTX.

Models: Habit, HabitCompletion, EmotionalCheckIn, JournalEntry,
TradeReview, GoalTracking, RiskMetrics.

Dates are stored as canonical YYYY-MM-DD strings so lexical order
matches chronological order. Money and ratio fields are decimal strings.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Mood(str, Enum):
    """Daily emotional check-in label."""
    EXCELLENT = "excellent"
    GOOD = "good"
    NEUTRAL = "neutral"
    STRESSED = "stressed"
    ANGRY = "angry"


class TradeSide(str, Enum):
    """Direction of a reviewed trade."""
    LONG = "long"
    SHORT = "short"


class Habit(Base):
    """
    A daily trading habit.

    Never physically removed: deleting flips is_active to False.
    """

    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), default="custom")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"<Habit {self.id}: {self.name} active={self.is_active}>"


class HabitCompletion(Base):
    """
    Completion flag for one habit on one day.

    At most one row per (habit_id, date).
    """

    __tablename__ = "habit_completions"
    __table_args__ = (UniqueConstraint("habit_id", "date", name="uq_habit_completion_day"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    habit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("habits.id"), nullable=False, index=True
    )
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self) -> str:
        return f"<HabitCompletion habit={self.habit_id} {self.date} completed={self.completed}>"


class EmotionalCheckIn(Base):
    """One mood label per day."""

    __tablename__ = "emotional_check_ins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    mood: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return f"<EmotionalCheckIn {self.date}: {self.mood}>"


class JournalEntry(Base):
    """Free-text journal, one entry per day."""

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<JournalEntry {self.date}: {len(self.content or '')} chars>"


class TradeReview(Base):
    """
    Post-trade review.

    Exit price and PnL stay empty until the trade is closed.
    Many reviews may share a date.
    """

    __tablename__ = "trade_reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    symbol: Mapped[str] = mapped_column(String(50), nullable=False)
    side: Mapped[str] = mapped_column(String(10), default=TradeSide.LONG.value)
    entry_price: Mapped[str] = mapped_column(String(50), nullable=False)
    exit_price: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    quantity: Mapped[str] = mapped_column(String(50), default="1")
    pnl: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    emotional_state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    setup: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    mistakes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    lessons: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<TradeReview {self.id}: {self.date} {self.side} {self.symbol} pnl={self.pnl}>"


class GoalTracking(Base):
    """
    A measurable trading goal.

    Soft-deleted like habits.
    """

    __tablename__ = "goal_tracking"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    target_value: Mapped[str] = mapped_column(String(50), nullable=False)
    current_value: Mapped[str] = mapped_column(String(50), default="0")
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    deadline: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"<GoalTracking {self.id}: {self.title} {self.current_value}/{self.target_value} {self.unit}>"


class RiskMetrics(Base):
    """Daily risk snapshot. Upserts merge only the supplied fields."""

    __tablename__ = "risk_metrics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    account_balance: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    max_drawdown: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    daily_risk: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    position_size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    risk_reward_ratio: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<RiskMetrics {self.date}: balance={self.account_balance}>"

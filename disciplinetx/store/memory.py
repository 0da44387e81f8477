"""
In-memory record store.

Keeps entities in dicts keyed by their natural keys. Nothing is
persisted; useful for tests and throwaway sessions.
"""

import logging
from itertools import count
from typing import Any, Dict, List, Optional, Tuple

from disciplinetx.core.models import (
    EmotionalCheckIn,
    GoalTracking,
    Habit,
    HabitCompletion,
    JournalEntry,
    RiskMetrics,
    TradeReview,
)
from disciplinetx.core.utils import DateLike, normalize_date
from disciplinetx.store.base import (
    GOAL_REQUIRED,
    TRADE_DEFAULTS,
    TRADE_REQUIRED,
    RecordStore,
    check_fields,
    clean_goal_fields,
    clean_trade_fields,
    full_values,
    require_fields,
    validate_mood,
)

logger = logging.getLogger(__name__)


def _in_range(day: str, start: Optional[str], end: Optional[str]) -> bool:
    if start and day < start:
        return False
    if end and day > end:
        return False
    return True


def _bounds(start_date: Optional[DateLike], end_date: Optional[DateLike]) -> Tuple[Optional[str], Optional[str]]:
    start = normalize_date(start_date) if start_date else None
    end = normalize_date(end_date) if end_date else None
    return start, end


class MemoryStore(RecordStore):
    """Dict-backed RecordStore."""

    def __init__(self):
        self._habits: Dict[int, Habit] = {}
        self._completions: Dict[Tuple[int, str], HabitCompletion] = {}
        self._check_ins: Dict[str, EmotionalCheckIn] = {}
        self._journal: Dict[str, JournalEntry] = {}
        self._trades: Dict[int, TradeReview] = {}
        self._goals: Dict[int, GoalTracking] = {}
        self._risk: Dict[str, RiskMetrics] = {}

        self._habit_ids = count(1)
        self._completion_ids = count(1)
        self._check_in_ids = count(1)
        self._journal_ids = count(1)
        self._trade_ids = count(1)
        self._goal_ids = count(1)
        self._risk_ids = count(1)

    def is_empty(self) -> bool:
        return not self._habits and not self._goals

    # Habits

    def list_habits(self) -> List[Habit]:
        return sorted(
            (h for h in self._habits.values() if h.is_active),
            key=lambda h: h.name,
        )

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        return self._habits.get(habit_id)

    def create_habit(
        self,
        name: str,
        description: Optional[str] = None,
        category: str = "custom",
    ) -> Habit:
        require_fields(Habit, {"name": name}, ("name",))
        habit = Habit(
            id=next(self._habit_ids),
            name=name,
            description=description or None,
            category=category or "custom",
            is_active=True,
        )
        self._habits[habit.id] = habit
        logger.info(f"Created habit: {habit}")
        return habit

    def update_habit(self, habit_id: int, **fields: Any) -> Optional[Habit]:
        check_fields(Habit, fields)
        habit = self._habits.get(habit_id)
        if not habit:
            return None

        for key, value in fields.items():
            setattr(habit, key, value)
        return habit

    def delete_habit(self, habit_id: int) -> bool:
        habit = self._habits.get(habit_id)
        if not habit:
            return False

        habit.is_active = False
        logger.info(f"Soft-deleted habit: {habit}")
        return True

    # Habit completions

    def get_habit_completions(
        self,
        habit_id: int,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[HabitCompletion]:
        start, end = _bounds(start_date, end_date)
        completions = [
            c for c in self._completions.values()
            if c.habit_id == habit_id and _in_range(c.date, start, end)
        ]
        return sorted(completions, key=lambda c: c.date)

    def get_habit_completion(self, habit_id: int, date: DateLike) -> Optional[HabitCompletion]:
        return self._completions.get((habit_id, normalize_date(date)))

    def upsert_habit_completion(
        self,
        habit_id: int,
        date: DateLike,
        completed: bool = False,
    ) -> HabitCompletion:
        key = (habit_id, normalize_date(date))
        existing = self._completions.get(key)

        if existing:
            existing.completed = bool(completed)
            return existing

        completion = HabitCompletion(
            id=next(self._completion_ids),
            habit_id=habit_id,
            date=key[1],
            completed=bool(completed),
        )
        self._completions[key] = completion
        return completion

    # Emotional check-ins

    def get_emotional_check_in(self, date: DateLike) -> Optional[EmotionalCheckIn]:
        return self._check_ins.get(normalize_date(date))

    def upsert_emotional_check_in(self, date: DateLike, mood: str) -> EmotionalCheckIn:
        day = normalize_date(date)
        mood = validate_mood(mood)
        existing = self._check_ins.get(day)

        if existing:
            existing.mood = mood
            return existing

        check_in = EmotionalCheckIn(id=next(self._check_in_ids), date=day, mood=mood)
        self._check_ins[day] = check_in
        return check_in

    def list_emotional_check_ins(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[EmotionalCheckIn]:
        start, end = _bounds(start_date, end_date)
        return sorted(
            (c for c in self._check_ins.values() if _in_range(c.date, start, end)),
            key=lambda c: c.date,
        )

    # Journal entries

    def get_journal_entry(self, date: DateLike) -> Optional[JournalEntry]:
        return self._journal.get(normalize_date(date))

    def upsert_journal_entry(self, date: DateLike, content: str) -> JournalEntry:
        day = normalize_date(date)
        existing = self._journal.get(day)

        if existing:
            existing.content = content
            return existing

        entry = JournalEntry(id=next(self._journal_ids), date=day, content=content)
        self._journal[day] = entry
        return entry

    def list_journal_entries(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[JournalEntry]:
        start, end = _bounds(start_date, end_date)
        return sorted(
            (e for e in self._journal.values() if _in_range(e.date, start, end)),
            key=lambda e: e.date,
        )

    # Trade reviews

    def list_trade_reviews(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[TradeReview]:
        start, end = _bounds(start_date, end_date)
        trades = [t for t in self._trades.values() if _in_range(t.date, start, end)]
        # Newest date first, creation order within a day
        trades.sort(key=lambda t: t.id)
        trades.sort(key=lambda t: t.date, reverse=True)
        return trades

    def get_trade_review(self, trade_id: int) -> Optional[TradeReview]:
        return self._trades.get(trade_id)

    def create_trade_review(self, **fields: Any) -> TradeReview:
        check_fields(TradeReview, fields)
        require_fields(TradeReview, fields, TRADE_REQUIRED)
        fields = clean_trade_fields(fields)

        values = full_values(TradeReview, fields, **TRADE_DEFAULTS)
        trade = TradeReview(id=next(self._trade_ids), **values)
        self._trades[trade.id] = trade
        logger.info(f"Created trade review: {trade}")
        return trade

    def update_trade_review(self, trade_id: int, **fields: Any) -> Optional[TradeReview]:
        check_fields(TradeReview, fields)
        trade = self._trades.get(trade_id)
        if not trade:
            return None

        for key, value in clean_trade_fields(fields).items():
            setattr(trade, key, value)
        return trade

    def delete_trade_review(self, trade_id: int) -> bool:
        trade = self._trades.pop(trade_id, None)
        if trade is None:
            return False

        logger.info(f"Deleted trade review: {trade}")
        return True

    # Goals

    def list_goals(self) -> List[GoalTracking]:
        return sorted(
            (g for g in self._goals.values() if g.is_active),
            key=lambda g: g.title,
        )

    def get_goal(self, goal_id: int) -> Optional[GoalTracking]:
        return self._goals.get(goal_id)

    def create_goal(self, **fields: Any) -> GoalTracking:
        check_fields(GoalTracking, fields, protected=("is_active",))
        require_fields(GoalTracking, fields, GOAL_REQUIRED)
        fields = clean_goal_fields(fields)

        values = full_values(GoalTracking, fields, is_active=True)
        values["current_value"] = values["current_value"] or "0"
        values["description"] = values["description"] or None

        goal = GoalTracking(id=next(self._goal_ids), **values)
        self._goals[goal.id] = goal
        logger.info(f"Created goal: {goal}")
        return goal

    def update_goal(self, goal_id: int, **fields: Any) -> Optional[GoalTracking]:
        check_fields(GoalTracking, fields)
        goal = self._goals.get(goal_id)
        if not goal:
            return None

        for key, value in clean_goal_fields(fields).items():
            setattr(goal, key, value)
        return goal

    def delete_goal(self, goal_id: int) -> bool:
        goal = self._goals.get(goal_id)
        if not goal:
            return False

        goal.is_active = False
        logger.info(f"Soft-deleted goal: {goal}")
        return True

    # Risk metrics

    def get_risk_metrics(self, date: DateLike) -> Optional[RiskMetrics]:
        return self._risk.get(normalize_date(date))

    def upsert_risk_metrics(self, date: DateLike, **fields: Any) -> RiskMetrics:
        check_fields(RiskMetrics, fields, protected=("date",))
        day = normalize_date(date)
        values = {k: (str(v) if v is not None else None) for k, v in fields.items()}
        existing = self._risk.get(day)

        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
            return existing

        values["date"] = day
        metrics = RiskMetrics(id=next(self._risk_ids), **full_values(RiskMetrics, values))
        self._risk[day] = metrics
        return metrics

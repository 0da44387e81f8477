"""
SQL record store.

Backs RecordStore with SQLAlchemy. Each operation runs in its own
transactional session; returned objects are detached but stay readable.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from disciplinetx.core.config import Config
from disciplinetx.core.db import get_engine, get_session_factory, init_db, session_scope
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


def _date_filter(query, column, start_date: Optional[DateLike], end_date: Optional[DateLike]):
    if start_date:
        query = query.where(column >= normalize_date(start_date))
    if end_date:
        query = query.where(column <= normalize_date(end_date))
    return query


class SqlStore(RecordStore):
    """SQLAlchemy-backed RecordStore."""

    def __init__(self, engine: Engine):
        self.engine = engine
        init_db(engine)
        self._session_factory = get_session_factory(engine)

    @classmethod
    def from_config(cls, config: Config) -> "SqlStore":
        return cls(get_engine(config))

    def _session(self):
        return session_scope(self._session_factory)

    def is_empty(self) -> bool:
        with self._session() as session:
            habits = session.scalar(select(func.count(Habit.id)))
            goals = session.scalar(select(func.count(GoalTracking.id)))
            return not habits and not goals

    # Habits

    def list_habits(self) -> List[Habit]:
        with self._session() as session:
            query = select(Habit).where(Habit.is_active.is_(True)).order_by(Habit.name)
            return list(session.scalars(query))

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        with self._session() as session:
            return session.get(Habit, habit_id)

    def create_habit(
        self,
        name: str,
        description: Optional[str] = None,
        category: str = "custom",
    ) -> Habit:
        require_fields(Habit, {"name": name}, ("name",))
        with self._session() as session:
            habit = Habit(
                name=name,
                description=description or None,
                category=category or "custom",
                is_active=True,
            )
            session.add(habit)
            session.flush()
            logger.info(f"Created habit: {habit}")
            return habit

    def update_habit(self, habit_id: int, **fields: Any) -> Optional[Habit]:
        check_fields(Habit, fields)
        with self._session() as session:
            habit = session.get(Habit, habit_id)
            if not habit:
                return None

            for key, value in fields.items():
                setattr(habit, key, value)
            session.flush()
            return habit

    def delete_habit(self, habit_id: int) -> bool:
        with self._session() as session:
            habit = session.get(Habit, habit_id)
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
        with self._session() as session:
            query = select(HabitCompletion).where(HabitCompletion.habit_id == habit_id)
            query = _date_filter(query, HabitCompletion.date, start_date, end_date)
            return list(session.scalars(query.order_by(HabitCompletion.date)))

    def _find_completion(self, session: Session, habit_id: int, day: str) -> Optional[HabitCompletion]:
        query = select(HabitCompletion).where(
            HabitCompletion.habit_id == habit_id,
            HabitCompletion.date == day,
        )
        return session.scalars(query).first()

    def get_habit_completion(self, habit_id: int, date: DateLike) -> Optional[HabitCompletion]:
        with self._session() as session:
            return self._find_completion(session, habit_id, normalize_date(date))

    def upsert_habit_completion(
        self,
        habit_id: int,
        date: DateLike,
        completed: bool = False,
    ) -> HabitCompletion:
        day = normalize_date(date)
        with self._session() as session:
            completion = self._find_completion(session, habit_id, day)
            if completion:
                completion.completed = bool(completed)
            else:
                completion = HabitCompletion(habit_id=habit_id, date=day, completed=bool(completed))
                session.add(completion)
            session.flush()
            return completion

    # Emotional check-ins

    def get_emotional_check_in(self, date: DateLike) -> Optional[EmotionalCheckIn]:
        with self._session() as session:
            query = select(EmotionalCheckIn).where(EmotionalCheckIn.date == normalize_date(date))
            return session.scalars(query).first()

    def upsert_emotional_check_in(self, date: DateLike, mood: str) -> EmotionalCheckIn:
        day = normalize_date(date)
        mood = validate_mood(mood)
        with self._session() as session:
            check_in = session.scalars(
                select(EmotionalCheckIn).where(EmotionalCheckIn.date == day)
            ).first()
            if check_in:
                check_in.mood = mood
            else:
                check_in = EmotionalCheckIn(date=day, mood=mood)
                session.add(check_in)
            session.flush()
            return check_in

    def list_emotional_check_ins(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[EmotionalCheckIn]:
        with self._session() as session:
            query = _date_filter(select(EmotionalCheckIn), EmotionalCheckIn.date, start_date, end_date)
            return list(session.scalars(query.order_by(EmotionalCheckIn.date)))

    # Journal entries

    def get_journal_entry(self, date: DateLike) -> Optional[JournalEntry]:
        with self._session() as session:
            query = select(JournalEntry).where(JournalEntry.date == normalize_date(date))
            return session.scalars(query).first()

    def upsert_journal_entry(self, date: DateLike, content: str) -> JournalEntry:
        day = normalize_date(date)
        with self._session() as session:
            entry = session.scalars(select(JournalEntry).where(JournalEntry.date == day)).first()
            if entry:
                entry.content = content
            else:
                entry = JournalEntry(date=day, content=content)
                session.add(entry)
            session.flush()
            return entry

    def list_journal_entries(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[JournalEntry]:
        with self._session() as session:
            query = _date_filter(select(JournalEntry), JournalEntry.date, start_date, end_date)
            return list(session.scalars(query.order_by(JournalEntry.date)))

    # Trade reviews

    def list_trade_reviews(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[TradeReview]:
        with self._session() as session:
            query = _date_filter(select(TradeReview), TradeReview.date, start_date, end_date)
            query = query.order_by(TradeReview.date.desc(), TradeReview.id)
            return list(session.scalars(query))

    def get_trade_review(self, trade_id: int) -> Optional[TradeReview]:
        with self._session() as session:
            return session.get(TradeReview, trade_id)

    def create_trade_review(self, **fields: Any) -> TradeReview:
        check_fields(TradeReview, fields)
        require_fields(TradeReview, fields, TRADE_REQUIRED)
        with self._session() as session:
            trade = TradeReview(**full_values(TradeReview, clean_trade_fields(fields), **TRADE_DEFAULTS))
            session.add(trade)
            session.flush()
            logger.info(f"Created trade review: {trade}")
            return trade

    def update_trade_review(self, trade_id: int, **fields: Any) -> Optional[TradeReview]:
        check_fields(TradeReview, fields)
        with self._session() as session:
            trade = session.get(TradeReview, trade_id)
            if not trade:
                return None

            for key, value in clean_trade_fields(fields).items():
                setattr(trade, key, value)
            session.flush()
            return trade

    def delete_trade_review(self, trade_id: int) -> bool:
        with self._session() as session:
            trade = session.get(TradeReview, trade_id)
            if not trade:
                return False

            session.delete(trade)
            logger.info(f"Deleted trade review: {trade}")
            return True

    # Goals

    def list_goals(self) -> List[GoalTracking]:
        with self._session() as session:
            query = (
                select(GoalTracking)
                .where(GoalTracking.is_active.is_(True))
                .order_by(GoalTracking.title)
            )
            return list(session.scalars(query))

    def get_goal(self, goal_id: int) -> Optional[GoalTracking]:
        with self._session() as session:
            return session.get(GoalTracking, goal_id)

    def create_goal(self, **fields: Any) -> GoalTracking:
        check_fields(GoalTracking, fields, protected=("is_active",))
        require_fields(GoalTracking, fields, GOAL_REQUIRED)
        fields = clean_goal_fields(fields)
        fields["current_value"] = fields.get("current_value") or "0"
        fields["description"] = fields.get("description") or None
        with self._session() as session:
            goal = GoalTracking(**full_values(GoalTracking, fields, is_active=True))
            session.add(goal)
            session.flush()
            logger.info(f"Created goal: {goal}")
            return goal

    def update_goal(self, goal_id: int, **fields: Any) -> Optional[GoalTracking]:
        check_fields(GoalTracking, fields)
        with self._session() as session:
            goal = session.get(GoalTracking, goal_id)
            if not goal:
                return None

            for key, value in clean_goal_fields(fields).items():
                setattr(goal, key, value)
            session.flush()
            return goal

    def delete_goal(self, goal_id: int) -> bool:
        with self._session() as session:
            goal = session.get(GoalTracking, goal_id)
            if not goal:
                return False

            goal.is_active = False
            logger.info(f"Soft-deleted goal: {goal}")
            return True

    # Risk metrics

    def get_risk_metrics(self, date: DateLike) -> Optional[RiskMetrics]:
        with self._session() as session:
            query = select(RiskMetrics).where(RiskMetrics.date == normalize_date(date))
            return session.scalars(query).first()

    def upsert_risk_metrics(self, date: DateLike, **fields: Any) -> RiskMetrics:
        check_fields(RiskMetrics, fields, protected=("date",))
        day = normalize_date(date)
        values = {k: (str(v) if v is not None else None) for k, v in fields.items()}
        with self._session() as session:
            metrics = session.scalars(select(RiskMetrics).where(RiskMetrics.date == day)).first()
            if not metrics:
                metrics = RiskMetrics(**full_values(RiskMetrics, {"date": day}))
                session.add(metrics)
            for key, value in values.items():
                setattr(metrics, key, value)
            session.flush()
            return metrics

"""
Record store interface.

Every analytics query is written once against RecordStore; the
in-memory and SQL backends are interchangeable behind it.

Absence is never an error: lookups return None, deletes return False.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Type

from disciplinetx.core.models import (
    Base,
    EmotionalCheckIn,
    GoalTracking,
    Habit,
    HabitCompletion,
    JournalEntry,
    Mood,
    RiskMetrics,
    TradeReview,
    TradeSide,
)
from disciplinetx.core.utils import DateLike, normalize_date, parse_decimal, round_half_up

# Fields callers may never set through update/upsert
PROTECTED_FIELDS = {"id"}

TRADE_REQUIRED = ("date", "symbol", "entry_price")
GOAL_REQUIRED = ("title", "target_value", "unit", "category")

TRADE_DEFAULTS = {"side": TradeSide.LONG.value, "quantity": "1"}


def column_names(model: Type[Base]) -> List[str]:
    """Column names of a model, in table order."""
    return [column.key for column in model.__table__.columns]


def check_fields(model: Type[Base], fields: Dict[str, Any], protected: Iterable[str] = ()) -> None:
    """
    Reject unknown or protected field names.

    Raises ValueError naming the offending fields.
    """
    allowed = set(column_names(model)) - PROTECTED_FIELDS - set(protected)
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise ValueError(f"Invalid {model.__name__} field(s): {', '.join(unknown)}")


def full_values(model: Type[Base], fields: Dict[str, Any], **defaults: Any) -> Dict[str, Any]:
    """
    Every column of the model with an explicit value.

    Unset columns become None unless a default is given, so new
    objects are fully populated before they leave the store.
    """
    values = dict.fromkeys(name for name in column_names(model) if name not in PROTECTED_FIELDS)
    values.update(defaults)
    values.update(fields)
    return values


def require_fields(model: Type[Base], fields: Dict[str, Any], required: Iterable[str]) -> None:
    """Raise ValueError when a required field is missing or empty."""
    missing = [name for name in required if fields.get(name) in (None, "")]
    if missing:
        raise ValueError(f"Missing {model.__name__} field(s): {', '.join(missing)}")


def validate_mood(mood: str) -> str:
    """Normalize a mood label, raising ValueError when unknown."""
    try:
        return Mood(str(mood).strip().lower()).value
    except ValueError:
        valid = ", ".join(m.value for m in Mood)
        raise ValueError(f"Invalid mood: {mood} (expected one of: {valid})") from None


def validate_side(side: str) -> str:
    """Normalize a trade side, raising ValueError when unknown."""
    try:
        return TradeSide(str(side).strip().lower()).value
    except ValueError:
        raise ValueError(f"Invalid trade side: {side}") from None


def clean_trade_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize trade review fields before storage.

    Date becomes a canonical key, side is validated, numbers become strings.
    """
    cleaned = dict(fields)
    if "date" in cleaned:
        cleaned["date"] = normalize_date(cleaned["date"])
    if "side" in cleaned and cleaned["side"] is not None:
        cleaned["side"] = validate_side(cleaned["side"])
    if "symbol" in cleaned and cleaned["symbol"]:
        cleaned["symbol"] = cleaned["symbol"].upper()
    for key in ("entry_price", "exit_price", "quantity", "pnl"):
        if cleaned.get(key) is not None:
            cleaned[key] = str(cleaned[key])
    if cleaned.get("rating") is not None:
        rating = int(cleaned["rating"])
        if not 1 <= rating <= 5:
            raise ValueError(f"Invalid rating: {rating} (expected 1-5)")
        cleaned["rating"] = rating
    return cleaned


def calculate_pnl(side: str, entry_price: Any, exit_price: Any, quantity: Any = None) -> Optional[str]:
    """
    Realized PnL as a 2dp string, or None when a price is not numeric.

    A missing or non-numeric quantity counts as 1; a zero quantity gives 0.00.
    """
    entry = parse_decimal(entry_price)
    exit_ = parse_decimal(exit_price)
    if entry is None or exit_ is None:
        return None

    qty = parse_decimal(quantity)
    if qty is None:
        qty = 1

    move = exit_ - entry if validate_side(side) == TradeSide.LONG.value else entry - exit_
    return f"{round_half_up(move * qty, 2):.2f}"


def clean_goal_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize goal fields before storage."""
    cleaned = dict(fields)
    if cleaned.get("deadline") is not None:
        cleaned["deadline"] = normalize_date(cleaned["deadline"])
    for key in ("target_value", "current_value"):
        if cleaned.get(key) is not None:
            cleaned[key] = str(cleaned[key])
    return cleaned


class RecordStore(ABC):
    """
    Storage capability consumed by the analytics layer.

    Soft-deleted habits and goals remain readable by id but are
    excluded from list_habits/list_goals and from every aggregation.
    """

    # Habits

    @abstractmethod
    def list_habits(self) -> List[Habit]:
        """Active habits ordered by name."""

    @abstractmethod
    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Habit by id, including soft-deleted ones."""

    @abstractmethod
    def create_habit(
        self,
        name: str,
        description: Optional[str] = None,
        category: str = "custom",
    ) -> Habit:
        ...

    @abstractmethod
    def update_habit(self, habit_id: int, **fields: Any) -> Optional[Habit]:
        ...

    @abstractmethod
    def delete_habit(self, habit_id: int) -> bool:
        """Soft-delete. Returns False when the id is unknown."""

    # Habit completions

    @abstractmethod
    def get_habit_completions(
        self,
        habit_id: int,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[HabitCompletion]:
        """Completion records for a habit, ascending by date, bounds inclusive."""

    @abstractmethod
    def get_habit_completion(self, habit_id: int, date: DateLike) -> Optional[HabitCompletion]:
        ...

    @abstractmethod
    def upsert_habit_completion(
        self,
        habit_id: int,
        date: DateLike,
        completed: bool = False,
    ) -> HabitCompletion:
        ...

    # Emotional check-ins

    @abstractmethod
    def get_emotional_check_in(self, date: DateLike) -> Optional[EmotionalCheckIn]:
        ...

    @abstractmethod
    def upsert_emotional_check_in(self, date: DateLike, mood: str) -> EmotionalCheckIn:
        ...

    @abstractmethod
    def list_emotional_check_ins(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[EmotionalCheckIn]:
        ...

    # Journal entries

    @abstractmethod
    def get_journal_entry(self, date: DateLike) -> Optional[JournalEntry]:
        ...

    @abstractmethod
    def upsert_journal_entry(self, date: DateLike, content: str) -> JournalEntry:
        ...

    @abstractmethod
    def list_journal_entries(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[JournalEntry]:
        ...

    # Trade reviews

    @abstractmethod
    def list_trade_reviews(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[TradeReview]:
        """Trade reviews in range, newest date first."""

    @abstractmethod
    def get_trade_review(self, trade_id: int) -> Optional[TradeReview]:
        ...

    @abstractmethod
    def create_trade_review(self, **fields: Any) -> TradeReview:
        ...

    @abstractmethod
    def update_trade_review(self, trade_id: int, **fields: Any) -> Optional[TradeReview]:
        ...

    @abstractmethod
    def delete_trade_review(self, trade_id: int) -> bool:
        """Physical delete. Returns False when the id is unknown."""

    # Goals

    @abstractmethod
    def list_goals(self) -> List[GoalTracking]:
        """Active goals ordered by title."""

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[GoalTracking]:
        ...

    @abstractmethod
    def create_goal(self, **fields: Any) -> GoalTracking:
        ...

    @abstractmethod
    def update_goal(self, goal_id: int, **fields: Any) -> Optional[GoalTracking]:
        ...

    @abstractmethod
    def delete_goal(self, goal_id: int) -> bool:
        """Soft-delete. Returns False when the id is unknown."""

    # Risk metrics

    @abstractmethod
    def get_risk_metrics(self, date: DateLike) -> Optional[RiskMetrics]:
        ...

    @abstractmethod
    def upsert_risk_metrics(self, date: DateLike, **fields: Any) -> RiskMetrics:
        """Insert or merge the supplied fields into the day's metrics."""

    @abstractmethod
    def is_empty(self) -> bool:
        """True when no habits or goals exist, active or not."""

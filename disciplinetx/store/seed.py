"""
Default habits and goals for a fresh store.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from disciplinetx.core.config import Config
from disciplinetx.core.utils import format_date
from disciplinetx.store.base import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_HABITS: List[Dict[str, Any]] = [
    {
        "name": "Avoid Overtrading",
        "description": "Maximum 3 trades per day, focus on quality over quantity",
        "category": "Risk Management",
    },
    {
        "name": "Honor Stop Losses",
        "description": "Exit positions when stop loss is hit, no exceptions",
        "category": "Risk Management",
    },
    {
        "name": "Wait for Setup",
        "description": "Only trade when all criteria are met, be patient",
        "category": "Emotional Control",
    },
    {
        "name": "Review Trades Daily",
        "description": "Spend 10 minutes analyzing today's trades",
        "category": "Analysis & Research",
    },
]

# deadline_days is relative to the seed date
DEFAULT_GOALS: List[Dict[str, Any]] = [
    {
        "title": "Monthly Profit Target",
        "description": "Achieve consistent monthly profits",
        "target_value": "5000",
        "unit": "USD",
        "deadline_days": 30,
        "category": "profit",
    },
    {
        "title": "Maximum Daily Loss Limit",
        "description": "Never lose more than 2% of account in a single day",
        "target_value": "2",
        "unit": "percent",
        "deadline_days": 365,
        "category": "risk",
    },
    {
        "title": "Trading Journal Consistency",
        "description": "Log every trade with detailed analysis",
        "target_value": "100",
        "unit": "percent",
        "deadline_days": 90,
        "category": "discipline",
    },
]


def seed_defaults(
    store: RecordStore,
    config: Optional[Config] = None,
    today: Optional[date] = None,
) -> bool:
    """
    Create default habits and goals when the store is empty.

    Profile JSON lists replace the built-in ones. Returns True if seeded.
    """
    if not store.is_empty():
        return False

    today = today or date.today()
    habits = (config.default_habits if config and config.default_habits else None) or DEFAULT_HABITS
    goals = (config.default_goals if config and config.default_goals else None) or DEFAULT_GOALS

    for habit in habits:
        store.create_habit(
            name=habit["name"],
            description=habit.get("description"),
            category=habit.get("category", "custom"),
        )

    for goal in goals:
        fields = {k: v for k, v in goal.items() if k != "deadline_days"}
        if "deadline_days" in goal:
            fields["deadline"] = format_date(today + timedelta(days=goal["deadline_days"]))
        fields.setdefault("current_value", "0")
        store.create_goal(**fields)

    logger.info(f"Seeded {len(habits)} habits and {len(goals)} goals")
    return True

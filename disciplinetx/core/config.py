"""
Configuration management for DisciplineTX.

Loads settings from JSON profile templates and environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List


@dataclass
class Config:
    """Application configuration."""

    # Storage
    database_path: str = "data/disciplinetx.db"
    store_backend: str = "sql"  # "sql" or "memory"
    seed_defaults: bool = True

    # Telegram
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None

    # Guardrails (from profile JSON)
    max_trades_per_day: int = 3
    max_daily_loss_pct: float = 2.0

    # Seed data (from profile JSON, None means built-in defaults)
    default_habits: Optional[List[Dict[str, Any]]] = None
    default_goals: Optional[List[Dict[str, Any]]] = None

    # Logging
    log_level: str = "INFO"

    # Profile template name
    profile_template: str = "default"

    @classmethod
    def _load_json(cls, json_path: Path) -> Dict[str, Any]:
        """Load JSON configuration file."""
        if not json_path.exists():
            raise FileNotFoundError(f"Config file not found: {json_path}")

        with open(json_path, 'r') as f:
            return json.load(f)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from JSON profile + environment variables."""
        profile_name = os.getenv("PROFILE_TEMPLATE", "default")
        profile_path = Path(f"config/profiles/{profile_name}.json")
        profile_data = cls._load_json(profile_path)

        guardrails = profile_data.get("guardrails", {})

        config = cls(
            database_path=os.getenv("DISCIPLINETX_DB_PATH", "data/disciplinetx.db"),
            store_backend=os.getenv("STORE_BACKEND", "sql").lower(),
            seed_defaults=os.getenv("SEED_DEFAULTS", "true").lower() in ("1", "true", "yes"),
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN"),
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID"),

            # From profile JSON
            max_trades_per_day=guardrails.get("max_trades_per_day", 3),
            max_daily_loss_pct=guardrails.get("max_daily_loss_pct", 2.0),
            default_habits=profile_data.get("default_habits"),
            default_goals=profile_data.get("default_goals"),

            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            profile_template=profile_name,
        )

        return config

    def get_summary(self) -> str:
        """Get a summary of current settings."""
        return f"""Profile: {self.profile_template}
Store: {self.store_backend} ({self.database_path})
Seed defaults: {'Yes' if self.seed_defaults else 'No'}

Guardrails:
  Max Trades/Day: {self.max_trades_per_day}
  Max Daily Loss: {self.max_daily_loss_pct}%

Telegram: {'configured' if self.telegram_bot_token and self.telegram_chat_id else 'not configured'}
"""


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

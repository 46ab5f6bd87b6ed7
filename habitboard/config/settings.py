# habitboard/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./habitboard.db"


def _require(env: dict[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_timezone(value: str, key_name: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise RuntimeError(f"Invalid timezone for {key_name}: {value!r}") from e
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str

    # --- optional ---
    database_url: str = DEFAULT_DATABASE_URL

    # --- time ---
    # "today" for week windows is taken in this zone
    timezone: str = "UTC"

    # --- rendering ---
    card_title: str = "Habit Leaderboard"

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required or malformed fields.
        """
        load_dotenv()
        env = os.environ

        bot_token = _require(env, "BOT_TOKEN")

        database_url = (env.get("DATABASE_URL") or DEFAULT_DATABASE_URL).strip()

        timezone = (env.get("TIMEZONE") or "UTC").strip() or "UTC"
        timezone = _to_timezone(timezone, "TIMEZONE")

        card_title = (env.get("LEADERBOARD_CARD_TITLE") or "Habit Leaderboard").strip() or "Habit Leaderboard"
        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            bot_token=bot_token,
            database_url=database_url,
            timezone=timezone,
            card_title=card_title,
            environment=environment,
        )

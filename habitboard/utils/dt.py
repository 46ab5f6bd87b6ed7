# habitboard/utils/dt.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from habitboard.config.settings import Settings


@dataclass(frozen=True, slots=True)
class TimeProvider:
    """
    Source of "today" for week windows. Completion keys are calendar dates,
    so the configured zone decides where a day ends.
    """
    timezone: str = "UTC"

    @classmethod
    def from_settings(cls, settings: Settings) -> "TimeProvider":
        return cls(timezone=settings.timezone)

    def now(self) -> datetime:
        return datetime.now(tz=ZoneInfo(self.timezone))

    def today(self) -> date:
        return self.now().date()

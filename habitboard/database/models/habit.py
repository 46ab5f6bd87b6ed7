# habitboard/database/models/habit.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitboard.database.base import Base

if TYPE_CHECKING:
    from habitboard.database.models.user import UserProfile


def _new_habit_id() -> str:
    return uuid.uuid4().hex


class Habit(Base):
    """
    A tracked habit. Completion data is stored exactly as the clients write it:
    - completed_dates: ["YYYY-MM-DD", ...] for boolean habits
    - completed_values: {"YYYY-MM-DD": number} for number habits

    is_custom is kept as raw JSON: older clients wrote the string "true".
    """
    __tablename__ = "habits"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_habit_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(128), default="", nullable=False)
    type: Mapped[str] = mapped_column(String(16), default="boolean", nullable=False)  # boolean | number
    target: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(32), nullable=True)

    is_custom: Mapped[Any] = mapped_column(JSON, nullable=True)
    completed_dates: Mapped[Any] = mapped_column(JSON, nullable=True)
    completed_values: Mapped[Any] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )

    user: Mapped["UserProfile"] = relationship(back_populates="habits")

    def to_document(self) -> dict[str, Any]:
        """Stored record shape (camelCase keys, as the clients persist it)."""
        doc: dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "type": self.type,
        }
        if self.target is not None:
            doc["target"] = self.target
        if self.unit is not None:
            doc["unit"] = self.unit
        if self.is_custom is not None:
            doc["isCustom"] = self.is_custom
        if self.completed_dates is not None:
            doc["completedDates"] = self.completed_dates
        if self.completed_values is not None:
            doc["completedValues"] = self.completed_values
        return doc

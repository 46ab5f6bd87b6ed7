# habitboard/database/models/user.py
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitboard.database.base import Base

if TYPE_CHECKING:
    from habitboard.database.models.habit import Habit

DEFAULT_AVATAR = "👤"


class UserProfile(Base):
    """
    Public profile of a community member.

    `id` is the auth identity (Telegram users are stored as str(telegram_id)).
    """
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    avatar: Mapped[str] = mapped_column(String(16), default=DEFAULT_AVATAR, nullable=False)

    # leaderboard opt-in
    show_on_leaderboard: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    total_weeks_active: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )

    habits: Mapped[list["Habit"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

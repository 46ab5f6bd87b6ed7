# habitboard/database/repo/habits.py
from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models.habit import Habit


async def list_habits(session: AsyncSession, user_id: str) -> list[dict[str, Any]]:
    """
    All habits of a user as stored documents (camelCase keys).
    Custom habits are included; scoring filters them out after decoding.
    """
    q = (
        select(Habit)
        .where(Habit.user_id == user_id)
        .order_by(Habit.created_at.asc(), Habit.id.asc())
    )
    res = await session.execute(q)
    return [h.to_document() for h in res.scalars().all()]


async def add_habit(
    session: AsyncSession,
    user_id: str,
    *,
    name: str,
    habit_type: str = "boolean",
    target: float | None = None,
    unit: str | None = None,
    is_custom: Any = None,
    completed_dates: Sequence[str] | None = None,
    completed_values: Mapping[str, Any] | None = None,
    habit_id: str | None = None,
) -> Habit:
    habit = Habit(
        user_id=user_id,
        name=name,
        type=habit_type,
        target=target,
        unit=unit,
        is_custom=is_custom,
        completed_dates=list(completed_dates) if completed_dates is not None else None,
        completed_values=dict(completed_values) if completed_values is not None else None,
    )
    if habit_id is not None:
        habit.id = habit_id

    session.add(habit)
    await session.flush()  # habit.id / created_at available now
    return habit

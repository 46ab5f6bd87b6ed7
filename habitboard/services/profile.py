# habitboard/services/profile.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models import DEFAULT_AVATAR
from habitboard.database.repo import habits as habits_repo
from habitboard.database.repo import users as users_repo
from habitboard.services.scoring import (
    Cell,
    HabitRecord,
    HabitType,
    Score,
    daily_completion_grid,
    daily_score,
    decode_habits,
    eligible_habits,
)
from habitboard.services.user import ANONYMOUS
from habitboard.utils.week import is_current_week, range_label, week_dates, week_start

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HabitWeekSummary:
    habit_id: str
    name: str
    type: HabitType
    target: Score
    unit: str | None
    cells: tuple[Cell, ...]  # one per day, Sat..Fri
    weekly_total: Score  # sum of values (number) / completed days (boolean)
    completion_percentage: int


@dataclass(frozen=True, slots=True)
class WeeklyView:
    week_start: date
    dates: tuple[date, ...]
    range_label: str
    is_current_week: bool
    daily_scores: tuple[Score, ...]
    weekly_score: Score
    grid: dict[tuple[str, date], Cell]
    habits: tuple[HabitWeekSummary, ...]


@dataclass(frozen=True, slots=True)
class ProfileView:
    user_id: str
    display_name: str
    avatar: str
    joined_at: datetime | None
    week: WeeklyView


def _summarize(habit: HabitRecord, dates: Sequence[date], grid: dict[tuple[str, date], Cell]) -> HabitWeekSummary:
    cells = tuple(grid[(habit.id, d)] for d in dates)
    completed_days = sum(1 for c in cells if c.completed)

    if habit.type is HabitType.NUMBER:
        weekly_total: Score = sum((c.value for c in cells), 0)
    else:
        weekly_total = completed_days

    return HabitWeekSummary(
        habit_id=habit.id,
        name=habit.name,
        type=habit.type,
        target=habit.target,
        unit=habit.unit,
        cells=cells,
        weekly_total=weekly_total,
        completion_percentage=round(completed_days / len(dates) * 100) if dates else 0,
    )


def weekly_view(habits: Iterable[HabitRecord], reference: date, today: date) -> WeeklyView:
    """
    One user's Sat..Fri week around `reference`. Stateless: navigating to
    another week is just another call.
    """
    scoring = eligible_habits(habits)
    dates = week_dates(reference)
    grid = daily_completion_grid(scoring, dates)
    daily = tuple(daily_score(scoring, d) for d in dates)

    return WeeklyView(
        week_start=week_start(reference),
        dates=tuple(dates),
        range_label=range_label(reference),
        is_current_week=is_current_week(reference, today),
        daily_scores=daily,
        weekly_score=sum(daily, 0),
        grid=grid,
        habits=tuple(_summarize(h, dates, grid) for h in scoring),
    )


class ProfileService:
    @staticmethod
    async def compute_profile_view(
        session: AsyncSession,
        user_id: str,
        reference: date,
        *,
        today: date,
    ) -> ProfileView | None:
        """
        Returns None when the user has no profile. Habit read errors degrade
        to an empty week instead of failing the view.
        """
        profile = await users_repo.get_user(session, user_id)
        if profile is None:
            return None

        try:
            docs = await habits_repo.list_habits(session, user_id)
        except SQLAlchemyError:
            log.exception("Failed to load habits for profile %s", user_id)
            docs = []

        return ProfileView(
            user_id=profile.id,
            display_name=profile.display_name or ANONYMOUS,
            avatar=profile.avatar or DEFAULT_AVATAR,
            joined_at=profile.joined_at,
            week=weekly_view(decode_habits(docs), reference, today),
        )

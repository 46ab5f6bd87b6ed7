# habitboard/services/leaderboard.py
"""
Time-windowed leaderboard.

build_leaderboard() is pure: users + their habits in, ranked entries out.
LeaderboardService wires it to the database; nothing is cached between calls.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models import DEFAULT_AVATAR, UserProfile
from habitboard.database.repo import habits as habits_repo
from habitboard.database.repo import users as users_repo
from habitboard.services.scoring import HabitRecord, Score, decode_habits, eligible_habits, score_for_window
from habitboard.services.user import ANONYMOUS, UserService
from habitboard.utils.week import range_label, rolling_window, week_dates

log = logging.getLogger(__name__)


class TimeFrame(str, enum.Enum):
    CURRENT_WEEK = "currentWeek"
    LAST_WEEK = "lastWeek"
    ALL_TIME = "allTime"  # rolling 28 days

    @classmethod
    def parse(cls, raw: str | None) -> "TimeFrame":
        try:
            return cls(raw)
        except ValueError:
            return cls.CURRENT_WEEK


def window_for(time_frame: TimeFrame, today: date) -> list[date]:
    if time_frame is TimeFrame.LAST_WEEK:
        return week_dates(today - timedelta(days=7))
    if time_frame is TimeFrame.ALL_TIME:
        return rolling_window(today)
    return week_dates(today)


# ------------------------
# Row DTOs
# ------------------------

@dataclass(frozen=True, slots=True)
class LeaderboardUser:
    user_id: str
    display_name: str | None = None
    avatar: str | None = None
    show_on_leaderboard: bool = True
    joined_at: datetime | None = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "LeaderboardUser":
        return cls(
            user_id=profile.id,
            display_name=profile.display_name,
            avatar=profile.avatar,
            show_on_leaderboard=bool(profile.show_on_leaderboard),
            joined_at=profile.joined_at,
        )


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    user_id: str
    display_name: str
    avatar: str
    score: Score
    total_habits: int
    joined_at: datetime | None = None
    is_current_user: bool = False
    rank: int = 0


@dataclass(frozen=True, slots=True)
class Skipped:
    user_id: str
    reason: str


UserHabits = Union[Sequence[HabitRecord], BaseException]


@dataclass(frozen=True, slots=True)
class LeaderboardResult:
    """
    Partial-success aggregate: `entries` are the ranked rows, `skipped` the
    users that could not be scored. `error` is set only when nothing could be
    loaded at all (entries are then empty).
    """
    time_frame: TimeFrame
    window: tuple[date, ...]
    entries: tuple[LeaderboardEntry, ...] = ()
    skipped: tuple[Skipped, ...] = ()
    scored_count: int = 0
    error: str | None = None

    @property
    def total_points(self) -> Score:
        return sum((e.score for e in self.entries), 0)

    @property
    def average_score(self) -> int:
        if not self.entries:
            return 0
        # half-up, matching how the web client rounds
        return math.floor(self.total_points / len(self.entries) + 0.5)

    @property
    def current_user_entry(self) -> LeaderboardEntry | None:
        return next((e for e in self.entries if e.is_current_user), None)


# ------------------------
# Pure pipeline
# ------------------------

def apply_zero_score_policy(candidates: Sequence[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """
    Zeros are hidden only when somebody actually scored; an idle community
    still lists its members.
    """
    if any(c.score > 0 for c in candidates):
        return [c for c in candidates if c.score != 0]
    return list(candidates)


def rank_entries(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    # sorted() is stable, equal scores keep input order
    ordered = sorted(entries, key=lambda e: e.score, reverse=True)
    return [replace(e, rank=i) for i, e in enumerate(ordered, start=1)]


def mark_current_user(entries: Iterable[LeaderboardEntry], current_user_id: str | None) -> list[LeaderboardEntry]:
    return [replace(e, is_current_user=(current_user_id is not None and e.user_id == current_user_id)) for e in entries]


def build_leaderboard(
    users: Iterable[LeaderboardUser],
    habits_by_user: Mapping[str, UserHabits],
    time_frame: TimeFrame,
    current_user_id: str | None,
    today: date,
) -> LeaderboardResult:
    dates = window_for(time_frame, today)

    candidates: list[LeaderboardEntry] = []
    skipped: list[Skipped] = []

    for user in users:
        if not user.show_on_leaderboard:
            continue

        habits = habits_by_user.get(user.user_id, ())
        if isinstance(habits, BaseException):
            skipped.append(Skipped(user_id=user.user_id, reason=f"habit fetch failed: {habits!r}"))
            continue

        try:
            scoring = eligible_habits(habits)
            if not scoring:
                # no scoring habits -> not on the board at all
                continue
            score = score_for_window(scoring, dates)
        except Exception as e:
            log.warning("Skipping user %s: %r", user.user_id, e, exc_info=True)
            skipped.append(Skipped(user_id=user.user_id, reason=repr(e)))
            continue

        candidates.append(
            LeaderboardEntry(
                user_id=user.user_id,
                display_name=user.display_name or ANONYMOUS,
                avatar=user.avatar or DEFAULT_AVATAR,
                score=score,
                total_habits=len(scoring),
                joined_at=user.joined_at,
            )
        )

    ranked = rank_entries(apply_zero_score_policy(candidates))

    return LeaderboardResult(
        time_frame=time_frame,
        window=tuple(dates),
        entries=tuple(mark_current_user(ranked, current_user_id)),
        skipped=tuple(skipped),
        scored_count=len(candidates),
    )


# ------------------------
# Display helpers
# ------------------------

RANK_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def rank_badge(rank: int) -> str:
    return RANK_MEDALS.get(rank, f"#{rank}")


def time_frame_label(time_frame: TimeFrame, today: date) -> str:
    if time_frame is TimeFrame.LAST_WEEK:
        return f"Last Week ({range_label(today - timedelta(days=7))})"
    if time_frame is TimeFrame.ALL_TIME:
        return "Last 4 Weeks"
    return f"Current Week ({range_label(today)})"


def standing_line(result: LeaderboardResult) -> str:
    me = result.current_user_entry
    if me is None:
        return "Join the leaderboard!"
    return f"You're ranked #{me.rank}!"


# ------------------------
# Service
# ------------------------

class LeaderboardService:
    """
    Every call reads the store again: switching the time frame or reopening
    the leaderboard always ranks current data.
    """

    async def compute_leaderboard(
        self,
        session: AsyncSession,
        time_frame: TimeFrame,
        current_user_id: str | None,
        *,
        today: date,
    ) -> LeaderboardResult:
        """
        Loads visible users and their habits, then ranks them.

        Never raises for data problems: a user whose habits cannot be read is
        reported in `skipped`; a failed user listing yields an empty result
        with `error` set.
        """
        try:
            profiles = await users_repo.list_users(session, show_on_leaderboard=True)
        except SQLAlchemyError as e:
            log.exception("Failed to list leaderboard users")
            return LeaderboardResult(
                time_frame=time_frame,
                window=tuple(window_for(time_frame, today)),
                error=f"user listing failed: {e!r}",
            )

        users = [LeaderboardUser.from_profile(p) for p in profiles]

        # sequential on purpose: one session, one connection
        habits_by_user: dict[str, UserHabits] = {}
        for user in users:
            try:
                docs = await habits_repo.list_habits(session, user.user_id)
            except SQLAlchemyError as e:
                log.warning("Habit fetch failed for user %s: %r", user.user_id, e)
                habits_by_user[user.user_id] = e
                continue
            habits_by_user[user.user_id] = decode_habits(docs)

        result = build_leaderboard(users, habits_by_user, time_frame, current_user_id, today)

        if result.skipped:
            log.info(
                "Leaderboard %s: %d of %d users scored, %d skipped",
                time_frame.value,
                result.scored_count,
                len(users),
                len(result.skipped),
            )
        return result

    async def toggle_visibility(self, session: AsyncSession, user_id: str) -> bool:
        return await UserService.toggle_visibility(session, user_id)

# habitboard/database/repo/users.py
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models.user import UserProfile

# columns callers may write through upsert_user
_WRITABLE_FIELDS = frozenset(
    {
        "email",
        "display_name",
        "avatar",
        "show_on_leaderboard",
        "is_public",
        "total_weeks_active",
        "joined_at",
    }
)


async def list_users(
    session: AsyncSession,
    *,
    show_on_leaderboard: bool | None = True,
) -> list[UserProfile]:
    """
    Users in stable id order. Pass show_on_leaderboard=None for everybody.
    """
    q = select(UserProfile).order_by(UserProfile.id.asc())
    if show_on_leaderboard is not None:
        q = q.where(UserProfile.show_on_leaderboard == show_on_leaderboard)

    res = await session.execute(q)
    return list(res.scalars().all())


async def get_user(session: AsyncSession, user_id: str) -> Optional[UserProfile]:
    return await session.get(UserProfile, user_id)


async def upsert_user(session: AsyncSession, user_id: str, **fields: Any) -> UserProfile:
    """
    Merge-write: only the given fields are touched, the rest keep their values
    (or column defaults when the row is new).
    """
    unknown = set(fields) - _WRITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown user fields: {sorted(unknown)}")

    user = await session.get(UserProfile, user_id)
    if user is None:
        user = UserProfile(id=user_id, **fields)
        session.add(user)
        await session.flush()  # applies defaults (joined_at etc.)
        await session.refresh(user)
        return user

    for key, value in fields.items():
        setattr(user, key, value)
    await session.flush()
    return user

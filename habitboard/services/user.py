# habitboard/services/user.py
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models import DEFAULT_AVATAR, UserProfile
from habitboard.database.repo.users import get_user, upsert_user

log = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


class ProfileNotFoundError(LookupError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"No profile for user {user_id!r}")
        self.user_id = user_id


def derive_display_name(display_name: str | None, email: str | None) -> str:
    if display_name and display_name.strip():
        return display_name.strip()
    if email and "@" in email:
        local = email.split("@", 1)[0].strip()
        if local:
            return local
    return ANONYMOUS


class UserService:
    @staticmethod
    async def get_or_create_profile(
        session: AsyncSession,
        user_id: str,
        *,
        email: str | None = None,
        display_name: str | None = None,
    ) -> UserProfile:
        """
        Returns the stored profile, creating it with defaults the first time
        a user is seen (visible on the leaderboard, default avatar).
        Existing profiles are returned untouched.
        """
        user = await get_user(session, user_id)
        if user is not None:
            return user

        user = await upsert_user(
            session,
            user_id,
            email=email,
            display_name=derive_display_name(display_name, email),
            avatar=DEFAULT_AVATAR,
            show_on_leaderboard=True,
            is_public=True,
            total_weeks_active=0,
        )
        log.info("Created default profile for user %s", user_id)
        return user

    @staticmethod
    async def toggle_visibility(session: AsyncSession, user_id: str) -> bool:
        user = await get_user(session, user_id)
        if user is None:
            raise ProfileNotFoundError(user_id)

        new_visibility = not user.show_on_leaderboard
        await upsert_user(session, user_id, show_on_leaderboard=new_visibility)
        log.info("User %s leaderboard visibility -> %s", user_id, new_visibility)
        return new_visibility

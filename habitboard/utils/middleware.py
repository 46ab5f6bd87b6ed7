# habitboard/utils/middleware.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from habitboard.database.session import Database
from habitboard.services.user import UserService


def _extract_from_user(event: TelegramObject):
    """
    Best-effort extract aiogram `from_user` from different update types.
    """
    u = getattr(event, "from_user", None)
    if u:
        return u

    msg = getattr(event, "message", None)
    if msg and getattr(msg, "from_user", None):
        return msg.from_user

    cb = getattr(event, "callback_query", None)
    if cb and getattr(cb, "from_user", None):
        return cb.from_user

    return None


def telegram_display_name(username: str | None, first_name: str | None, last_name: str | None) -> str | None:
    if username:
        return f"@{username}"
    name = " ".join([p for p in [first_name, last_name] if p]).strip()
    return name or None


class DbSessionMiddleware(BaseMiddleware):
    """
    Creates a DB session per update and injects it into handler data as `session`.

    The sender's profile is created with defaults on first contact and injected
    as `profile`. Auto-commits on success and rolls back on error.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        async with self.db.session(commit=True) as session:
            data["session"] = session

            tg = _extract_from_user(event)
            if tg is not None:
                data["profile"] = await UserService.get_or_create_profile(
                    session,
                    str(tg.id),
                    display_name=telegram_display_name(tg.username, tg.first_name, tg.last_name),
                )

            return await handler(event, data)

# habitboard/handlers/user/visibility.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models import UserProfile
from habitboard.keyboards.main import BTN_VISIBILITY
from habitboard.services.leaderboard import LeaderboardService
from habitboard.utils.reply import reply_safe

router = Router()


@router.message(Command("visibility"))
@router.message(F.text == BTN_VISIBILITY)
async def visibility_cmd(
    message: Message,
    session: AsyncSession,
    leaderboard: LeaderboardService,
    profile: UserProfile | None = None,
) -> None:
    if profile is None:
        await reply_safe(message, "⚠️ Please try again.")
        return

    visible = await leaderboard.toggle_visibility(session, profile.id)

    if visible:
        text = "👁 You're visible on the leaderboard. Keep building great habits and climb the ranks!"
    else:
        text = "🙈 You're hidden from the leaderboard. Use /visibility again to show up."
    await reply_safe(message, text)

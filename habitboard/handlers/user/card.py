# habitboard/handlers/user/card.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import BufferedInputFile, Message
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.config.settings import Settings
from habitboard.database.models import UserProfile
from habitboard.keyboards.main import BTN_CARD
from habitboard.services.leaderboard import LeaderboardService, TimeFrame, time_frame_label
from habitboard.utils.cards.leaderboard_card import CardRow, render_leaderboard_card
from habitboard.utils.dt import TimeProvider
from habitboard.utils.reply import reply_safe

router = Router()


@router.message(Command("card"))
@router.message(F.text == BTN_CARD)
async def card_cmd(
    message: Message,
    session: AsyncSession,
    settings: Settings,
    leaderboard: LeaderboardService,
    clock: TimeProvider,
    profile: UserProfile | None = None,
) -> None:
    today = clock.today()
    time_frame = TimeFrame.CURRENT_WEEK
    result = await leaderboard.compute_leaderboard(
        session, time_frame, profile.id if profile else None, today=today
    )

    if not result.entries:
        await reply_safe(message, "ℹ️ No scores yet for this period.")
        return

    png = render_leaderboard_card(
        rows=[CardRow.from_entry(e) for e in result.entries],
        subtitle=time_frame_label(time_frame, today),
        title=settings.card_title,
    )
    await message.answer_photo(
        BufferedInputFile(png, filename=f"leaderboard-{today.isoformat()}.png"),
        caption=f"🏆 Top {min(3, len(result.entries))} · {time_frame_label(time_frame, today)}",
    )

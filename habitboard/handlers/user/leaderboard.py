# habitboard/handlers/user/leaderboard.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models import UserProfile
from habitboard.keyboards.main import BTN_LEADERBOARD
from habitboard.keyboards.views import LB_PREFIX, leaderboard_kb
from habitboard.services.leaderboard import LeaderboardResult, LeaderboardService, TimeFrame
from habitboard.services.view_state import ViewStates
from habitboard.utils.dt import TimeProvider
from habitboard.utils.render import format_leaderboard
from habitboard.utils.reply import edit_safe, reply_safe

router = Router()


@router.message(Command("leaderboard"))
@router.message(F.text == BTN_LEADERBOARD)
async def leaderboard_cmd(
    message: Message,
    session: AsyncSession,
    leaderboard: LeaderboardService,
    clock: TimeProvider,
    profile: UserProfile | None = None,
) -> None:
    today = clock.today()
    time_frame = TimeFrame.CURRENT_WEEK
    current_user_id = profile.id if profile else None

    result = await leaderboard.compute_leaderboard(session, time_frame, current_user_id, today=today)

    text = format_leaderboard(result, today, visible=profile.show_on_leaderboard if profile else None)
    await reply_safe(
        message,
        text,
        parse_mode="HTML",
        reply_markup=leaderboard_kb(selected=time_frame, entries=result.entries, today=today),
    )


@router.callback_query(F.data.startswith(LB_PREFIX))
async def leaderboard_time_frame(
    cb: CallbackQuery,
    session: AsyncSession,
    leaderboard: LeaderboardService,
    clock: TimeProvider,
    views: ViewStates[LeaderboardResult],
    profile: UserProfile | None = None,
) -> None:
    try:
        await cb.answer()
    except Exception:
        pass

    if not cb.message:
        return

    today = clock.today()
    time_frame = TimeFrame.parse((cb.data or "")[len(LB_PREFIX):])

    view = views.get(("lb", cb.message.chat.id, cb.message.message_id))
    token = view.begin()

    result = await leaderboard.compute_leaderboard(
        session, time_frame, profile.id if profile else None, today=today
    )

    # a newer tap on the same message already took over
    if not view.commit(token, result):
        return

    await edit_safe(
        cb.message,
        format_leaderboard(result, today, visible=profile.show_on_leaderboard if profile else None),
        reply_markup=leaderboard_kb(selected=time_frame, entries=result.entries, today=today),
    )

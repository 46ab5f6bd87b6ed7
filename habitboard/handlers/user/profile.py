# habitboard/handlers/user/profile.py
from __future__ import annotations

from datetime import date

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from habitboard.database.models import UserProfile
from habitboard.keyboards.main import BTN_PROFILE
from habitboard.keyboards.views import PV_PREFIX, parse_profile_callback, week_nav_kb
from habitboard.services.profile import ProfileService, ProfileView
from habitboard.services.view_state import ViewStates
from habitboard.utils.dt import TimeProvider
from habitboard.utils.render import format_profile
from habitboard.utils.reply import edit_safe, reply_safe

router = Router()


def _nav(view: ProfileView, reference: date, today: date):
    return week_nav_kb(
        user_id=view.user_id,
        reference=reference,
        is_current_week=view.week.is_current_week,
        today=today,
    )


@router.message(Command("profile"))
@router.message(F.text == BTN_PROFILE)
async def profile_cmd(
    message: Message,
    session: AsyncSession,
    clock: TimeProvider,
    profile: UserProfile | None = None,
) -> None:
    if profile is None:
        await reply_safe(message, "⚠️ Please try again.")
        return

    today = clock.today()
    view = await ProfileService.compute_profile_view(session, profile.id, today, today=today)
    if view is None:
        await reply_safe(message, "ℹ️ Profile not found.")
        return

    await reply_safe(
        message,
        format_profile(view, today),
        parse_mode="HTML",
        reply_markup=_nav(view, today, today),
    )


@router.callback_query(F.data.startswith(PV_PREFIX))
async def profile_week(
    cb: CallbackQuery,
    session: AsyncSession,
    clock: TimeProvider,
    views: ViewStates[ProfileView],
) -> None:
    try:
        await cb.answer()
    except Exception:
        pass

    if not cb.message:
        return

    # pv:<user_id>:<YYYY-MM-DD>
    try:
        user_id, reference = parse_profile_callback(cb.data or "")
    except ValueError:
        await cb.message.answer("❌ Invalid view payload.")
        return

    today = clock.today()
    state = views.get(("pv", cb.message.chat.id, cb.message.message_id))
    token = state.begin()

    view = await ProfileService.compute_profile_view(session, user_id, reference, today=today)
    if view is None:
        await cb.message.answer("ℹ️ Profile not found.")
        return

    if not state.commit(token, view):
        return

    text = format_profile(view, today)
    markup = _nav(view, reference, today)

    # leaderboard buttons open a new message, week navigation edits in place
    if cb.message.text and cb.message.text.startswith("🏆"):
        await cb.message.answer(text, parse_mode="HTML", reply_markup=markup)
    else:
        await edit_safe(cb.message, text, reply_markup=markup)

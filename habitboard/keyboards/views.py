# habitboard/keyboards/views.py
from __future__ import annotations

from datetime import date

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from habitboard.services.leaderboard import LeaderboardEntry, TimeFrame
from habitboard.utils.week import next_week, previous_week

# callback_data layouts:
#   lb:<timeFrame>
#   pv:<user_id>:<YYYY-MM-DD>
LB_PREFIX = "lb:"
PV_PREFIX = "pv:"

# Telegram rejects callback_data longer than this (in bytes)
MAX_CALLBACK_BYTES = 64

TIME_FRAME_BUTTONS = (
    (TimeFrame.CURRENT_WEEK, "This Week"),
    (TimeFrame.LAST_WEEK, "Last Week"),
    (TimeFrame.ALL_TIME, "Last 4 Weeks"),
)


def profile_callback(user_id: str, reference: date) -> str | None:
    """None when the payload would not fit into a callback button."""
    data = f"{PV_PREFIX}{user_id}:{reference.isoformat()}"
    if len(data.encode("utf-8")) > MAX_CALLBACK_BYTES:
        return None
    return data


def parse_profile_callback(data: str) -> tuple[str, date]:
    """pv:<user_id>:<YYYY-MM-DD> -> (user_id, date). Raises ValueError when malformed."""
    if not data.startswith(PV_PREFIX):
        raise ValueError(f"Not a profile callback: {data!r}")
    user_id, _, raw_day = data[len(PV_PREFIX):].rpartition(":")
    if not user_id:
        raise ValueError(f"Missing user id: {data!r}")
    return user_id, date.fromisoformat(raw_day)


def leaderboard_kb(
    *,
    selected: TimeFrame,
    entries: list[LeaderboardEntry] | tuple[LeaderboardEntry, ...] = (),
    today: date,
    max_profiles: int = 5,
) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for tf, label in TIME_FRAME_BUTTONS:
        text = f"• {label}" if tf is selected else label
        kb.add(InlineKeyboardButton(text=text, callback_data=f"{LB_PREFIX}{tf.value}"))

    others = []
    for e in entries:
        if e.is_current_user or len(others) >= max_profiles:
            continue
        data = profile_callback(e.user_id, today)
        if data is None:
            continue
        others.append(InlineKeyboardButton(text=f"View {e.display_name}", callback_data=data))
    for button in others:
        kb.add(button)

    kb.adjust(3, *([1] * len(others)))
    return kb.as_markup()


def week_nav_kb(*, user_id: str, reference: date, is_current_week: bool, today: date) -> InlineKeyboardMarkup:
    targets = [("◀️ Previous", previous_week(reference)), ("Next ▶️", next_week(reference))]
    if not is_current_week:
        targets.append(("View Current Week", today))

    kb = InlineKeyboardBuilder()
    for text, day in targets:
        data = profile_callback(user_id, day)
        if data is not None:
            kb.add(InlineKeyboardButton(text=text, callback_data=data))
    kb.adjust(2, 1)
    return kb.as_markup()

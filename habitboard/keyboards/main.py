# habitboard/keyboards/main.py
from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

BTN_LEADERBOARD = "🏆 Leaderboard"
BTN_PROFILE = "📅 My Week"
BTN_VISIBILITY = "👁 Show/Hide Me"
BTN_CARD = "🖼 Leaderboard Card"


def main_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=BTN_LEADERBOARD), KeyboardButton(text=BTN_PROFILE)],
            [KeyboardButton(text=BTN_VISIBILITY), KeyboardButton(text=BTN_CARD)],
        ],
        resize_keyboard=True,
        input_field_placeholder="Choose an action…",
        selective=False,
        one_time_keyboard=False,
    )

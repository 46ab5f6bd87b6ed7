# habitboard/utils/reply.py
from __future__ import annotations

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup, Message

from habitboard.keyboards.main import main_menu_kb


async def reply_safe(message: Message, text: str, **kwargs) -> None:
    """
    Reply helper: the main menu keyboard is attached only in private chats.
    """
    if message.chat.type == "private":
        kwargs.setdefault("reply_markup", main_menu_kb())
    else:
        kwargs.setdefault("reply_markup", None)

    await message.answer(text, **kwargs)


async def edit_safe(message: Message, text: str, *, reply_markup: InlineKeyboardMarkup | None = None) -> None:
    """
    Re-render a view in place. Telegram rejects edits that change nothing;
    those are ignored.
    """
    try:
        await message.edit_text(text, parse_mode="HTML", reply_markup=reply_markup)
    except TelegramBadRequest as e:
        if "message is not modified" not in str(e):
            raise

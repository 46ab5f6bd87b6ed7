# habitboard/handlers/common.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from habitboard.utils.reply import reply_safe

router = Router(name="common")


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await reply_safe(
        message,
        "👋 Welcome!\n\n"
        "See how you rank against other habit trackers in the community.\n"
        "Use /help to see commands.",
    )


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await reply_safe(
        message,
        "📌 Available commands:\n"
        "/leaderboard — community ranking (this week, last week, last 4 weeks)\n"
        "/profile — your Saturday–Friday habit week\n"
        "/visibility — show or hide yourself on the leaderboard\n"
        "/card — leaderboard image of the top 3\n"
        "/help — help\n\n"
        "You can also use the menu buttons.",
    )

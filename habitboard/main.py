# habitboard/main.py
import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from habitboard.config import Settings
from habitboard.database import Database
from habitboard.handlers.router import router as handlers_router
from habitboard.services.leaderboard import LeaderboardService
from habitboard.services.view_state import ViewStates
from habitboard.utils.dt import TimeProvider
from habitboard.utils.middleware import DbSessionMiddleware


def setup_logging(is_dev: bool) -> None:
    """
    Clean production logging:
    - app logs: INFO (or DEBUG in dev)
    - SQLAlchemy / driver / aiogram internals: WARNING+
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "aiosqlite",
        "aiogram.event",
        "PIL",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("habitboard")

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized (%s)", db.engine.url.render_as_string(hide_password=True))

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )

    dp = Dispatcher()

    # Inject workflow data
    dp.workflow_data["settings"] = settings
    dp.workflow_data["db"] = db
    dp.workflow_data["clock"] = TimeProvider.from_settings(settings)
    dp.workflow_data["leaderboard"] = LeaderboardService()
    dp.workflow_data["views"] = ViewStates()

    # DB session + sender profile per update
    dp.update.middleware(DbSessionMiddleware(db))

    dp.include_router(handlers_router)

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")

        try:
            await bot.session.close()
        except Exception:
            log.exception("Failed to close bot session")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()

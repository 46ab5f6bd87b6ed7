# habitboard/scripts/seed_demo.py
"""
Seeds a small demo community for the current week:

    python -m habitboard.scripts.seed_demo
"""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from sqlalchemy import delete

from habitboard.config import Settings
from habitboard.database.models import Habit, UserProfile
from habitboard.database.repo.habits import add_habit
from habitboard.database.repo.users import upsert_user
from habitboard.database.session import Database
from habitboard.utils.dt import TimeProvider
from habitboard.utils.week import date_key, week_dates

log = logging.getLogger("habitboard.seed")

DEMO_PREFIX = "demo-"


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    settings = Settings.load()

    db = Database(settings.database_url)
    await db.init_models()

    today = TimeProvider.from_settings(settings).today()
    days = [date_key(d) for d in week_dates(today) if d <= today]
    last_week = [date_key(d - timedelta(days=7)) for d in week_dates(today)]

    async with db.session(commit=True) as session:
        # drop previous demo rows (habits first)
        await session.execute(delete(Habit).where(Habit.user_id.startswith(DEMO_PREFIX)))
        await session.execute(delete(UserProfile).where(UserProfile.id.startswith(DEMO_PREFIX)))

        await upsert_user(session, f"{DEMO_PREFIX}ana", email="ana@example.com", display_name="ana", avatar="🦊")
        await upsert_user(session, f"{DEMO_PREFIX}ben", email="ben@example.com", display_name="ben", avatar="🐻")
        await upsert_user(session, f"{DEMO_PREFIX}cy", email="cy@example.com", display_name="cy", show_on_leaderboard=False)

        await add_habit(session, f"{DEMO_PREFIX}ana", name="Read 20 min", completed_dates=days + last_week[:3])
        await add_habit(
            session,
            f"{DEMO_PREFIX}ana",
            name="Push-ups",
            habit_type="number",
            target=30,
            unit="reps",
            completed_values={d: 25 for d in days[:2]},
        )
        await add_habit(session, f"{DEMO_PREFIX}ana", name="Journal", is_custom="true", completed_dates=days)

        await add_habit(session, f"{DEMO_PREFIX}ben", name="Walk", completed_dates=days[:1] + last_week)
        await add_habit(session, f"{DEMO_PREFIX}cy", name="Meditate", completed_dates=days)

    await db.close()
    log.info("Seeded demo community (%d days of this week).", len(days))


if __name__ == "__main__":
    asyncio.run(main())

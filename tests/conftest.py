from __future__ import annotations

from datetime import date

import pytest
import pytest_asyncio

from habitboard.database.session import Database

# Wednesday; its custom week is Sat 2024-01-06 .. Fri 2024-01-12
TODAY = date(2024, 1, 10)


@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'habitboard-test.db'}")
    await database.init_models()
    try:
        yield database
    finally:
        await database.close()


@pytest_asyncio.fixture
async def session(db):
    async with db.session() as s:
        yield s


@pytest.fixture
def today() -> date:
    return TODAY

from pathlib import Path
from typing import AsyncIterator

import pytest_asyncio
from venue_booking.config import Settings
from venue_booking.database import Database


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    """A migrated SQLite database in a temp file, closed after the test."""
    db = Database(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'venues.db'}"))
    db.open()
    await db.create_all()
    try:
        yield db
    finally:
        await db.close()

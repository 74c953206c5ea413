"""Fixtures backed by a throwaway SQLite database."""

from uuid import uuid4

import pytest
import pytest_asyncio

from market_connect.config.settings import Settings
from market_connect.storage.database import Database


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'market_connect.db'}",
        payment_delay_seconds=0,
    )


@pytest_asyncio.fixture
async def database(settings):
    """Connected database with all tables created."""
    db = Database(settings)
    await db.connect()
    await db.create_tables()
    try:
        yield db
    finally:
        await db.disconnect()


@pytest.fixture
def business_values():
    return {
        "user_id": uuid4(),
        "name": "Corner Cafe",
        "category": "Cafe",
        "address": "12 Market Street",
        "phone": "555-0100",
        "hours_friday": "8:00 - 18:00",
        "latitude": 60.17,
        "longitude": 24.94,
        "subscription_status": "active",
        "subscription_plan": "business",
    }

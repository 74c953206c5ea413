"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from market_connect.models.user import User


@pytest.fixture
def now():
    """Fixed clock instant used across tests."""
    return datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now):
    """Clock callable returning the fixed instant."""
    return lambda: now


@pytest.fixture
def business_id():
    return uuid4()


@pytest.fixture
def owner():
    """Signed-in business owner."""
    return User(id=uuid4(), email="owner@example.com", full_name="Olivia Owner")


@pytest.fixture
def mock_offer_repo():
    """Mock offer repository."""
    return AsyncMock()


@pytest.fixture
def mock_business_repo():
    """Mock business repository."""
    return AsyncMock()


@pytest.fixture
def mock_analytics_repo():
    """Mock analytics repository."""
    return AsyncMock()


@pytest.fixture
def mock_ai_content_repo():
    """Mock AI content repository."""
    return AsyncMock()

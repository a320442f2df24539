"""Shared test fixtures for Ask Annie backend tests."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from annie.services.checkin.symptom_normalizer import normalize_checkin
from annie.services.insight.types import InsightConfig


FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def make_checkin(symptoms=None, user_id=None, timestamp=None, **structured):
    """Build a normalized check-in document like the store returns."""
    return normalize_checkin({
        "_id": ObjectId(),
        "userId": ObjectId(user_id) if user_id else ObjectId(),
        "timestamp": timestamp or FIXED_NOW,
        "rawTranscript": "manual entry",
        "structured": {
            "symptoms": symptoms if symptoms is not None else {},
            "activities": structured.get("activities", []),
            "triggers": structured.get("triggers", []),
            "notes": structured.get("notes", ""),
        },
        "flaggedForDoctor": False,
    })


def days_ago(days, hour=9):
    """Timestamp N days before FIXED_NOW at the given hour."""
    return (FIXED_NOW - timedelta(days=days)).replace(hour=hour)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def insight_config():
    return InsightConfig()


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # count_documents etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def mock_cursor():
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    return cursor


@pytest.fixture
def mock_checkin_service():
    service = MagicMock()
    service.find_by_id = AsyncMock(return_value=None)
    service.find_by_user_since = AsyncMock(return_value=[])
    service.find_timestamps_by_user = AsyncMock(return_value=[])
    service.count_by_user = AsyncMock(return_value=0)
    return service

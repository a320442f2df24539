"""Unit tests for CheckInService (Motor-backed check-in store)."""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from bson import ObjectId

from common.utils.exceptions import BadRequestException, ValidationException
from annie.services.checkin.checkin_service import CheckInService
from annie.services.checkin.symptom_normalizer import SymptomRecord


@pytest.fixture
def service(mock_db):
    return CheckInService(mock_db)


# ─────────────────────────────────────────────────────────────────
# create_checkin
# ─────────────────────────────────────────────────────────────────


class TestCreateCheckin:
    @pytest.mark.asyncio
    async def test_inserts_structured_document(self, service, mock_collection, sample_user_id):
        inserted_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        result = await service.create_checkin(sample_user_id, {
            "symptoms": {"headache": {"severity": 6, "location": "temples"}},
            "activities": ["yoga"],
            "triggers": [],
            "notes": "  long day  ",
        })

        doc = mock_collection.insert_one.call_args[0][0]
        assert doc["userId"] == ObjectId(sample_user_id)
        assert doc["rawTranscript"] == "manual entry"
        assert doc["structured"]["symptoms"] == {"headache": {"severity": 6, "location": "temples"}}
        assert doc["structured"]["notes"] == "long day"
        assert doc["flaggedForDoctor"] is False

        assert result["_id"] == inserted_id
        assert result["structured"]["symptoms"]["headache"] == SymptomRecord(severity=6, location="temples")

    @pytest.mark.asyncio
    async def test_rejects_invalid_severity(self, service, mock_collection, sample_user_id):
        with pytest.raises(ValidationException) as exc_info:
            await service.create_checkin(sample_user_id, {
                "symptoms": {"headache": {"severity": 12}},
            })

        assert exc_info.value.status_code == 422
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_invalid_user_id(self, service):
        with pytest.raises(BadRequestException):
            await service.create_checkin("not-an-id", {"symptoms": {}})


# ─────────────────────────────────────────────────────────────────
# find_by_id
# ─────────────────────────────────────────────────────────────────


class TestFindById:
    @pytest.mark.asyncio
    async def test_returns_normalized_record(self, service, mock_collection):
        checkin_id = ObjectId()
        mock_collection.find_one.return_value = {
            "_id": checkin_id,
            "structured": {"symptoms": [("fatigue", {"severity": "4"})]},
        }

        result = await service.find_by_id(str(checkin_id))

        mock_collection.find_one.assert_called_once_with({"_id": checkin_id})
        assert result["structured"]["symptoms"] == {"fatigue": SymptomRecord(severity=4)}

    @pytest.mark.asyncio
    async def test_user_scope_adds_owner_filter(self, service, mock_collection, sample_user_id):
        checkin_id = ObjectId()
        mock_collection.find_one.return_value = None

        result = await service.find_by_id(str(checkin_id), sample_user_id)

        assert result is None
        mock_collection.find_one.assert_called_once_with(
            {"_id": checkin_id, "userId": ObjectId(sample_user_id)}
        )

    @pytest.mark.asyncio
    async def test_user_scope_rejects_invalid_user_id(self, service, mock_collection):
        with pytest.raises(BadRequestException):
            await service.find_by_id(str(ObjectId()), "not-an-id")

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, service, mock_collection):
        mock_collection.find_one.return_value = None

        assert await service.find_by_id(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_invalid_id_returns_none(self, service, mock_collection):
        assert await service.find_by_id("nonexistent") is None
        mock_collection.find_one.assert_not_called()


# ─────────────────────────────────────────────────────────────────
# engine queries
# ─────────────────────────────────────────────────────────────────


class TestEngineQueries:
    @pytest.mark.asyncio
    async def test_find_by_user_since_projects_symptoms(
        self, service, mock_collection, mock_cursor, sample_user_id
    ):
        since = datetime(2026, 3, 1, tzinfo=timezone.utc)
        mock_cursor.to_list.return_value = [
            {"_id": ObjectId(), "structured": {"symptoms": {"headache": {"severity": 5}}}},
        ]
        mock_collection.find.return_value = mock_cursor

        result = await service.find_by_user_since(sample_user_id, since)

        query, projection = mock_collection.find.call_args[0]
        assert query == {"userId": ObjectId(sample_user_id), "timestamp": {"$gte": since}}
        assert projection == {"structured.symptoms": 1}
        assert result[0]["structured"]["symptoms"]["headache"].severity == 5

    @pytest.mark.asyncio
    async def test_find_timestamps_sorted_descending(
        self, service, mock_collection, mock_cursor, sample_user_id
    ):
        newer = datetime(2026, 3, 14, tzinfo=timezone.utc)
        older = datetime(2026, 3, 13, tzinfo=timezone.utc)
        mock_cursor.to_list.return_value = [{"timestamp": newer}, {"timestamp": older}]
        mock_collection.find.return_value = mock_cursor

        result = await service.find_timestamps_by_user(sample_user_id)

        mock_cursor.sort.assert_called_once_with("timestamp", -1)
        assert result == [newer, older]

    @pytest.mark.asyncio
    async def test_count_by_user(self, service, mock_collection, sample_user_id):
        mock_collection.count_documents.return_value = 12

        assert await service.count_by_user(sample_user_id) == 12
        mock_collection.count_documents.assert_called_once_with({"userId": ObjectId(sample_user_id)})


# ─────────────────────────────────────────────────────────────────
# history
# ─────────────────────────────────────────────────────────────────


class TestHistory:
    @pytest.mark.asyncio
    async def test_builds_filters_and_caps_limit(
        self, service, mock_collection, mock_cursor, sample_user_id
    ):
        mock_collection.find.return_value = mock_cursor
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)

        await service.get_history(
            sample_user_id,
            start_date=start,
            activities=["running"],
            triggers=["stress"],
            flagged_for_doctor=True,
            limit=500,
            offset=10,
            sort_order="asc",
        )

        query = mock_collection.find.call_args[0][0]
        assert query == {
            "userId": ObjectId(sample_user_id),
            "timestamp": {"$gte": start},
            "structured.activities": {"$in": ["running"]},
            "structured.triggers": {"$in": ["stress"]},
            "flaggedForDoctor": True,
        }
        mock_cursor.sort.assert_called_once_with("timestamp", 1)
        mock_cursor.skip.assert_called_once_with(10)
        mock_cursor.limit.assert_called_once_with(CheckInService.MAX_LIMIT)

    @pytest.mark.asyncio
    async def test_total_count_uses_same_filters(self, service, mock_collection, sample_user_id):
        mock_collection.count_documents.return_value = 3

        total = await service.get_total_count(sample_user_id, flagged_for_doctor=False)

        assert total == 3
        mock_collection.count_documents.assert_called_once_with({
            "userId": ObjectId(sample_user_id),
            "flaggedForDoctor": False,
        })

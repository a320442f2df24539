"""
Check-in storage service.

Handles check-in persistence and the read queries the insight engine
depends on. Every record returned is normalized to the canonical symptom
mapping before it leaves this module.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import BadRequestException, ValidationException
from annie.services.checkin.symptom_normalizer import (
    SymptomValidator,
    normalize_checkin,
)

logger = logging.getLogger(__name__)


def _to_object_id(value: str, label: str = "id") -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise BadRequestException(message=f"Invalid {label}", code="INVALID_ID")


class CheckInService:
    """
    Handles check-in storage and retrieval.
    Pure data access - no insight logic.
    """

    MAX_LIMIT = 100

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize CheckInService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._checkins_collection = db["checkins"]

    async def create_checkin(
        self,
        user_id: str,
        structured: Dict[str, Any],
        raw_transcript: str = "manual entry",
        timestamp: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Store a new check-in for a user.

        Args:
            user_id: MongoDB user ID
            structured: dict with symptoms, activities, triggers, notes
            raw_transcript: Transcript text, or "manual entry"
            timestamp: Point in time the check-in represents (defaults to now)

        Returns:
            Saved check-in document (normalized)

        Raises:
            ValidationException: Structured data is malformed
        """
        is_valid, error = SymptomValidator.validate(structured)
        if not is_valid:
            raise ValidationException(message=error, code="VALIDATION_ERROR")

        now = datetime.now(timezone.utc)
        symptoms = {
            name: {
                "severity": int(value["severity"]),
                **{k: value[k] for k in ("location", "notes") if value.get(k) is not None},
            }
            for name, value in (structured.get("symptoms") or {}).items()
        }

        checkin_data = {
            "userId": _to_object_id(user_id, "user id"),
            "timestamp": timestamp or now,
            "rawTranscript": raw_transcript,
            "structured": {
                "symptoms": symptoms,
                "activities": list(structured.get("activities") or []),
                "triggers": list(structured.get("triggers") or []),
                "notes": (structured.get("notes") or "").strip(),
            },
            "flaggedForDoctor": False,
            "created_at": now,
            "updated_at": now,
        }

        result = await self._checkins_collection.insert_one(checkin_data)
        checkin_data["_id"] = result.inserted_id

        logger.info(
            f"Check-in {result.inserted_id} saved for user {user_id} "
            f"({len(symptoms)} symptoms)"
        )
        return normalize_checkin(checkin_data)

    async def find_by_id(
        self,
        checkin_id: str,
        user_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Get a check-in by its ID.

        Args:
            checkin_id: Check-in document ID
            user_id: When given, only a check-in owned by this user matches

        Returns:
            Normalized check-in dict, or None if missing or not a valid ID
        """
        try:
            oid = ObjectId(checkin_id)
        except (InvalidId, TypeError):
            return None

        query: Dict[str, Any] = {"_id": oid}
        if user_id is not None:
            query["userId"] = _to_object_id(user_id, "user id")

        checkin = await self._checkins_collection.find_one(query)
        return normalize_checkin(checkin) if checkin else None

    async def find_by_user_since(
        self,
        user_id: str,
        since: datetime
    ) -> List[Dict[str, Any]]:
        """
        Get a user's check-ins at or after a point in time.

        Only ``structured.symptoms`` is projected.

        Args:
            user_id: MongoDB user ID
            since: Inclusive lower bound on timestamp

        Returns:
            List of normalized check-in dicts
        """
        cursor = self._checkins_collection.find(
            {
                "userId": _to_object_id(user_id, "user id"),
                "timestamp": {"$gte": since},
            },
            {"structured.symptoms": 1},
        )
        checkins = await cursor.to_list(length=None)

        logger.debug(f"Found {len(checkins)} check-ins for user {user_id} since {since.isoformat()}")
        return [normalize_checkin(c) for c in checkins]

    async def find_timestamps_by_user(self, user_id: str) -> List[datetime]:
        """
        Get every check-in timestamp for a user, newest first.

        Args:
            user_id: MongoDB user ID

        Returns:
            List of timestamps sorted descending
        """
        cursor = self._checkins_collection.find(
            {"userId": _to_object_id(user_id, "user id")},
            {"timestamp": 1},
        )
        cursor = cursor.sort("timestamp", -1)
        checkins = await cursor.to_list(length=None)

        return [c["timestamp"] for c in checkins if c.get("timestamp") is not None]

    async def count_by_user(self, user_id: str) -> int:
        """Get total number of check-ins for a user."""
        return await self._checkins_collection.count_documents(
            {"userId": _to_object_id(user_id, "user id")}
        )

    async def get_history(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        activities: Optional[List[str]] = None,
        triggers: Optional[List[str]] = None,
        flagged_for_doctor: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
        sort_order: str = "desc",
    ) -> List[Dict[str, Any]]:
        """
        Get paginated, filtered check-in history.

        Args:
            user_id: MongoDB user ID
            start_date: Optional inclusive timestamp lower bound
            end_date: Optional inclusive timestamp upper bound
            activities: Match check-ins containing any of these activities
            triggers: Match check-ins containing any of these triggers
            flagged_for_doctor: Optional flagged filter
            limit: Max records to return (capped at 100)
            offset: Number of records to skip
            sort_order: "asc" or "desc" by timestamp

        Returns:
            List of normalized check-in dicts
        """
        limit = min(limit, self.MAX_LIMIT)

        query = self._build_history_query(
            user_id, start_date, end_date, activities, triggers, flagged_for_doctor
        )

        cursor = self._checkins_collection.find(query)
        cursor = cursor.sort("timestamp", 1 if sort_order == "asc" else -1)
        cursor = cursor.skip(offset)
        cursor = cursor.limit(limit)

        checkins = await cursor.to_list(length=limit)
        return [normalize_checkin(c) for c in checkins]

    async def get_total_count(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        activities: Optional[List[str]] = None,
        triggers: Optional[List[str]] = None,
        flagged_for_doctor: Optional[bool] = None,
    ) -> int:
        """Count check-ins matching the same filters as get_history."""
        query = self._build_history_query(
            user_id, start_date, end_date, activities, triggers, flagged_for_doctor
        )
        return await self._checkins_collection.count_documents(query)

    def _build_history_query(
        self,
        user_id: str,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        activities: Optional[List[str]],
        triggers: Optional[List[str]],
        flagged_for_doctor: Optional[bool],
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"userId": _to_object_id(user_id, "user id")}

        if start_date or end_date:
            query["timestamp"] = {}
            if start_date:
                query["timestamp"]["$gte"] = start_date
            if end_date:
                query["timestamp"]["$lte"] = end_date

        if activities:
            query["structured.activities"] = {"$in": activities}

        if triggers:
            query["structured.triggers"] = {"$in": triggers}

        if flagged_for_doctor is not None:
            query["flaggedForDoctor"] = flagged_for_doctor

        return query

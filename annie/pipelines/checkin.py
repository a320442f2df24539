"""
Check-in pipeline functions.

Stateless orchestration logic for check-in operations.
"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any, List

from annie.services.checkin.checkin_service import CheckInService
from annie.services.insight.insight_service import InsightService
from annie.services.insight.types import InsightCard

logger = logging.getLogger(__name__)


async def submit_checkin_pipeline(
    checkin_service: CheckInService,
    insight_service: InsightService,
    user_id: str,
    structured: Dict[str, Any],
    raw_transcript: str = "manual entry"
) -> Dict[str, Any]:
    """
    Orchestrates the check-in submission flow.

    The check-in is stored first; insight generation runs afterwards and
    its failure never fails the submission.

    Args:
        checkin_service: For data persistence
        insight_service: For the post-check-in insight card
        user_id: Current user's ID
        structured: Structured check-in data from request
        raw_transcript: Transcript text, or "manual entry"

    Returns:
        Response dict with checkIn and insight (None if unavailable)
    """
    checkin = await checkin_service.create_checkin(
        user_id,
        structured,
        raw_transcript=raw_transcript
    )

    insight: Optional[InsightCard] = None
    try:
        insight = await insight_service.generate_post_checkin_insight(
            user_id,
            str(checkin["_id"])
        )
    except Exception as e:
        # Check-in is already stored
        logger.warning(f"Insight unavailable for check-in {checkin['_id']}: {e}")

    return {
        "checkIn": format_checkin(checkin),
        "insight": insight
    }


async def get_checkin_insight_pipeline(
    insight_service: InsightService,
    user_id: str,
    checkin_id: str
) -> InsightCard:
    """
    Generate the insight card for an existing check-in.

    Raises:
        NotFoundException: Check-in does not exist
    """
    return await insight_service.generate_post_checkin_insight(user_id, checkin_id)


async def get_history_pipeline(
    checkin_service: CheckInService,
    user_id: str,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    activities: Optional[List[str]] = None,
    triggers: Optional[List[str]] = None,
    flagged_for_doctor: Optional[bool] = None,
    limit: int = 20,
    offset: int = 0,
    sort_order: str = "desc"
) -> Dict[str, Any]:
    """
    Get check-in history with filters and pagination.

    Returns:
        dict with checkIns list and pagination metadata
    """
    filters = {
        "start_date": start_date,
        "end_date": end_date,
        "activities": activities,
        "triggers": triggers,
        "flagged_for_doctor": flagged_for_doctor,
    }

    checkins = await checkin_service.get_history(
        user_id=user_id,
        limit=limit,
        offset=offset,
        sort_order=sort_order,
        **filters
    )

    total = await checkin_service.get_total_count(user_id=user_id, **filters)

    return {
        "checkIns": [format_checkin(c) for c in checkins],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "hasMore": (offset + len(checkins)) < total
        }
    }


async def get_milestones_pipeline(
    insight_service: InsightService,
    user_id: str
) -> Dict[str, Any]:
    """Get check-in totals, streak and milestone status."""
    milestones = await insight_service.get_milestones(user_id)
    return milestones.to_dict()


def format_checkin(checkin: Dict[str, Any]) -> Dict[str, Any]:
    """Format a normalized check-in document for API response."""
    structured = checkin.get("structured", {})

    return {
        "id": str(checkin["_id"]),
        "timestamp": checkin["timestamp"],
        "rawTranscript": checkin.get("rawTranscript", "manual entry"),
        "structured": {
            "symptoms": {
                name: record.to_dict()
                for name, record in structured.get("symptoms", {}).items()
            },
            "activities": structured.get("activities", []),
            "triggers": structured.get("triggers", []),
            "notes": structured.get("notes", ""),
        },
        "flaggedForDoctor": checkin.get("flaggedForDoctor", False)
    }

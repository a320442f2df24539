"""
FastAPI router for check-in endpoints.

Provides check-in submission, history, milestones and insight endpoints.
Routes are scoped by user ID; authentication is handled upstream.
"""

import logging
from datetime import datetime
from typing import Annotated, List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from annie.dependencies import get_checkin_service, get_insight_service
from annie.services.checkin.checkin_service import CheckInService
from annie.services.insight.insight_service import InsightService
from annie.services.insight.types import InsightCard
from annie.schemas.checkin import (
    ManualCheckInRequest,
    SubmitCheckInResponse,
    HistoryResponse,
    MilestonesResponse,
)
from annie.pipelines import checkin as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/checkins", tags=["checkins"])


@router.post(
    "/manual",
    response_model=SubmitCheckInResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_manual_checkin(
    user_id: str,
    body: ManualCheckInRequest,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
):
    """
    Submit a manually entered check-in.

    Stores the check-in and returns it with its insight card.
    """
    result = await pipelines.submit_checkin_pipeline(
        checkin_service=checkin_service,
        insight_service=insight_service,
        user_id=user_id,
        structured=body.structured.model_dump(exclude_none=True),
    )

    return SubmitCheckInResponse(**result)


@router.get("", response_model=HistoryResponse)
async def get_checkins(
    user_id: str,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
    startDate: Optional[datetime] = Query(None, description="ISO 8601"),
    endDate: Optional[datetime] = Query(None, description="ISO 8601"),
    activity: Optional[List[str]] = Query(None),
    trigger: Optional[List[str]] = Query(None),
    flaggedForDoctor: Optional[bool] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sortOrder: Literal["asc", "desc"] = Query("desc"),
):
    """
    Get check-in history with filtering and pagination.
    """
    result = await pipelines.get_history_pipeline(
        checkin_service=checkin_service,
        user_id=user_id,
        start_date=startDate,
        end_date=endDate,
        activities=activity,
        triggers=trigger,
        flagged_for_doctor=flaggedForDoctor,
        limit=limit,
        offset=offset,
        sort_order=sortOrder,
    )

    return HistoryResponse(**result)


@router.get("/milestones", response_model=MilestonesResponse)
async def get_milestones(
    user_id: str,
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
):
    """
    Get total check-ins, current streak and milestone status.
    """
    result = await pipelines.get_milestones_pipeline(
        insight_service=insight_service,
        user_id=user_id,
    )

    return MilestonesResponse(**result)


@router.get("/{checkin_id}/insight", response_model=InsightCard)
async def get_checkin_insight(
    user_id: str,
    checkin_id: str,
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
):
    """
    Get the insight card for a check-in.

    Returns 404 if the check-in does not exist.
    """
    return await pipelines.get_checkin_insight_pipeline(
        insight_service=insight_service,
        user_id=user_id,
        checkin_id=checkin_id,
    )

"""
Pydantic models for check-in request/response validation.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

from annie.services.checkin.symptom_normalizer import SymptomValidator
from annie.services.insight.types import InsightCard


class SymptomInput(BaseModel):
    """One symptom in a manual check-in."""
    severity: int = Field(
        ...,
        ge=SymptomValidator.MIN_SEVERITY,
        le=SymptomValidator.MAX_SEVERITY,
        description="1=barely noticeable, 10=worst",
    )
    location: Optional[str] = None
    notes: Optional[str] = None


class StructuredInput(BaseModel):
    """Structured check-in content."""
    symptoms: Dict[str, SymptomInput] = Field(default_factory=dict)
    activities: List[str] = Field(default_factory=list)
    triggers: List[str] = Field(default_factory=list)
    notes: str = Field("", max_length=SymptomValidator.MAX_NOTES_LENGTH)


class ManualCheckInRequest(BaseModel):
    """Request body for a manually entered check-in."""
    structured: StructuredInput


class CheckInResponse(BaseModel):
    """Check-in data in API responses."""
    id: str
    timestamp: datetime
    rawTranscript: str
    structured: Dict[str, Any]
    flaggedForDoctor: bool = False


class SubmitCheckInResponse(BaseModel):
    """Response for check-in submission. Insight is None if generation failed."""
    checkIn: CheckInResponse
    insight: Optional[InsightCard] = None


class PaginationInfo(BaseModel):
    total: int
    limit: int
    offset: int
    hasMore: bool


class HistoryResponse(BaseModel):
    """Response for check-in history."""
    checkIns: List[CheckInResponse]
    pagination: PaginationInfo


class MilestonesResponse(BaseModel):
    """Response for check-in totals and streak."""
    totalCheckIns: int
    currentStreak: int
    isMilestone: bool
    milestoneNumber: Optional[int] = None

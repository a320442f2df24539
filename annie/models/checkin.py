"""
CheckIn model for Ask Annie.

Registered with Beanie at startup so the collection and its indexes exist.
Services read and write the collection through Motor directly.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict
from pydantic import BaseModel, Field
from beanie import Document, Indexed, PydanticObjectId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SymptomValue(BaseModel):
    """A single symptom entry. Bounds are enforced by SymptomValidator on write."""

    severity: int

    # Body location, e.g. "lower back"
    location: Optional[str] = None

    notes: Optional[str] = None


class StructuredData(BaseModel):
    """Parsed or manually entered check-in content."""

    symptoms: Dict[str, SymptomValue] = Field(default_factory=dict)
    activities: List[str] = Field(default_factory=list)
    triggers: List[str] = Field(default_factory=list)
    notes: str = ""


class CheckIn(Document):
    """
    CheckIn document for Ask Annie.

    A user may check in several times per day; each check-in is a
    separate document keyed by its timestamp.
    """

    userId: Indexed(PydanticObjectId)  # type: ignore

    # Point in time the check-in represents
    timestamp: Indexed(datetime) = Field(default_factory=_utcnow)  # type: ignore

    rawTranscript: str = "manual entry"

    structured: StructuredData = Field(default_factory=StructuredData)

    flaggedForDoctor: bool = False

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "checkins"
        indexes = [
            [("userId", 1), ("timestamp", -1)],  # History and streak queries
        ]

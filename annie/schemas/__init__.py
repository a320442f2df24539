"""Request/response schemas."""

from annie.schemas.checkin import (
    SymptomInput,
    StructuredInput,
    ManualCheckInRequest,
    CheckInResponse,
    SubmitCheckInResponse,
    PaginationInfo,
    HistoryResponse,
    MilestonesResponse,
)

__all__ = [
    "SymptomInput",
    "StructuredInput",
    "ManualCheckInRequest",
    "CheckInResponse",
    "SubmitCheckInResponse",
    "PaginationInfo",
    "HistoryResponse",
    "MilestonesResponse",
]

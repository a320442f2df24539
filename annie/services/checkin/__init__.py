"""
Check-in storage and symptom normalization.
"""

from annie.services.checkin.checkin_service import CheckInService
from annie.services.checkin.symptom_normalizer import (
    SymptomRecord,
    SymptomValidator,
    coerce_severity,
    normalize_checkin,
    normalize_symptoms,
)

__all__ = [
    "CheckInService",
    "SymptomRecord",
    "SymptomValidator",
    "coerce_severity",
    "normalize_checkin",
    "normalize_symptoms",
]

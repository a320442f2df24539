"""Beanie document models."""

from annie.models.checkin import CheckIn, StructuredData, SymptomValue

__all__ = ["CheckIn", "StructuredData", "SymptomValue"]

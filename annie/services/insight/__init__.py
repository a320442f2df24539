"""
Insight engine

Generates a single insight card after each check-in from rolling symptom
averages, streaks and milestones.
"""

from annie.services.insight.types import (
    CheckInMilestones,
    InsightCard,
    InsightConfig,
    InsightType,
    DEFAULT_INSIGHT_CONFIG,
)
from annie.services.insight.symptom_average import SymptomAverageCalculator
from annie.services.insight.milestones import MilestoneTracker
from annie.services.insight.data_context import DataContextGenerator
from annie.services.insight.validation import ValidationGenerator
from annie.services.insight.insight_service import InsightService

__all__ = [
    "CheckInMilestones",
    "InsightCard",
    "InsightConfig",
    "InsightType",
    "DEFAULT_INSIGHT_CONFIG",
    "SymptomAverageCalculator",
    "MilestoneTracker",
    "DataContextGenerator",
    "ValidationGenerator",
    "InsightService",
]

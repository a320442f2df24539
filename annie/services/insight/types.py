"""
Insight engine types and configuration.

Shared types and thresholds for post-check-in insight generation.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, Field

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Default clock for the insight engine."""
    return datetime.now(timezone.utc)


class InsightType(str, Enum):
    DATA_CONTEXT = "data_context"
    VALIDATION = "validation"
    # Reserved, no generator ships for these yet
    PATTERN = "pattern"
    COMMUNITY = "community"


class InsightCard(BaseModel):
    """A short feedback card returned after a check-in."""
    type: InsightType
    title: str
    message: str
    icon: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class CheckInMilestones:
    """Check-in totals and streak for a user, computed fresh per call."""
    total_checkins: int = 0
    current_streak: int = 0
    is_milestone: bool = False
    milestone_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCheckIns": self.total_checkins,
            "currentStreak": self.current_streak,
            "isMilestone": self.is_milestone,
            "milestoneNumber": self.milestone_number,
        }


@dataclass(frozen=True)
class InsightConfig:
    """
    Thresholds used by the insight engine.

    Attributes:
        milestone_counts: Total check-in counts that trigger a milestone card
        significant_difference_threshold: Minimum relative deviation from the
            rolling average for a data-context comparison (inclusive)
        high_severity_threshold: Max severity at or above which the
            high-severity validation card is shown
        max_symptom_severity: Top of the severity scale, used in messages
        min_streak_for_insight: Streak length needed for the consistency card
        average_window_days: Trailing window for symptom averages
        streak_grace_days: Days before today at which the streak cursor starts
    """
    milestone_counts: Tuple[int, ...] = (5, 10, 20, 30, 50, 100)
    significant_difference_threshold: float = 0.20
    high_severity_threshold: int = 7
    max_symptom_severity: int = 10
    min_streak_for_insight: int = 3
    average_window_days: int = 14
    streak_grace_days: int = 1


DEFAULT_INSIGHT_CONFIG = InsightConfig()

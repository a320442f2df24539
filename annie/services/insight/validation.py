"""
Validation insight cards.

Acknowledges the effort of checking in and celebrates milestones.
Always produces a card.
"""

import logging
from typing import Any, Dict, List, Tuple

from annie.services.checkin.symptom_normalizer import symptom_severities
from annie.services.insight.milestones import MilestoneTracker
from annie.services.insight.types import (
    InsightCard,
    InsightConfig,
    InsightType,
    DEFAULT_INSIGHT_CONFIG,
)

logger = logging.getLogger(__name__)

VALIDATION_ICON = "\U0001F49A"


class ValidationGenerator:
    """
    Generates validation cards.

    Priority: milestone, then high severity, then a default message picked
    by total check-in count.
    """

    # Index-addressed: total check-ins % len selects the entry
    DEFAULT_MESSAGES: List[Tuple[str, str]] = [
        (
            "You Showed Up",
            "You checked in today even when it's hard.\n"
            "Every data point helps your future care.",
        ),
        (
            "Effort Recognized",
            "Building {count} check-ins of data.\n"
            "Your patterns are becoming clearer.",
        ),
        (
            "Progress Recognition",
            "Consistency like this builds the most valuable patterns.\n"
            "You're doing great.",
        ),
    ]

    def __init__(
        self,
        milestone_tracker: MilestoneTracker,
        config: InsightConfig = DEFAULT_INSIGHT_CONFIG
    ):
        self._milestone_tracker = milestone_tracker
        self._config = config

    async def generate_validation_card(
        self,
        user_id: str,
        checkin: Dict[str, Any]
    ) -> InsightCard:
        """
        Generate a validation card for a check-in.

        Args:
            user_id: MongoDB user ID
            checkin: Normalized check-in dict

        Returns:
            Validation card (never None)
        """
        milestones = await self._milestone_tracker.get_checkin_milestones(user_id)
        total = milestones.total_checkins

        if milestones.is_milestone:
            return InsightCard(
                type=InsightType.VALIDATION,
                title="Milestone Reached",
                message=(
                    f"This is your {milestones.milestone_number}th check-in.\n"
                    "You're building a valuable health record for yourself."
                ),
                icon=VALIDATION_ICON,
                metadata={
                    "checkInCount": total,
                    "milestone": milestones.milestone_number,
                },
            )

        severities = symptom_severities(checkin.get("structured", {}).get("symptoms", {}))
        max_severity = max(severities.values()) if severities else 0

        if max_severity >= self._config.high_severity_threshold:
            return InsightCard(
                type=InsightType.VALIDATION,
                title="You Showed Up",
                message=(
                    f"Managing a {max_severity}/{self._config.max_symptom_severity} "
                    "symptom day while staying consistent?\n"
                    "That takes real strength. We see you."
                ),
                icon=VALIDATION_ICON,
                metadata={
                    "maxSeverity": max_severity,
                    "checkInCount": total,
                },
            )

        title, message = self.DEFAULT_MESSAGES[total % len(self.DEFAULT_MESSAGES)]

        return InsightCard(
            type=InsightType.VALIDATION,
            title=title,
            message=message.format(count=total),
            icon=VALIDATION_ICON,
            metadata={
                "checkInCount": total,
                "maxSeverity": max_severity,
            },
        )

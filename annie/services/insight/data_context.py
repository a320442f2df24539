"""
Data context insight cards.

Compares the current check-in's symptom severities to each symptom's
rolling average and reports the first significant difference.
"""

import logging
from typing import Any, Dict, Optional

from annie.services.checkin.symptom_normalizer import symptom_severities
from annie.services.insight.milestones import MilestoneTracker
from annie.services.insight.symptom_average import SymptomAverageCalculator
from annie.services.insight.types import (
    InsightCard,
    InsightConfig,
    InsightType,
    DEFAULT_INSIGHT_CONFIG,
)

logger = logging.getLogger(__name__)

DATA_CONTEXT_ICON = "\U0001F4CA"


def _window_label(days: int) -> str:
    if days % 7 == 0:
        return f"{days // 7}-week"
    return f"{days}-day"


class DataContextGenerator:
    """
    Generates data context cards.

    The first symptom (in check-in order) that deviates significantly from
    its average wins; remaining symptoms are not evaluated.
    """

    def __init__(
        self,
        average_calculator: SymptomAverageCalculator,
        milestone_tracker: MilestoneTracker,
        config: InsightConfig = DEFAULT_INSIGHT_CONFIG
    ):
        self._average_calculator = average_calculator
        self._milestone_tracker = milestone_tracker
        self._config = config

    async def generate_data_context_card(
        self,
        user_id: str,
        checkin: Dict[str, Any]
    ) -> Optional[InsightCard]:
        """
        Generate a card comparing the check-in to historical data.

        Args:
            user_id: MongoDB user ID
            checkin: Normalized check-in dict

        Returns:
            A data context card, or None if nothing notable was found
        """
        severities = symptom_severities(checkin.get("structured", {}).get("symptoms", {}))
        if not severities:
            return None

        window_days = self._config.average_window_days

        for symptom_name, current in severities.items():
            average = await self._average_calculator.calculate_symptom_average(
                user_id, symptom_name, window_days
            )
            if average is None or average == 0:
                continue

            percent_diff = abs(current - average) / average
            if percent_diff >= self._config.significant_difference_threshold:
                return self._build_comparison_card(symptom_name, current, average, percent_diff)

        milestones = await self._milestone_tracker.get_checkin_milestones(user_id)

        if milestones.current_streak >= self._config.min_streak_for_insight:
            return InsightCard(
                type=InsightType.DATA_CONTEXT,
                title="Consistency Win",
                message=(
                    f"You've now checked in {milestones.current_streak} days in a row.\n"
                    "Patterns emerge from commitment like this."
                ),
                icon=DATA_CONTEXT_ICON,
                metadata={"streakLength": milestones.current_streak},
            )

        return None

    def _build_comparison_card(
        self,
        symptom_name: str,
        current: float,
        average: float,
        percent_diff: float
    ) -> InsightCard:
        is_better = current < average
        direction = "below" if is_better else "above"
        sentiment = (
            "You're trending better than usual"
            if is_better
            else "That's higher than usual"
        )
        window = _window_label(self._config.average_window_days)

        logger.debug(
            f"{symptom_name} at {current} vs {window} average {average:.2f} "
            f"({percent_diff:.0%} difference)"
        )

        return InsightCard(
            type=InsightType.DATA_CONTEXT,
            title="Today's Context",
            message=(
                f"Your {symptom_name} ({current}/{self._config.max_symptom_severity}) "
                f"is {direction} your {window} average of {average:.1f}.\n"
                f"{sentiment}."
            ),
            icon=DATA_CONTEXT_ICON,
            metadata={
                "symptomName": symptom_name,
                "currentValue": current,
                "averageValue": average,
                "percentDifference": percent_diff,
                "isBetter": is_better,
            },
        )

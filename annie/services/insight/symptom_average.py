"""
Rolling symptom severity averages.
"""

import logging
from datetime import timedelta
from typing import Optional

from annie.services.checkin.checkin_service import CheckInService
from annie.services.insight.types import Clock, InsightConfig, DEFAULT_INSIGHT_CONFIG, utcnow

logger = logging.getLogger(__name__)


class SymptomAverageCalculator:
    """
    Computes the mean severity of one symptom over a trailing window.
    """

    def __init__(
        self,
        checkin_service: CheckInService,
        config: InsightConfig = DEFAULT_INSIGHT_CONFIG,
        clock: Clock = utcnow
    ):
        """
        Initialize SymptomAverageCalculator.

        Args:
            checkin_service: For fetching historical check-ins
            config: Insight thresholds
            clock: Returns the current time (UTC)
        """
        self._checkin_service = checkin_service
        self._config = config
        self._clock = clock

    async def calculate_symptom_average(
        self,
        user_id: str,
        symptom_name: str,
        window_days: Optional[int] = None
    ) -> Optional[float]:
        """
        Average severity for a symptom over the last N days.

        Args:
            user_id: MongoDB user ID
            symptom_name: Exact symptom key, e.g. "headache"
            window_days: Trailing window in days (defaults to the configured window)

        Returns:
            Mean severity, or None if the symptom has no numeric
            severity in the window
        """
        if window_days is None:
            window_days = self._config.average_window_days

        since = self._clock() - timedelta(days=window_days)
        checkins = await self._checkin_service.find_by_user_since(user_id, since)

        severities = []
        for checkin in checkins:
            symptoms = checkin.get("structured", {}).get("symptoms", {})
            record = symptoms.get(symptom_name)
            if record is not None and record.severity is not None:
                severities.append(record.severity)

        if not severities:
            return None

        return sum(severities) / len(severities)

"""
Check-in milestones and streaks.

Handles total counts, consecutive-day streaks and milestone detection.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Set

from annie.services.checkin.checkin_service import CheckInService
from annie.services.insight.types import (
    CheckInMilestones,
    Clock,
    InsightConfig,
    DEFAULT_INSIGHT_CONFIG,
    utcnow,
)

logger = logging.getLogger(__name__)


def _utc_date(timestamp: datetime) -> date:
    # Motor returns naive datetimes in UTC unless the client is tz_aware
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone(timezone.utc).date()


class MilestoneTracker:
    """
    Computes check-in totals, the current streak and milestone status.
    """

    def __init__(
        self,
        checkin_service: CheckInService,
        config: InsightConfig = DEFAULT_INSIGHT_CONFIG,
        clock: Clock = utcnow
    ):
        """
        Initialize MilestoneTracker.

        Args:
            checkin_service: For counts and timestamps
            config: Insight thresholds
            clock: Returns the current time (UTC)
        """
        self._checkin_service = checkin_service
        self._config = config
        self._clock = clock

    async def get_checkin_milestones(self, user_id: str) -> CheckInMilestones:
        """
        Get a user's check-in milestones.

        Args:
            user_id: MongoDB user ID

        Returns:
            CheckInMilestones with total, current streak and milestone status
        """
        total = await self._checkin_service.count_by_user(user_id)
        timestamps = await self._checkin_service.find_timestamps_by_user(user_id)

        streak = self.calculate_streak(timestamps)

        is_milestone = total in self._config.milestone_counts

        return CheckInMilestones(
            total_checkins=total,
            current_streak=streak,
            is_milestone=is_milestone,
            milestone_number=total if is_milestone else None,
        )

    def calculate_streak(self, timestamps: Iterable[datetime]) -> int:
        """
        Count consecutive check-in days ending at yesterday.

        Algorithm:
            1. Reduce timestamps to distinct UTC calendar dates, newest first
            2. Start the expected date at today minus the grace period
            3. Each date equal to the expected date extends the streak and
               moves the expected date back one day; dates after it (today)
               are skipped, the first date before it ends the walk

        Args:
            timestamps: Check-in timestamps in any order

        Returns:
            Current streak length
        """
        days: Set[date] = {_utc_date(ts) for ts in timestamps}
        if not days:
            return 0

        today = _utc_date(self._clock())
        expected = today - timedelta(days=self._config.streak_grace_days)

        streak = 0
        for day in sorted(days, reverse=True):
            if day == expected:
                streak += 1
                expected -= timedelta(days=1)
            elif day < expected:
                break

        return streak

"""
Post-check-in insight orchestration.

Picks one insight card for a just-submitted check-in.
"""

import logging

from common.utils.exceptions import NotFoundException
from annie.services.checkin.checkin_service import CheckInService
from annie.services.insight.data_context import DataContextGenerator
from annie.services.insight.milestones import MilestoneTracker
from annie.services.insight.validation import ValidationGenerator
from annie.services.insight.types import CheckInMilestones, InsightCard

logger = logging.getLogger(__name__)


class InsightService:
    """
    Generates the insight card shown after a check-in.

    Priority order:
        1. Pattern detection (optional generator, none ships yet)
        2. Data context (comparison to historical averages)
        3. Validation (always available)
    """

    def __init__(
        self,
        checkin_service: CheckInService,
        data_context_generator: DataContextGenerator,
        validation_generator: ValidationGenerator,
        milestone_tracker: MilestoneTracker,
        pattern_generator=None
    ):
        """
        Initialize InsightService.

        Args:
            checkin_service: For fetching the check-in
            data_context_generator: Second-priority tier
            validation_generator: Fallback tier
            milestone_tracker: For the milestones summary
            pattern_generator: Optional object with an async
                generate_pattern_card(user_id, checkin) method
        """
        self._checkin_service = checkin_service
        self._data_context_generator = data_context_generator
        self._validation_generator = validation_generator
        self._milestone_tracker = milestone_tracker
        self._pattern_generator = pattern_generator

    async def generate_post_checkin_insight(
        self,
        user_id: str,
        checkin_id: str
    ) -> InsightCard:
        """
        Generate the insight card for a check-in.

        Args:
            user_id: MongoDB user ID
            checkin_id: Check-in document ID

        Returns:
            InsightCard

        Raises:
            NotFoundException: Check-in does not exist or belongs to another user
        """
        checkin = await self._checkin_service.find_by_id(checkin_id, user_id)
        if not checkin or str(checkin.get("userId")) != user_id:
            raise NotFoundException("Check-in not found", code="CHECKIN_NOT_FOUND")

        if self._pattern_generator is not None:
            card = await self._pattern_generator.generate_pattern_card(user_id, checkin)
            if card:
                return card

        card = await self._data_context_generator.generate_data_context_card(user_id, checkin)
        if card:
            logger.info(f"Data context insight for check-in {checkin_id}: {card.title}")
            return card

        card = await self._validation_generator.generate_validation_card(user_id, checkin)
        logger.info(f"Validation insight for check-in {checkin_id}: {card.title}")
        return card

    async def get_milestones(self, user_id: str) -> CheckInMilestones:
        """Get check-in totals, streak and milestone status for a user."""
        return await self._milestone_tracker.get_checkin_milestones(user_id)

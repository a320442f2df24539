"""
FastAPI dependencies for Ask Annie.

Provides dependency injection for check-in and insight services.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from annie.services.checkin.checkin_service import CheckInService
from annie.services.insight import (
    DataContextGenerator,
    InsightConfig,
    InsightService,
    MilestoneTracker,
    SymptomAverageCalculator,
    ValidationGenerator,
    DEFAULT_INSIGHT_CONFIG,
)


_checkin_service: Optional[CheckInService] = None
_insight_service: Optional[InsightService] = None


def build_insight_service(
    checkin_service: CheckInService,
    config: InsightConfig = DEFAULT_INSIGHT_CONFIG
) -> InsightService:
    """Wire the insight engine components around a check-in store."""
    average_calculator = SymptomAverageCalculator(checkin_service, config)
    milestone_tracker = MilestoneTracker(checkin_service, config)

    return InsightService(
        checkin_service=checkin_service,
        data_context_generator=DataContextGenerator(average_calculator, milestone_tracker, config),
        validation_generator=ValidationGenerator(milestone_tracker, config),
        milestone_tracker=milestone_tracker,
    )


def init_all_services(
    db: AsyncIOMotorDatabase,
    config: Optional[InsightConfig] = None
) -> None:
    """
    Initialize services with database connection.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        config: Optional insight thresholds (defaults apply otherwise)
    """
    global _checkin_service, _insight_service

    _checkin_service = CheckInService(db=db)
    _insight_service = build_insight_service(
        _checkin_service,
        config or DEFAULT_INSIGHT_CONFIG
    )


def get_checkin_service() -> CheckInService:
    """Get check-in service instance."""
    if _checkin_service is None:
        raise RuntimeError("Services not initialized. Call init_all_services first.")
    return _checkin_service


def get_insight_service() -> InsightService:
    """Get insight service instance."""
    if _insight_service is None:
        raise RuntimeError("Services not initialized. Call init_all_services first.")
    return _insight_service

"""
Ask Annie pipelines.

Business logic orchestration functions.
"""

from annie.pipelines.checkin import (
    submit_checkin_pipeline,
    get_checkin_insight_pipeline,
    get_history_pipeline,
    get_milestones_pipeline,
    format_checkin,
)

__all__ = [
    "submit_checkin_pipeline",
    "get_checkin_insight_pipeline",
    "get_history_pipeline",
    "get_milestones_pipeline",
    "format_checkin",
]

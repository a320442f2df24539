"""
Ask Annie API routers.
"""

from annie.routers.checkin import router as checkin_router

__all__ = ["checkin_router"]

"""Async MongoDB access (Motor + Beanie)."""

from common.database.mongodb import MongoDB

__all__ = ["MongoDB"]

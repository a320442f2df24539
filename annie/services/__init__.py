"""Ask Annie services."""

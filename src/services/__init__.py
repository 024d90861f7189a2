"""Search, scoring and AI services."""

"""Filter pipeline: date range, missing field, pinned severity, reviewed visibility."""

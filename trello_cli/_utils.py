"""
Shared pure-utility functions for trello-cli.

These helpers have no business logic and no side effects.
They are used across models.py, validation.py, payload.py, and formatters.
"""

from datetime import date, datetime, timezone


def _parse_id_list(raw):
    """Split a comma-separated id string into a list. None stays None."""
    if raw is None:
        return None
    return [v.strip() for v in raw.split(",") if v.strip()]


def _parse_due_date(value):
    """Parse a due date into a datetime, or return None if it is not one.

    Accepts date/datetime objects, ISO-8601 timestamps (with or without a
    trailing Z), and plain YYYY-MM-DD dates.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    clean = value.strip()
    if clean.endswith(("Z", "z")):
        clean = clean[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(clean)
    except ValueError:
        pass
    try:
        return datetime.strptime(clean, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _to_json_value(value):
    """Convert date objects to ISO strings so the payload is JSON-safe."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value

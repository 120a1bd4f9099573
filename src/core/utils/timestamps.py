"""
Timestamp parsing for trade records.

Trade times arrive as ISO-8601 text. Aware values are converted to UTC and
naive values are read as UTC wall-clock, so every parsed timestamp is
comparable with every other one.
"""

from datetime import UTC, datetime


def parse_timestamp(value: object) -> datetime | None:
    """Parse a trade timestamp.

    Args:
        value: ISO-8601 string (``Z`` suffix accepted) or datetime

    Returns:
        Timezone-aware UTC datetime, or None when the value is not a
        valid timestamp
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and value.strip():
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def parse_date(value: object) -> datetime | None:
    """Parse a configuration date such as ``INICIO``/``FIN`` (``YYYY-MM-DD``)."""
    return parse_timestamp(value)

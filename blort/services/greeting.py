# services/greeting.py
from datetime import datetime, timezone

from blort.models.visit import VisitResult


def format_timestamp(value: datetime) -> str:
    """Renders a timestamp in UTC, e.g. '2024-01-01 12:00:00.250000 UTC'. Naive values are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value.strftime('%Y-%m-%d %H:%M:%S.%f')} UTC"


def build_greeting(name: str, result: VisitResult) -> str:
    # The count is the one before this visit, not the new total
    if result.is_first_visit:
        return f"Hello {name}! This is your first visit!"
    return (
        f"Hello {name}! You've been called {result.previous_count} times previously. "
        f"Last seen: {format_timestamp(result.previous_last_seen)}"
    )

from datetime import datetime, timezone


def get_utc_time():
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_event_date(dt) -> str:
    """
    Format an event date for prompts and notifications.
    Example: 'March 14, 2026'
    """
    if dt is None:
        return "Not specified"
    if isinstance(dt, str):
        return dt
    return dt.strftime("%B %d, %Y").replace(" 0", " ")

"""Relative timestamps for the history list."""

from datetime import datetime, timezone


def format_time(dt: datetime, now: datetime | None = None) -> str:
    """
    Format a timestamp relative to now.

    Returns "Just now", "5m ago", "3h ago", "2d ago", or a short date such
    as "Jan 15" for anything a week or older.
    """
    if now is None:
        now = datetime.now(timezone.utc) if dt.tzinfo else datetime.now()

    diff_seconds = (now - dt).total_seconds()
    diff_minutes = diff_seconds / 60
    diff_hours = diff_minutes / 60
    diff_days = diff_hours / 24

    if diff_seconds < 60:
        return 'Just now'
    if diff_minutes < 60:
        return f'{int(diff_minutes)}m ago'
    if diff_hours < 24:
        return f'{int(diff_hours)}h ago'
    if diff_days < 7:
        return f'{int(diff_days)}d ago'
    return f'{dt:%b} {dt.day}'

"""Relative time formatting ("3 hours ago")."""

from datetime import UTC, datetime


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'' if value == 1 else 's'} ago"


def relative_time(moment: datetime, now: datetime | None = None) -> str:
    """
    Describe how long ago a moment was.

    Args:
        moment: Past datetime; naive values are treated as UTC
        now: Reference time (defaults to the current UTC time)

    Returns:
        "just now", "5 minutes ago", "1 hour ago", "3 days ago",
        "2 weeks ago", "4 months ago" or "1 year ago"
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    seconds = int((now - moment).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    weeks = days // 7

    months = (now.year - moment.year) * 12 + (now.month - moment.month)
    if now.day < moment.day:
        months -= 1

    years = now.year - moment.year
    if (now.month, now.day) < (moment.month, moment.day):
        years -= 1

    if seconds < 60:
        return "just now"
    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    if weeks < 4:
        return _plural(weeks, "week")
    if months < 12:
        return _plural(max(months, 1), "month")
    return _plural(years, "year")

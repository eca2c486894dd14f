"""Date manipulation utilities"""

import math
from datetime import datetime, timezone
from typing import Optional


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so timestamps compare by instant"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'} ago"


def humanize_elapsed(then: datetime, now: Optional[datetime] = None) -> str:
    """Relative age for tables: "Just now", "5 minutes ago", "2 months ago" """
    now = ensure_utc(now or datetime.now(timezone.utc))
    seconds = (now - ensure_utc(then)).total_seconds()

    minutes = math.floor(seconds / 60)
    hours = math.floor(seconds / 3600)
    days = math.floor(seconds / 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 30:
        return _plural(days, "day")
    return _plural(days // 30, "month")

"""Display helpers shared by the feed and profile views."""

from datetime import datetime

FALLBACK_NAME = "Student"
FALLBACK_INITIAL = "U"


def time_ago(created_at: datetime, now: datetime | None = None) -> str:
    """Compact relative age: ``45s``, ``12m``, ``3h``, ``2d``."""
    now = now or datetime.utcnow()
    seconds = max(int((now - created_at).total_seconds()), 0)
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    return f"{hours // 24}d"


def display_name(full_name: str | None) -> str:
    return full_name or FALLBACK_NAME


def initial(full_name: str | None) -> str:
    """Avatar placeholder letter."""
    name = (full_name or "").strip()
    return name[0].upper() if name else FALLBACK_INITIAL

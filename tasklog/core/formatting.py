"""Formatting helpers: friendly durations, dates and metadata labels."""

from datetime import datetime, timedelta
from typing import Iterable, Optional


def friendly_duration(duration: timedelta) -> str:
    """
    Render a duration with a single coarse unit.

    Example: 90 seconds -> "1min", 3 days -> "3d", 10 weeks -> "2mth"

    Args:
        duration: Duration to render (negative values render as "0s").

    Returns:
        Short string such as "42s", "5min", "3h", "9d", "2w" or "4mth".
    """
    seconds = max(int(duration.total_seconds()), 0)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    weeks = days // 7

    if minutes < 1:
        return f"{seconds}s"
    if hours < 1:
        return f"{minutes}min"
    if days < 1:
        return f"{hours}h"
    if weeks < 2:
        return f"{days}d"
    if weeks < 4:
        return f"{weeks}w"
    return f"{weeks // 4}mth"


def friendly_spent_time(duration: timedelta) -> str:
    """Like friendly_duration, but no time spent renders as an empty string."""
    if duration <= timedelta(0):
        return ""
    return friendly_duration(duration)


def format_timestamp(value: datetime) -> str:
    """
    Human readable timestamp.

    Example: "Tue, 03 Mar 2026 at 14:05"
    """
    return value.strftime("%a, %d %b %Y at %H:%M")


def format_tags(tags: Iterable[str]) -> str:
    return ", ".join(f"#{tag}" for tag in sorted(tags))


def format_project(project: Optional[str]) -> str:
    return f"@{project}" if project else ""

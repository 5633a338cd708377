"""Formatting helpers shared by suggestion reports."""
from __future__ import annotations
from datetime import datetime

from ..match.reasons import ReasonCode
from ..match.results import OverlapRange

_LEVEL_BADGES = {
    ReasonCode.LEVEL_CLOSE: ("Close", "badge-success"),
    ReasonCode.LEVEL_PLAYABLE: ("Playable", "badge-primary"),
    ReasonCode.LEVEL_UNKNOWN: ("Unknown", "badge-secondary"),
    ReasonCode.LEVEL_FAR: ("Far", "badge-danger"),
}

_SOCIAL_BADGES = {
    ReasonCode.SOCIAL_FRIEND: ("Friend", "badge-success"),
    ReasonCode.SOCIAL_PREVIOUS_OPPONENT: ("Played before", "badge-primary"),
    ReasonCode.SOCIAL_NONE: ("New", "badge-secondary"),
}


def format_badge(text: str, badge_class: str) -> str:
    """Format a status badge for HTML display.

    Args:
        text: Badge text content
        badge_class: CSS class name (e.g., 'badge-success')

    Returns:
        HTML span element with badge styling
    """
    return f'<span class="badge {badge_class}">{text}</span>'


def badge_for(code: ReasonCode) -> str:
    """Badge for a social or level reason code; empty for anything else."""
    if code in _LEVEL_BADGES:
        return format_badge(*_LEVEL_BADGES[code])
    if code in _SOCIAL_BADGES:
        return format_badge(*_SOCIAL_BADGES[code])
    return ""


def format_overlap(overlap: OverlapRange) -> str:
    """Format an overlap window as ``YYYY-MM-DD HH:MM-HH:MM`` (full ISO when spanning days)."""
    start: datetime = overlap.start
    end: datetime = overlap.end
    if start.date() == end.date():
        return f"{start:%Y-%m-%d %H:%M}-{end:%H:%M}"
    return f"{start.isoformat()} - {end.isoformat()}"


__all__ = ["format_badge", "badge_for", "format_overlap"]

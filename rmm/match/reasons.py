"""Structured explanation codes and their text rendering.

Scorers emit :class:`Reason` values (a code plus parameters). Turning them into
display text is a separate step so the wording can be swapped (locale, UI
tone) without touching scoring logic.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence


class ReasonCode(str, Enum):
    OVERLAP = "overlap"
    SOCIAL_FRIEND = "social_friend"
    SOCIAL_PREVIOUS_OPPONENT = "social_previous_opponent"
    SOCIAL_NONE = "social_none"
    LEVEL_CLOSE = "level_close"
    LEVEL_PLAYABLE = "level_playable"
    LEVEL_FAR = "level_far"
    LEVEL_UNKNOWN = "level_unknown"
    LOCATION_DISTANCE = "location_distance"
    LOCATION_SAME_CITY = "location_same_city"
    LOCATION_UNKNOWN = "location_unknown"
    SURFACE_MATCH = "surface_match"
    SURFACE_MISMATCH = "surface_mismatch"
    SURFACE_UNKNOWN = "surface_unknown"
    # exclusions (diagnostics only, never attached to a ranked candidate)
    EXCLUDED_SELF = "excluded_self"
    EXCLUDED_STATUS = "excluded_status"
    EXCLUDED_OVERLAP = "excluded_overlap"
    EXCLUDED_MIN_SCORE = "excluded_min_score"
    EXCLUDED_UNRESOLVED_USER = "excluded_unresolved_user"


@dataclass(frozen=True)
class Reason:
    code: ReasonCode
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, **self.params}


DEFAULT_TEMPLATES: Dict[ReasonCode, str] = {
    ReasonCode.OVERLAP: "{minutes:g} min overlap",
    ReasonCode.SOCIAL_FRIEND: "Friends with requester",
    ReasonCode.SOCIAL_PREVIOUS_OPPONENT: "Played against each other before",
    ReasonCode.SOCIAL_NONE: "No social connection",
    ReasonCode.LEVEL_CLOSE: "Level: Close match (Δ{delta:.1f})",
    ReasonCode.LEVEL_PLAYABLE: "Level: Playable difference (Δ{delta:.1f})",
    ReasonCode.LEVEL_FAR: "Level: Far apart (Δ{delta:.1f})",
    ReasonCode.LEVEL_UNKNOWN: "Level: Unknown or uncertain, being inclusive",
    ReasonCode.LOCATION_DISTANCE: "Distance: {distance_km:.1f} km",
    ReasonCode.LOCATION_SAME_CITY: "Same city ({city})",
    ReasonCode.LOCATION_UNKNOWN: "Location unknown for one or both players",
    ReasonCode.SURFACE_MATCH: "Same preferred surface ({surface})",
    ReasonCode.SURFACE_MISMATCH: "Different preferred surfaces ({requester_surface} vs {candidate_surface})",
    ReasonCode.SURFACE_UNKNOWN: "Surface preference unknown",
    ReasonCode.EXCLUDED_SELF: "Excluded: availability belongs to the requester",
    ReasonCode.EXCLUDED_STATUS: "Excluded: availability status is '{status}'",
    ReasonCode.EXCLUDED_OVERLAP: "Excluded: {minutes:g} min overlap, {required} min required",
    ReasonCode.EXCLUDED_MIN_SCORE: "Excluded: score {score:.2f} below minimum {required:g}",
    ReasonCode.EXCLUDED_UNRESOLVED_USER: "Excluded: owning user {user_id} could not be resolved",
}


class ReasonRenderer:
    """Render reasons to text using a code -> format-string table.

    Unknown codes fall back to the raw code value so a renderer with a partial
    table never fails a request.
    """

    def __init__(self, templates: Mapping[ReasonCode, str] | None = None):
        self.templates: Dict[ReasonCode, str] = dict(DEFAULT_TEMPLATES)
        if templates:
            self.templates.update(templates)

    def render(self, reason: Reason) -> str:
        template = self.templates.get(reason.code)
        if template is None:
            return reason.code.value
        try:
            return template.format(**reason.params)
        except (KeyError, ValueError, IndexError):
            return reason.code.value

    def render_all(self, reasons: Sequence[Reason]) -> List[str]:
        return [self.render(r) for r in reasons]


__all__ = ["ReasonCode", "Reason", "ReasonRenderer", "DEFAULT_TEMPLATES"]

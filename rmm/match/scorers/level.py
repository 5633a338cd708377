"""Skill level compatibility between requester and candidate.

Four fixed categories:

- UNKNOWN  (+10) either level missing, or combined confidence below the floor
- CLOSE    (+20) |a - b| <= close_level_delta
- PLAYABLE (+5)  candidate level inside the requester's declared range for the
                 availability, or |a - b| <= playable_level_delta when no range
                 was declared
- FAR      (-5)  everything else

Missing data never costs points: an unrated guest lands in UNKNOWN, which
scores above PLAYABLE.
"""
from __future__ import annotations
from enum import Enum
from typing import Optional

from ...config_types import RankingConfig
from ...db.models import Availability, Player
from ..reasons import Reason, ReasonCode
from .base import FactorScore


class LevelCategory(str, Enum):
    CLOSE = "close"
    PLAYABLE = "playable"
    FAR = "far"
    UNKNOWN = "unknown"


def combined_confidence(requester: Optional[Player], candidate: Optional[Player]) -> float:
    """Weakest confidence of the two players.

    When either confidence is missing but both levels are known the levels
    are trusted as-is (1.0).
    """
    if requester is None or candidate is None:
        return 0.0
    if requester.level_confidence is not None and candidate.level_confidence is not None:
        return min(requester.level_confidence, candidate.level_confidence)
    if requester.level_value is not None and candidate.level_value is not None:
        return 1.0
    return 0.0


def _within_declared_range(level: float, availability: Availability) -> Optional[bool]:
    """None when the availability declares no range; a single bound is open-ended."""
    low, high = availability.min_level, availability.max_level
    if low is None and high is None:
        return None
    if low is not None and level < low:
        return False
    if high is not None and level > high:
        return False
    return True


def score_level_compatibility(
    requester: Optional[Player],
    candidate: Optional[Player],
    requester_availability: Availability,
    cfg: RankingConfig,
) -> FactorScore:
    requester_level = requester.level_value if requester else None
    candidate_level = candidate.level_value if candidate else None
    if (
        requester_level is None
        or candidate_level is None
        or combined_confidence(requester, candidate) < cfg.level_min_confidence
    ):
        return FactorScore(cfg.level_unknown_score, LevelCategory.UNKNOWN.value, Reason(ReasonCode.LEVEL_UNKNOWN))

    delta = abs(requester_level - candidate_level)
    if delta <= cfg.close_level_delta:
        return FactorScore(
            cfg.level_close_score, LevelCategory.CLOSE.value, Reason(ReasonCode.LEVEL_CLOSE, {"delta": delta}), delta
        )

    in_range = _within_declared_range(candidate_level, requester_availability)
    playable = in_range if in_range is not None else delta <= cfg.playable_level_delta
    if playable:
        return FactorScore(
            cfg.level_playable_score,
            LevelCategory.PLAYABLE.value,
            Reason(ReasonCode.LEVEL_PLAYABLE, {"delta": delta}),
            delta,
        )
    return FactorScore(
        cfg.level_far_score, LevelCategory.FAR.value, Reason(ReasonCode.LEVEL_FAR, {"delta": delta}), delta
    )


__all__ = ["LevelCategory", "combined_confidence", "score_level_compatibility"]

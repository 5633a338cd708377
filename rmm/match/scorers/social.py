"""Social proximity: friend > previous opponent > stranger."""
from __future__ import annotations
from enum import Enum

from ...config_types import RankingConfig
from ..reasons import Reason, ReasonCode
from .base import FactorScore


class SocialCategory(str, Enum):
    FRIEND = "friend"
    PREVIOUS_OPPONENT = "previous_opponent"
    STRANGER = "stranger"


def resolve_social_proximity(is_friend: bool, has_played: bool, cfg: RankingConfig) -> FactorScore:
    """Classify the pair into exactly one category, checked in priority order.

    Friendship takes precedence when both flags are true.
    """
    if is_friend:
        return FactorScore(cfg.social_friend_score, SocialCategory.FRIEND.value, Reason(ReasonCode.SOCIAL_FRIEND))
    if has_played:
        return FactorScore(
            cfg.social_previous_opponent_score,
            SocialCategory.PREVIOUS_OPPONENT.value,
            Reason(ReasonCode.SOCIAL_PREVIOUS_OPPONENT),
        )
    return FactorScore(0.0, SocialCategory.STRANGER.value, Reason(ReasonCode.SOCIAL_NONE))


__all__ = ["SocialCategory", "resolve_social_proximity"]

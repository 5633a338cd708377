"""Surface preference agreement.

Preferences arrive as free-form labels from the data source ("Hard court",
"terre battue", "synthetic grass"...). They are mapped onto a small canonical
set before comparison, using exact synonym lookup first and rapidfuzz token
matching as a fallback for typos and reordered words. Partial labels such as
"green" stay unresolved rather than borrowing a longer synonym.

The bonus magnitude is configuration and defaults to 0, so the factor is
always explained but neutral until it is tuned.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

from rapidfuzz import fuzz

from ...config_types import RankingConfig
from ...utils.normalization import normalize_label
from ..reasons import Reason, ReasonCode
from .base import FactorScore

SURFACE_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "clay": ("clay", "terre battue", "red clay", "green clay", "har tru", "tierra batida"),
    "hard": ("hard", "hardcourt", "acrylic", "asphalt", "concrete", "decoturf", "plexicushion"),
    "grass": ("grass", "lawn", "natural grass", "artificial grass", "synthetic grass", "astroturf"),
    "carpet": ("carpet", "textile", "moquette", "indoor carpet"),
}


def canonical_surface(label: Optional[str], fuzzy_threshold: int = 85) -> Optional[str]:
    """Map a raw surface label to one of SURFACE_SYNONYMS' keys, or None."""
    if not isinstance(label, str) or not label:
        return None
    norm = normalize_label(label)
    if not norm:
        return None
    for canonical, synonyms in SURFACE_SYNONYMS.items():
        if norm in synonyms:
            return canonical

    best: Tuple[Optional[str], float] = (None, 0.0)
    for canonical, synonyms in SURFACE_SYNONYMS.items():
        for synonym in synonyms:
            ratio = fuzz.token_sort_ratio(norm, synonym)
            if ratio > best[1]:
                best = (canonical, ratio)
    if best[0] is not None and best[1] >= fuzzy_threshold:
        return best[0]
    return None


def score_surface_match(
    requester_preference: Optional[str],
    candidate_preference: Optional[str],
    cfg: RankingConfig,
) -> FactorScore:
    requester_surface = canonical_surface(requester_preference, cfg.surface_fuzzy_threshold)
    candidate_surface = canonical_surface(candidate_preference, cfg.surface_fuzzy_threshold)
    if requester_surface is None or candidate_surface is None:
        return FactorScore(0.0, "unknown", Reason(ReasonCode.SURFACE_UNKNOWN))
    if requester_surface == candidate_surface:
        return FactorScore(
            cfg.surface_match_bonus, "match", Reason(ReasonCode.SURFACE_MATCH, {"surface": requester_surface})
        )
    return FactorScore(
        0.0,
        "mismatch",
        Reason(
            ReasonCode.SURFACE_MISMATCH,
            {"requester_surface": requester_surface, "candidate_surface": candidate_surface},
        ),
    )


__all__ = ["SURFACE_SYNONYMS", "canonical_surface", "score_surface_match"]

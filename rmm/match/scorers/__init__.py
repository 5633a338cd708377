"""Independent per-factor scorers used by the candidate ranker."""

from .base import FactorScore
from .overlap import OverlapResult, compute_overlap
from .social import SocialCategory, resolve_social_proximity
from .level import LevelCategory, score_level_compatibility
from .location import haversine_km, distance_score, score_location_proximity
from .surface import canonical_surface, score_surface_match

__all__ = [
    "FactorScore",
    "OverlapResult",
    "compute_overlap",
    "SocialCategory",
    "resolve_social_proximity",
    "LevelCategory",
    "score_level_compatibility",
    "haversine_km",
    "distance_score",
    "score_location_proximity",
    "canonical_surface",
    "score_surface_match",
]

"""Geographic proximity bonus.

Distance is a bonus, never a veto: beyond the radius the contribution is 0.
"""
from __future__ import annotations
import math
from typing import Optional, Tuple

from ...config_types import RankingConfig
from ...db.models import Availability, Player
from ..reasons import Reason, ReasonCode
from .base import FactorScore

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Great-circle distance between two (lat, lon) points in kilometres."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_score(distance_km: float, cfg: RankingConfig) -> float:
    """Linear from location_max_score at 0 km down to 0 at the radius, 0 beyond."""
    if distance_km >= cfg.location_radius_km:
        return 0.0
    return cfg.location_max_score * (1 - max(0.0, distance_km) / cfg.location_radius_km)


def _resolve_point(availability: Availability, player: Optional[Player]) -> Optional[Tuple[float, float]]:
    if availability.coordinates is not None:
        return availability.coordinates
    if player is not None:
        return player.coordinates
    return None


def _same_city(requester: Optional[Player], candidate: Optional[Player]) -> Optional[str]:
    if requester is None or candidate is None or not requester.city or not candidate.city:
        return None
    if requester.city.strip().casefold() == candidate.city.strip().casefold():
        return candidate.city.strip()
    return None


def score_location_proximity(
    requester_availability: Availability,
    candidate_availability: Availability,
    requester: Optional[Player],
    candidate: Optional[Player],
    cfg: RankingConfig,
) -> FactorScore:
    """Score proximity from availability coordinates, falling back to home coordinates.

    When either side has no coordinates at all, a shared home city earns the
    small same-city bonus; otherwise the factor is neutral.
    """
    origin = _resolve_point(requester_availability, requester)
    target = _resolve_point(candidate_availability, candidate)
    if origin is not None and target is not None:
        distance = haversine_km(origin, target)
        return FactorScore(
            distance_score(distance, cfg),
            "distance",
            Reason(ReasonCode.LOCATION_DISTANCE, {"distance_km": distance}),
            distance,
        )
    city = _same_city(requester, candidate)
    if city:
        return FactorScore(cfg.same_city_bonus, "same_city", Reason(ReasonCode.LOCATION_SAME_CITY, {"city": city}))
    return FactorScore(0.0, "unknown", Reason(ReasonCode.LOCATION_UNKNOWN))


__all__ = ["EARTH_RADIUS_KM", "haversine_km", "distance_score", "score_location_proximity"]

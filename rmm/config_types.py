"""Typed configuration dataclasses for rally-matchmaker.

Provides strongly-typed configuration objects that can be used throughout
the application for better type safety and IDE support. The ranking section
is frozen: it is validated once at load time and never mutated while a
request is being scored.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Tuple, Dict, Any

KNOWN_AVAILABILITY_STATUSES = ("open", "invited", "matched", "closed")


@dataclass(frozen=True)
class RankingConfig:
    """Weights, thresholds and category scores for candidate ranking.

    Score composition (all weights default to 1):

        score = weight_availability_overlap * overlap_minutes
              + weight_social_proximity     * social     (friend 50 / played before 20 / none 0)
              + weight_level_compatibility  * level      (close 20 / playable 5 / far -5 / unknown 10)
              + weight_location_proximity   * location   (15 at 0 km, linear to 0 at 20 km, 0 beyond)
              + weight_surface              * surface    (surface_match_bonus when preferences agree)

    Gates:
    - A candidate whose overlap is shorter than min_overlap_minutes is never scored.
    - A scored candidate below min_score is dropped.
    """
    # eligibility gates
    min_overlap_minutes: int = 60
    min_score: float = 10.0
    eligible_statuses: Tuple[str, ...] = ("open",)
    # factor weights
    weight_availability_overlap: float = 1.0
    weight_social_proximity: float = 1.0
    weight_level_compatibility: float = 1.0
    weight_location_proximity: float = 1.0
    weight_surface: float = 1.0
    # social categories
    social_friend_score: float = 50.0
    social_previous_opponent_score: float = 20.0
    # level categories
    level_close_score: float = 20.0
    level_playable_score: float = 5.0
    level_far_score: float = -5.0
    level_unknown_score: float = 10.0
    close_level_delta: float = 0.5
    playable_level_delta: float = 1.5  # used when the requester declared no level range
    level_min_confidence: float = 0.3
    # location
    location_max_score: float = 15.0
    location_radius_km: float = 20.0
    same_city_bonus: float = 3.0
    # surface
    surface_match_bonus: float = 0.0
    surface_fuzzy_threshold: int = 85  # rapidfuzz 0-100 scale
    # output shaping
    max_results: int = 0  # 0 = unlimited
    max_workers: int = 1  # >1 evaluates candidates in a thread pool
    ids_must_be_uuid: bool = True

    def validate(self) -> "RankingConfig":
        """Raise ValueError when the configuration cannot produce sane rankings.

        Returns:
            self, so the call can be chained after construction
        """
        if self.min_overlap_minutes < 0:
            raise ValueError(f"min_overlap_minutes must be >= 0 (got {self.min_overlap_minutes})")
        for name in (
            "weight_availability_overlap",
            "weight_social_proximity",
            "weight_level_compatibility",
            "weight_location_proximity",
            "weight_surface",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0 (got {getattr(self, name)})")
        if self.close_level_delta < 0 or self.playable_level_delta < 0:
            raise ValueError("Level deltas must be non-negative")
        if self.close_level_delta > self.playable_level_delta:
            raise ValueError(
                f"close_level_delta ({self.close_level_delta}) must not exceed "
                f"playable_level_delta ({self.playable_level_delta})"
            )
        if not 0.0 <= self.level_min_confidence <= 1.0:
            raise ValueError(f"level_min_confidence must be within [0, 1] (got {self.level_min_confidence})")
        if self.location_radius_km <= 0:
            raise ValueError(f"location_radius_km must be > 0 (got {self.location_radius_km})")
        if self.location_max_score < 0 or self.same_city_bonus < 0 or self.surface_match_bonus < 0:
            raise ValueError("Location and surface bonuses must be non-negative")
        if not 0 <= self.surface_fuzzy_threshold <= 100:
            raise ValueError(f"surface_fuzzy_threshold must be within [0, 100] (got {self.surface_fuzzy_threshold})")
        unknown = [s for s in self.eligible_statuses if s not in KNOWN_AVAILABILITY_STATUSES]
        if unknown:
            raise ValueError(
                f"Unknown availability status(es) {', '.join(unknown)}. "
                f"Known: {', '.join(KNOWN_AVAILABILITY_STATUSES)}"
            )
        if self.max_results < 0:
            raise ValueError(f"max_results must be >= 0 (got {self.max_results})")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1 (got {self.max_workers})")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (statuses as a list for JSON output)."""
        data = asdict(self)
        data["eligible_statuses"] = list(self.eligible_statuses)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RankingConfig:
        values = dict(data)
        statuses = values.get("eligible_statuses")
        if isinstance(statuses, str):
            values["eligible_statuses"] = tuple(s.strip() for s in statuses.split(",") if s.strip())
        elif statuses is not None:
            values["eligible_statuses"] = tuple(statuses)
        return cls(**values)


@dataclass
class SnapshotConfig:
    """Location of the entity snapshot consumed by the CLI."""
    path: str = "data/snapshot.json"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for backward compatibility."""
        return asdict(self)


@dataclass
class ReportsConfig:
    """Reporting configuration."""
    directory: str = "data/reports"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for backward compatibility."""
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    ranking: RankingConfig = field(default_factory=RankingConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary matching the config format."""
        return {
            "log_level": self.log_level,
            "ranking": self.ranking.to_dict(),
            "snapshot": self.snapshot.to_dict(),
            "reports": self.reports.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance with a validated ranking section

        Raises:
            ValueError: If the ranking section fails validation
            TypeError: If a section contains unknown keys
        """
        return cls(
            log_level=data.get("log_level", "INFO"),
            ranking=RankingConfig.from_dict(data.get("ranking", {})).validate(),
            snapshot=SnapshotConfig(**data.get("snapshot", {})),
            reports=ReportsConfig(**data.get("reports", {})),
        )


__all__ = [
    "AppConfig",
    "RankingConfig",
    "SnapshotConfig",
    "ReportsConfig",
    "KNOWN_AVAILABILITY_STATUSES",
]

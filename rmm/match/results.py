"""Transient result types produced by the candidate ranker.

Nothing here is persisted: a result is created per request and discarded once
the caller has rendered it.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .reasons import Reason


@dataclass(frozen=True)
class OverlapRange:
    start: datetime
    end: datetime

    @property
    def minutes(self) -> float:
        return max(0.0, (self.end - self.start).total_seconds() / 60.0)

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Weighted per-factor contributions; they sum to the candidate score."""
    availability: float
    social: float
    level: float
    location: float
    surface: float

    @property
    def total(self) -> float:
        return self.availability + self.social + self.level + self.location + self.surface

    def to_dict(self) -> Dict[str, float]:
        return {
            "availability": self.availability,
            "social": self.social,
            "level": self.level,
            "location": self.location,
            "surface": self.surface,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    candidate_user_id: str
    candidate_player_id: Optional[str]
    candidate_availability_id: str
    requester_availability_id: str
    overlap_range: OverlapRange
    score: float
    score_breakdown: ScoreBreakdown
    reasons: List[str] = field(default_factory=list)
    reason_codes: List[Reason] = field(default_factory=list)

    def sort_key(self):
        """Score descending, then user id and availability id ascending."""
        return (-self.score, self.candidate_user_id, self.candidate_availability_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate_user_id": self.candidate_user_id,
            "candidate_player_id": self.candidate_player_id,
            "candidate_availability_id": self.candidate_availability_id,
            "requester_availability_id": self.requester_availability_id,
            "overlap_range": self.overlap_range.to_dict(),
            "score": self.score,
            "score_breakdown": self.score_breakdown.to_dict(),
            "reasons": list(self.reasons),
            "reason_codes": [r.to_dict() for r in self.reason_codes],
        }


@dataclass(frozen=True)
class MatchSuggestions:
    availability_id: str
    candidates: List[ScoredCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "availability_id": self.availability_id,
            "candidates": [c.to_dict() for c in self.candidates],
        }


@dataclass(frozen=True)
class CandidateEvaluation:
    """Outcome of evaluating one candidate availability.

    ``exclusion`` is set when the candidate was rejected. ``candidate`` is set
    whenever scoring actually ran, so a min-score rejection still carries the
    breakdown that fell short.
    """
    candidate_availability_id: str
    candidate: Optional[ScoredCandidate] = None
    exclusion: Optional[Reason] = None

    @property
    def accepted(self) -> bool:
        return self.exclusion is None and self.candidate is not None


__all__ = [
    "OverlapRange",
    "ScoreBreakdown",
    "ScoredCandidate",
    "MatchSuggestions",
    "CandidateEvaluation",
]

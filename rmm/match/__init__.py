"""Candidate scoring and ranking."""
from .candidate_selector import CandidateSelector
from .errors import DataInconsistencyError, InvalidInputError, MatchmakingError, NotFoundError
from .ranker import CandidateRanker
from .reasons import DEFAULT_TEMPLATES, Reason, ReasonCode, ReasonRenderer
from .results import CandidateEvaluation, MatchSuggestions, OverlapRange, ScoreBreakdown, ScoredCandidate

__all__ = [
    "CandidateRanker",
    "CandidateSelector",
    "CandidateEvaluation",
    "MatchSuggestions",
    "OverlapRange",
    "ScoreBreakdown",
    "ScoredCandidate",
    "Reason",
    "ReasonCode",
    "ReasonRenderer",
    "DEFAULT_TEMPLATES",
    "MatchmakingError",
    "NotFoundError",
    "InvalidInputError",
    "DataInconsistencyError",
]

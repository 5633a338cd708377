"""Candidate ranking engine.

This module coordinates candidate selection, the overlap gate, the four
remaining factor scorers, weighted combination, the minimum-score gate and
the final deterministic sort. It is a pure computation over data the caller
already fetched through a :class:`DataSourceInterface`; it never writes.
"""

from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Tuple, TypeVar

from ..config_types import RankingConfig
from ..db.interface import DataSourceInterface
from ..db.models import Availability, Player
from .candidate_selector import CandidateSelector
from .errors import DataInconsistencyError, NotFoundError
from .reasons import Reason, ReasonCode, ReasonRenderer
from .results import CandidateEvaluation, MatchSuggestions, ScoreBreakdown, ScoredCandidate
from .scorers import (
    FactorScore,
    OverlapResult,
    compute_overlap,
    resolve_social_proximity,
    score_level_compatibility,
    score_location_proximity,
    score_surface_match,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CandidateRanker:
    """Rank other users' availabilities against one requester availability.

    Pipeline per request:
    1. Load the requester and their availability (NotFound when either is
       missing or the availability belongs to someone else) and the requester
       player profile
    2. Enumerate other availabilities via CandidateSelector (no self, open only)
    3. Overlap gate: shorter than min_overlap_minutes is excluded, not scored
    4. Social, level, location and surface scores
    5. Weighted sum, then the min_score gate
    6. Sort by score desc, candidate user id asc, availability id asc

    Candidates are evaluated independently (optionally in a thread pool); the
    sort is the only point where results meet.

    Example usage:
        ranker = CandidateRanker(data_source, RankingConfig())
        suggestions = ranker.find_match_candidates(user_id, availability_id)
    """

    def __init__(
        self,
        data_source: DataSourceInterface,
        config: RankingConfig | None = None,
        renderer: ReasonRenderer | None = None,
    ):
        self.data_source = data_source
        self.config = (config or RankingConfig()).validate()
        self.renderer = renderer or ReasonRenderer()
        self.selector = CandidateSelector(self.config.eligible_statuses)

    # --- public operations -------------------------------------------------

    def find_match_candidates(self, requester_user_id: str, requester_availability_id: str) -> MatchSuggestions:
        """Return ranked, explained suggestions for one requester availability.

        Raises:
            NotFoundError: If the requester or the availability does not exist,
                or the availability belongs to another user
        """
        start = time.time()
        requester_availability, requester_player, requester_surface = self._load_requester(
            requester_user_id, requester_availability_id
        )

        pool = self.selector.select(
            requester_availability,
            self.data_source.list_other_availabilities(requester_user_id),
        )

        def evaluate_one(candidate: Availability) -> CandidateEvaluation:
            return self._evaluate_candidate(requester_availability, requester_player, requester_surface, candidate)

        if self.config.max_workers > 1 and len(pool) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                evaluations = list(executor.map(evaluate_one, pool))
        else:
            evaluations = [evaluate_one(candidate) for candidate in pool]

        accepted = sorted(
            (e.candidate for e in evaluations if e.accepted and e.candidate is not None),
            key=ScoredCandidate.sort_key,
        )
        if self.config.max_results:
            accepted = accepted[: self.config.max_results]

        logger.info(
            f"✓ Ranked {len(accepted)} candidate(s) from {len(pool)} availabilit{'y' if len(pool) == 1 else 'ies'} "
            f"for {requester_availability_id} in {time.time() - start:.3f}s"
        )
        return MatchSuggestions(availability_id=requester_availability.id, candidates=accepted)

    def evaluate(
        self,
        requester_user_id: str,
        requester_availability_id: str,
        candidate_availability_id: str,
    ) -> CandidateEvaluation:
        """Evaluate a single candidate availability, reporting why it was excluded.

        Raises:
            NotFoundError: If the requester or either availability cannot be
                found, or the requester availability belongs to another user
        """
        requester_availability, requester_player, requester_surface = self._load_requester(
            requester_user_id, requester_availability_id
        )
        candidate = self.data_source.get_availability(candidate_availability_id)
        if candidate is None:
            raise NotFoundError(
                f"Candidate availability {candidate_availability_id} not found",
                availability_id=candidate_availability_id,
            )
        exclusion = self.selector.exclusion_for(requester_availability, candidate)
        if exclusion is not None:
            return CandidateEvaluation(candidate_availability_id=candidate.id, exclusion=exclusion)
        return self._evaluate_candidate(requester_availability, requester_player, requester_surface, candidate)

    # --- internals ---------------------------------------------------------

    def _load_requester(
        self, requester_user_id: str, requester_availability_id: str
    ) -> Tuple[Availability, Optional[Player], Optional[str]]:
        if self.data_source.get_user(requester_user_id) is None:
            raise NotFoundError(f"User {requester_user_id} not found")
        availability = self.data_source.get_availability(requester_availability_id)
        if availability is None:
            raise NotFoundError(
                f"Availability {requester_availability_id} not found",
                availability_id=requester_availability_id,
            )
        if availability.user_id != requester_user_id:
            raise NotFoundError(
                f"Availability {requester_availability_id} does not belong to user {requester_user_id}",
                availability_id=requester_availability_id,
            )
        player = self._safe(
            lambda: self.data_source.get_player_by_user_id(requester_user_id), None, "requester player", availability.id
        )
        surface = self._safe(
            lambda: self.data_source.resolve_surface_preference(requester_user_id), None, "requester surface", availability.id
        )
        return availability, player, surface

    def _evaluate_candidate(
        self,
        requester: Availability,
        requester_player: Optional[Player],
        requester_surface: Optional[str],
        candidate: Availability,
    ) -> CandidateEvaluation:
        try:
            self._require_user(candidate)
        except DataInconsistencyError as e:
            logger.warning(f"Skipping candidate availability {candidate.id}: {e}")
            return CandidateEvaluation(
                candidate_availability_id=candidate.id,
                exclusion=Reason(ReasonCode.EXCLUDED_UNRESOLVED_USER, {"user_id": candidate.user_id}),
            )

        cfg = self.config
        try:
            overlap = compute_overlap(
                requester.start_time, requester.end_time, candidate.start_time, candidate.end_time, cfg.min_overlap_minutes
            )
        except TypeError as e:
            # naive vs aware datetimes from inconsistent records
            logger.warning(f"Skipping candidate availability {candidate.id}: cannot compare windows ({e})")
            overlap = OverlapResult(minutes=0.0, overlap_range=None, eligible=False)
        if not overlap.eligible or overlap.overlap_range is None:
            return CandidateEvaluation(
                candidate_availability_id=candidate.id,
                exclusion=Reason(
                    ReasonCode.EXCLUDED_OVERLAP, {"minutes": overlap.minutes, "required": cfg.min_overlap_minutes}
                ),
            )

        requester_id = requester.user_id
        candidate_id = candidate.user_id
        candidate_player = self._safe(
            lambda: self.data_source.get_player_by_user_id(candidate_id), None, "candidate player", candidate.id
        )
        is_friend = bool(self._safe(lambda: self.data_source.is_friend(requester_id, candidate_id), False, "friendship", candidate.id))
        has_played = not is_friend and bool(
            self._safe(lambda: self.data_source.has_previously_played(requester_id, candidate_id), False, "match history", candidate.id)
        )
        candidate_surface = self._safe(
            lambda: self.data_source.resolve_surface_preference(candidate_id), None, "candidate surface", candidate.id
        )

        social = self._score_factor(
            lambda: resolve_social_proximity(is_friend, has_played, cfg),
            FactorScore(0.0, "stranger", Reason(ReasonCode.SOCIAL_NONE)), "social", candidate.id,
        )
        level = self._score_factor(
            lambda: score_level_compatibility(requester_player, candidate_player, requester, cfg),
            FactorScore(cfg.level_unknown_score, "unknown", Reason(ReasonCode.LEVEL_UNKNOWN)), "level", candidate.id,
        )
        location = self._score_factor(
            lambda: score_location_proximity(requester, candidate, requester_player, candidate_player, cfg),
            FactorScore(0.0, "unknown", Reason(ReasonCode.LOCATION_UNKNOWN)), "location", candidate.id,
        )
        surface = self._score_factor(
            lambda: score_surface_match(requester_surface, candidate_surface, cfg),
            FactorScore(0.0, "unknown", Reason(ReasonCode.SURFACE_UNKNOWN)), "surface", candidate.id,
        )

        breakdown = ScoreBreakdown(
            availability=cfg.weight_availability_overlap * overlap.minutes,
            social=cfg.weight_social_proximity * social.score,
            level=cfg.weight_level_compatibility * level.score,
            location=cfg.weight_location_proximity * location.score,
            surface=cfg.weight_surface * surface.score,
        )
        reason_codes = [overlap.reason, social.reason, level.reason, location.reason, surface.reason]
        scored = ScoredCandidate(
            candidate_user_id=candidate_id,
            candidate_player_id=candidate_player.id if candidate_player else None,
            candidate_availability_id=candidate.id,
            requester_availability_id=requester.id,
            overlap_range=overlap.overlap_range,
            score=breakdown.total,
            score_breakdown=breakdown,
            reasons=self.renderer.render_all(reason_codes),
            reason_codes=reason_codes,
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"availability={candidate.id} user={candidate_id} score={scored.score:.2f} "
                f"breakdown={breakdown.to_dict()} reasons={[r.code.value for r in reason_codes]}"
            )

        if scored.score < cfg.min_score:
            return CandidateEvaluation(
                candidate_availability_id=candidate.id,
                candidate=scored,
                exclusion=Reason(ReasonCode.EXCLUDED_MIN_SCORE, {"score": scored.score, "required": cfg.min_score}),
            )
        return CandidateEvaluation(candidate_availability_id=candidate.id, candidate=scored)

    def _require_user(self, candidate: Availability) -> None:
        user = self._safe(lambda: self.data_source.get_user(candidate.user_id), None, "candidate user", candidate.id)
        if user is None:
            raise DataInconsistencyError(f"user {candidate.user_id} could not be resolved")

    @staticmethod
    def _safe(fn: Callable[[], T], default: T, what: str, availability_id: str) -> T:
        """Run a data-source lookup, degrading to ``default`` when it fails."""
        try:
            return fn()
        except Exception as e:
            logger.warning(f"Lookup of {what} failed for availability {availability_id}: {e!r}; treating as unknown")
            return default

    @staticmethod
    def _score_factor(fn: Callable[[], FactorScore], fallback: FactorScore, factor: str, availability_id: str) -> FactorScore:
        """Run one factor scorer, falling back to its unknown category when it fails."""
        try:
            return fn()
        except Exception as e:
            logger.warning(f"Scoring {factor} failed for availability {availability_id}: {e!r}; treating as unknown")
            return fallback


__all__ = ["CandidateRanker"]

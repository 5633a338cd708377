"""Diagnostic service for troubleshooting why a candidate is not suggested."""

from __future__ import annotations
import logging
from typing import Any, Dict, List

from ..db.interface import DataSourceInterface
from ..match.errors import NotFoundError
from ..match.ranker import CandidateRanker
from ..match.reasons import ReasonCode, ReasonRenderer
from ..match.results import ScoredCandidate
from .suggest_service import ranking_config_from, validate_identifier

logger = logging.getLogger(__name__)


class DiagnosticResult:
    """Result of diagnosing one requester/candidate availability pair."""

    def __init__(
        self,
        found: bool,
        requester_availability_id: str,
        candidate_availability_id: str,
        not_found_message: str = "",
        accepted: bool = False,
        exclusion: str | None = None,
        exclusion_code: str | None = None,
        candidate: ScoredCandidate | None = None,
        weights: Dict[str, float] | None = None,
        min_score: float = 0.0,
        min_overlap_minutes: int = 0,
    ):
        self.found = found
        self.requester_availability_id = requester_availability_id
        self.candidate_availability_id = candidate_availability_id
        self.not_found_message = not_found_message
        self.accepted = accepted
        self.exclusion = exclusion
        self.exclusion_code = exclusion_code
        self.candidate = candidate
        self.weights = weights or {}
        self.min_score = min_score
        self.min_overlap_minutes = min_overlap_minutes


def diagnose_candidate(
    data_source: DataSourceInterface,
    config: Dict[str, Any],
    user_id: str,
    availability_id: str,
    candidate_availability_id: str,
) -> DiagnosticResult:
    """Explain whether and why a candidate availability is suggested.

    Missing availabilities are reported in the result rather than raised so
    the command can print hints; malformed identifiers still raise.

    Args:
        data_source: Read-only entity accessors
        config: Full configuration dict
        user_id: Requester user id
        availability_id: Requester availability id
        candidate_availability_id: Availability to explain

    Returns:
        DiagnosticResult with the exclusion reason or the full score breakdown

    Raises:
        InvalidInputError: If an identifier is malformed
    """
    ranking = ranking_config_from(config)
    user_id = validate_identifier(user_id, "user_id", ranking.ids_must_be_uuid)
    availability_id = validate_identifier(availability_id, "availability_id", ranking.ids_must_be_uuid)
    candidate_availability_id = validate_identifier(
        candidate_availability_id, "candidate_availability_id", ranking.ids_must_be_uuid
    )

    renderer = ReasonRenderer()
    ranker = CandidateRanker(data_source, ranking, renderer)
    weights = {
        'availability': ranking.weight_availability_overlap,
        'social': ranking.weight_social_proximity,
        'level': ranking.weight_level_compatibility,
        'location': ranking.weight_location_proximity,
        'surface': ranking.weight_surface,
    }
    try:
        evaluation = ranker.evaluate(user_id, availability_id, candidate_availability_id)
    except NotFoundError as e:
        logger.debug(f"Diagnose lookup failed: {e}")
        return DiagnosticResult(
            found=False,
            requester_availability_id=availability_id,
            candidate_availability_id=candidate_availability_id,
            not_found_message=str(e),
        )

    return DiagnosticResult(
        found=True,
        requester_availability_id=availability_id,
        candidate_availability_id=candidate_availability_id,
        accepted=evaluation.accepted,
        exclusion=renderer.render(evaluation.exclusion) if evaluation.exclusion else None,
        exclusion_code=evaluation.exclusion.code.value if evaluation.exclusion else None,
        candidate=evaluation.candidate,
        weights=weights,
        min_score=ranking.min_score,
        min_overlap_minutes=ranking.min_overlap_minutes,
    )


_HINTS: Dict[str, List[str]] = {
    ReasonCode.EXCLUDED_SELF.value: ["Both availabilities belong to the same user"],
    ReasonCode.EXCLUDED_STATUS.value: [
        "Only availabilities with an eligible status are considered",
        "Adjust RMM__RANKING__ELIGIBLE_STATUSES to widen the pool",
    ],
    ReasonCode.EXCLUDED_OVERLAP.value: [
        "The two windows do not share enough time",
        "Lower RMM__RANKING__MIN_OVERLAP_MINUTES to relax the gate",
    ],
    ReasonCode.EXCLUDED_MIN_SCORE.value: [
        "The candidate was scored but fell below the minimum",
        "Lower RMM__RANKING__MIN_SCORE or raise factor weights",
    ],
    ReasonCode.EXCLUDED_UNRESOLVED_USER.value: [
        "The availability references a user missing from the data source",
        "Check the snapshot's users section",
    ],
}


def format_diagnostic_output(result: DiagnosticResult) -> str:
    """Format diagnostic result as human-readable output.

    Args:
        result: DiagnosticResult to format

    Returns:
        Formatted diagnostic output string
    """
    lines: List[str] = []

    if not result.found:
        lines.append("❌ Availability not found")
        lines.append("")
        lines.append(result.not_found_message)
        lines.append("")
        lines.append("Possible reasons:")
        lines.append("  • Availability ID is incorrect")
        lines.append("  • The requester availability belongs to another user")
        lines.append("  • The snapshot is outdated")
        return "\n".join(lines)

    lines.append(f"Requester availability: {result.requester_availability_id}")
    lines.append(f"Candidate availability: {result.candidate_availability_id}")
    lines.append("")

    if result.accepted:
        lines.append("✅ Candidate is suggested")
    else:
        lines.append("❌ Candidate is NOT suggested")
    lines.append("=" * 70)

    if result.exclusion:
        lines.append(result.exclusion)
        for hint in _HINTS.get(result.exclusion_code or "", []):
            lines.append(f"  • {hint}")
        lines.append("")

    candidate = result.candidate
    if candidate is not None:
        breakdown = candidate.score_breakdown.to_dict()
        lines.append(f"Overlap:  {candidate.overlap_range.start.isoformat()} → {candidate.overlap_range.end.isoformat()}")
        lines.append(f"Score:    {candidate.score:.2f} (minimum {result.min_score:g})")
        lines.append("")
        lines.append("Breakdown (weighted):")
        for factor, value in breakdown.items():
            weight = result.weights.get(factor, 1.0)
            lines.append(f"  {factor:<13} {value:>8.2f}   (weight {weight:g})")
        lines.append("")
        lines.append("Reasons:")
        for reason in candidate.reasons:
            lines.append(f"  • {reason}")

    return "\n".join(lines)


__all__ = ["DiagnosticResult", "diagnose_candidate", "format_diagnostic_output"]

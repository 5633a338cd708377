"""Suggest service: validate a request and run the candidate ranker.

This is the boundary between untrusted identifiers (CLI arguments, API
parameters) and the pure ranking engine. Identifier validation happens here so
the ranker itself only ever sees well-formed ids.
"""

from __future__ import annotations
import logging
import time
import uuid
from typing import Any, Dict

from ..config_types import RankingConfig
from ..db.interface import DataSourceInterface
from ..match.errors import InvalidInputError
from ..match.ranker import CandidateRanker
from ..match.reasons import ReasonRenderer
from ..match.results import MatchSuggestions

logger = logging.getLogger(__name__)


class SuggestResult:
    """Results from a suggest operation."""

    def __init__(self, suggestions: MatchSuggestions, ranking: RankingConfig):
        self.suggestions = suggestions
        self.ranking = ranking
        self.duration_seconds = 0.0

    @property
    def candidates(self):
        return self.suggestions.candidates


def validate_identifier(value: str, label: str, must_be_uuid: bool = True) -> str:
    """Reject malformed identifiers before any lookup happens.

    Args:
        value: Raw identifier
        label: Human-readable name used in the error message
        must_be_uuid: Require canonical UUID syntax

    Returns:
        The stripped identifier

    Raises:
        InvalidInputError: If the identifier is empty or not a UUID when one is required
    """
    text = (value or "").strip()
    if not text:
        raise InvalidInputError(f"{label} must not be empty")
    if must_be_uuid:
        try:
            uuid.UUID(text)
        except ValueError as e:
            raise InvalidInputError(f"{label} '{text}' is not a valid UUID") from e
    return text


def ranking_config_from(config: Dict[str, Any]) -> RankingConfig:
    """Build the validated ranking section from a full configuration dict."""
    return RankingConfig.from_dict(config.get('ranking', {})).validate()


def run_suggestions(
    data_source: DataSourceInterface,
    config: Dict[str, Any],
    user_id: str,
    availability_id: str,
    renderer: ReasonRenderer | None = None,
) -> SuggestResult:
    """Validate identifiers and rank candidates for one availability.

    Args:
        data_source: Read-only entity accessors
        config: Full configuration dict
        user_id: Requester user id
        availability_id: Requester availability id
        renderer: Optional reason renderer (defaults to English templates)

    Returns:
        SuggestResult holding the ranked suggestions and the ranking config used

    Raises:
        InvalidInputError: If an identifier is malformed
        NotFoundError: If the availability is missing or owned by someone else
    """
    ranking = ranking_config_from(config)
    user_id = validate_identifier(user_id, "user_id", ranking.ids_must_be_uuid)
    availability_id = validate_identifier(availability_id, "availability_id", ranking.ids_must_be_uuid)

    start = time.time()
    ranker = CandidateRanker(data_source, ranking, renderer)
    suggestions = ranker.find_match_candidates(user_id, availability_id)
    result = SuggestResult(suggestions, ranking)
    result.duration_seconds = time.time() - start

    if suggestions.candidates:
        best = suggestions.candidates[0]
        logger.debug(f"Best candidate {best.candidate_availability_id} ({best.candidate_user_id}) score={best.score:.2f}")
    else:
        logger.debug(f"No candidate passed the gates for availability {availability_id}")
    return result


__all__ = ["SuggestResult", "validate_identifier", "ranking_config_from", "run_suggestions"]

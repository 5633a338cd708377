"""Candidate enumeration for the ranker.

Narrows the pool of other users' availabilities to the ones that may be
scored at all. Cheap structural checks only (ownership, status); the overlap
gate stays with the overlap calculator so every exclusion has one owner.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from ..db.models import Availability
from .reasons import Reason, ReasonCode


class CandidateSelector:
    """Helper for selecting candidate availabilities for one requester window.

    Example usage:
        selector = CandidateSelector(eligible_statuses=("open",))
        pool = selector.select(requester_availability, data_source.list_other_availabilities(user_id))
    """

    def __init__(self, eligible_statuses: Sequence[str] = ("open",)):
        self.eligible_statuses = tuple(eligible_statuses)

    def exclusion_for(self, requester: Availability, candidate: Availability) -> Optional[Reason]:
        """Return why ``candidate`` may not be paired with ``requester``, or None.

        Self-matching is checked on both the availability id and the owning
        user id: a requester with several windows never meets themselves.
        """
        if candidate.id == requester.id or candidate.user_id == requester.user_id:
            return Reason(ReasonCode.EXCLUDED_SELF)
        if candidate.status not in self.eligible_statuses:
            return Reason(ReasonCode.EXCLUDED_STATUS, {"status": candidate.status})
        return None

    def select(self, requester: Availability, availabilities: Iterable[Availability]) -> List[Availability]:
        """Filter the pool, dropping duplicates by availability id (first wins)."""
        seen = set()
        selected: List[Availability] = []
        for candidate in availabilities:
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            if self.exclusion_for(requester, candidate) is None:
                selected.append(candidate)
        return selected


__all__ = ["CandidateSelector"]

"""Exceptions raised by the matchmaking engine and its service layer."""

from __future__ import annotations


class MatchmakingError(Exception):
    """Base class for matchmaking failures."""


class NotFoundError(MatchmakingError, LookupError):
    """The requester or their availability does not exist, or the availability belongs to another user."""

    def __init__(self, message: str, availability_id: str | None = None):
        super().__init__(message)
        self.availability_id = availability_id


class InvalidInputError(MatchmakingError, ValueError):
    """An identifier was rejected at the boundary, before ranking started."""


class DataInconsistencyError(MatchmakingError):
    """A candidate record references an entity that cannot be resolved.

    Raised and caught inside the ranker; the affected candidate is skipped.
    """


__all__ = ["MatchmakingError", "NotFoundError", "InvalidInputError", "DataInconsistencyError"]

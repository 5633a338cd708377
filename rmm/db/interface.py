from __future__ import annotations
"""Read-only data access abstraction for the ranking engine.

This interface defines the contract the ranker consumes. The engine never
writes; every accessor is a query over data already owned by the external
persistence layer. A JSON/dict backed snapshot implementation
(`SnapshotDataSource`) ships with the package, and tests inject the same
snapshot built from fixtures.

Implementations may fetch concurrently before handing the data over; the
engine itself calls these methods synchronously.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Availability, Player, UserRow


class DataSourceInterface(ABC):
    # --- Availabilities ---
    @abstractmethod
    def get_availability(self, availability_id: str) -> Optional[Availability]:
        """Return the availability with this id, or None."""
        ...

    @abstractmethod
    def list_other_availabilities(self, excluding_user_id: str) -> List[Availability]:
        """Return every availability not owned by ``excluding_user_id``."""
        ...

    # --- Users & players ---
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRow]: ...

    @abstractmethod
    def get_player_by_user_id(self, user_id: str) -> Optional[Player]:
        """Return the player persona for a user; None for unrated users."""
        ...

    # --- Social graph ---
    @abstractmethod
    def is_friend(self, user_a: str, user_b: str) -> bool:
        """True when a friendship edge exists in either direction."""
        ...

    @abstractmethod
    def has_previously_played(self, user_a: str, user_b: str) -> bool: ...

    # --- Preferences ---
    @abstractmethod
    def resolve_surface_preference(self, user_id: str) -> Optional[str]:
        """Best-effort preferred surface label for a user (raw, not normalised)."""
        ...


__all__ = ["DataSourceInterface"]

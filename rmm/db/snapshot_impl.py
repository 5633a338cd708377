from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from .interface import DataSourceInterface
from .models import Availability, Player, UserRow

logger = logging.getLogger(__name__)


class SnapshotDataSource(DataSourceInterface):
    """In-memory, read-only snapshot of the entities the ranker needs.

    Expected document layout (all sections optional)::

        {
          "users": [{"id": "...", "name": "..."}],
          "players": [{"id": "...", "user_id": "...", "level_value": 4.5,
                       "level_confidence": 0.8, "city": "Lyon",
                       "latitude": 45.76, "longitude": 4.83, "surfaces": ["clay"]}],
          "availabilities": [{"id": "...", "user_id": "...", "date": "2026-05-02",
                              "start_time": "10:00", "end_time": "12:00",
                              "latitude": 45.7, "longitude": 4.8,
                              "min_level": 3.5, "max_level": 5.0, "status": "open"}],
          "friendships": [["user-a", "user-b"]],
          "matches": [["user-a", "user-c"]],
          "surface_preferences": {"user-a": "clay"}
        }

    Friendships and matches are stored as directed pairs and queried in both
    directions. ``surface_preferences`` wins over the first entry of a
    player's ``surfaces`` list.
    """

    def __init__(
        self,
        users: Iterable[UserRow] = (),
        players: Iterable[Player] = (),
        availabilities: Iterable[Availability] = (),
        friendships: Iterable[Tuple[str, str]] = (),
        matches: Iterable[Tuple[str, str]] = (),
        surface_preferences: Dict[str, str] | None = None,
    ):
        self.users: Dict[str, UserRow] = {u.id: u for u in users}
        self.players: Dict[str, Player] = {p.user_id: p for p in players}
        # Preserve insertion order so enumeration is reproducible
        self.availabilities: Dict[str, Availability] = {a.id: a for a in availabilities}
        self.friendships: Set[Tuple[str, str]] = {(str(a), str(b)) for a, b in friendships}
        self.matches: Set[Tuple[str, str]] = {(str(a), str(b)) for a, b in matches}
        self.surface_preferences: Dict[str, str] = dict(surface_preferences or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SnapshotDataSource:
        """Build a snapshot from a parsed document.

        When the ``users`` section is absent entirely, every user id referenced
        by a player or availability is treated as an existing user. An explicit
        (even empty) ``users`` list is taken literally.
        """
        players = [Player.from_dict(p) for p in data.get("players", [])]
        availabilities = [Availability.from_dict(a) for a in data.get("availabilities", [])]
        if "users" in data:
            users = [UserRow.from_dict(u) for u in data["users"]]
        else:
            referenced = dict.fromkeys([p.user_id for p in players] + [a.user_id for a in availabilities])
            users = [UserRow(id=user_id) for user_id in referenced]
        return cls(
            users=users,
            players=players,
            availabilities=availabilities,
            friendships=[tuple(pair) for pair in data.get("friendships", [])],
            matches=[tuple(pair) for pair in data.get("matches", [])],
            surface_preferences=data.get("surface_preferences"),
        )

    @classmethod
    def from_json_file(cls, path: Path) -> SnapshotDataSource:
        """Load a snapshot document from disk.

        Raises:
            FileNotFoundError: If the snapshot file does not exist
            ValueError: If the document is not valid JSON or a record is malformed
        """
        path = Path(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        try:
            source = cls.from_dict(data)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed snapshot record in {path}: {e!r}") from e
        logger.debug(
            f"Loaded snapshot {path}: {len(source.users)} users, {len(source.players)} players, "
            f"{len(source.availabilities)} availabilities"
        )
        return source

    # --- DataSourceInterface ---
    def get_availability(self, availability_id: str) -> Optional[Availability]:
        return self.availabilities.get(availability_id)

    def list_other_availabilities(self, excluding_user_id: str) -> List[Availability]:
        return [a for a in self.availabilities.values() if a.user_id != excluding_user_id]

    def get_user(self, user_id: str) -> Optional[UserRow]:
        return self.users.get(user_id)

    def get_player_by_user_id(self, user_id: str) -> Optional[Player]:
        return self.players.get(user_id)

    def is_friend(self, user_a: str, user_b: str) -> bool:
        return (user_a, user_b) in self.friendships or (user_b, user_a) in self.friendships

    def has_previously_played(self, user_a: str, user_b: str) -> bool:
        return (user_a, user_b) in self.matches or (user_b, user_a) in self.matches

    def resolve_surface_preference(self, user_id: str) -> Optional[str]:
        explicit = self.surface_preferences.get(user_id)
        if explicit:
            return explicit
        player = self.players.get(user_id)
        if player and player.surfaces:
            return player.surfaces[0]
        return None


__all__ = ["SnapshotDataSource"]

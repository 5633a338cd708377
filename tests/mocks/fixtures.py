"""Builders and fixtures for ranking tests.

Ids are UUID-shaped so the same data passes the service layer's identifier
check. ``uid(7)`` -> ``"00000000-0000-4000-8000-000000000007"``.
"""
from __future__ import annotations
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence, Tuple

import pytest

from rmm.config_types import RankingConfig
from rmm.db import Availability, Player, SnapshotDataSource, UserRow

DAY = date(2026, 5, 2)


def uid(n: int) -> str:
    return f"00000000-0000-4000-8000-{n:012d}"


REQUESTER = uid(1)
REQUESTER_AVAILABILITY = uid(101)


def at(hhmm: str, day: date = DAY) -> datetime:
    return datetime.combine(day, time.fromisoformat(hhmm))


def make_availability(
    availability_id: str,
    user_id: str,
    start: str = "10:00",
    end: str = "12:00",
    day: date = DAY,
    **kwargs,
) -> Availability:
    return Availability(
        id=availability_id,
        user_id=user_id,
        date=day,
        start_time=at(start, day),
        end_time=at(end, day),
        **kwargs,
    )


def make_player(
    user_id: str,
    level: Optional[float] = None,
    confidence: Optional[float] = None,
    city: Optional[str] = None,
    coords: Optional[Tuple[float, float]] = None,
    surfaces: Sequence[str] = (),
) -> Player:
    return Player(
        id=f"player-{user_id}",
        user_id=user_id,
        level_value=level,
        level_confidence=confidence,
        city=city,
        latitude=coords[0] if coords else None,
        longitude=coords[1] if coords else None,
        surfaces=tuple(surfaces),
    )


def build_snapshot(
    availabilities: Iterable[Availability],
    players: Iterable[Player] = (),
    friendships: Iterable[Tuple[str, str]] = (),
    matches: Iterable[Tuple[str, str]] = (),
    users: Optional[Iterable[str]] = None,
    surface_preferences=None,
) -> SnapshotDataSource:
    """Snapshot where every referenced user exists unless ``users`` is given."""
    availabilities = list(availabilities)
    players = list(players)
    if users is None:
        users = dict.fromkeys([a.user_id for a in availabilities] + [p.user_id for p in players])
    return SnapshotDataSource(
        users=[UserRow(id=u) for u in users],
        players=players,
        availabilities=availabilities,
        friendships=friendships,
        matches=matches,
        surface_preferences=surface_preferences,
    )


@pytest.fixture
def ranking_config() -> RankingConfig:
    return RankingConfig()


@pytest.fixture
def requester_availability() -> Availability:
    return make_availability(REQUESTER_AVAILABILITY, REQUESTER, "10:00", "12:00")


@pytest.fixture
def requester_player() -> Player:
    return make_player(REQUESTER, level=4.0, confidence=0.8, city="Lyon", coords=(45.7640, 4.8357))


@pytest.fixture
def snapshot_document():
    """JSON-shaped snapshot with one requester and two candidates."""
    return {
        "users": [
            {"id": REQUESTER, "name": "Requester"},
            {"id": uid(2), "name": "Friend"},
            {"id": uid(3), "name": "Stranger"},
        ],
        "players": [
            {"id": "p1", "user_id": REQUESTER, "level_value": 4.0, "level_confidence": 0.9, "city": "Lyon"},
            {"id": "p2", "user_id": uid(2), "level_value": 4.2, "level_confidence": 0.9, "city": "Lyon"},
            {"id": "p3", "user_id": uid(3), "level_value": 2.0, "level_confidence": 0.9, "city": "Paris"},
        ],
        "availabilities": [
            {"id": REQUESTER_AVAILABILITY, "user_id": REQUESTER, "date": "2026-05-02",
             "start_time": "10:00", "end_time": "12:00"},
            {"id": uid(102), "user_id": uid(2), "date": "2026-05-02",
             "start_time": "10:00", "end_time": "12:00"},
            {"id": uid(103), "user_id": uid(3), "date": "2026-05-02",
             "start_time": "11:00", "end_time": "13:00"},
            {"id": uid(104), "user_id": uid(3), "date": "2026-05-02",
             "start_time": "11:30", "end_time": "12:30"},
        ],
        "friendships": [[REQUESTER, uid(2)]],
        "matches": [],
    }

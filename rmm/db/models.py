"""Domain model types for matchmaking entities.

These dataclasses are read-only snapshots of records owned by the external
persistence layer. The ranking engine consumes them and never mutates them.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from datetime import date, datetime, time
from typing import Optional, Dict, Any, Tuple


def _parse_datetime(value: Any, day: Optional[date] = None) -> datetime:
    """Parse an ISO datetime, or a bare HH:MM time combined with ``day``."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, time):
        if day is None:
            raise ValueError(f"Time {value} given without a date")
        return datetime.combine(day, value)
    text = str(value).strip()
    if "T" in text or " " in text or len(text) > 8:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    if day is None:
        raise ValueError(f"Time '{text}' given without a date")
    return datetime.combine(day, time.fromisoformat(text))


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _surface_labels(value: Any) -> Tuple[str, ...]:
    """Accept a single label or a list of labels."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if v is not None)
    raise ValueError(f"surfaces must be a label or a list of labels (got {type(value).__name__})")


@dataclass(frozen=True)
class UserRow:
    """Represents an account from the users table."""
    id: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UserRow:
        return cls(id=str(data["id"]), name=data.get("name"))


@dataclass(frozen=True)
class Availability:
    """A window in which a user is willing to play.

    ``min_level``/``max_level`` is the opponent level range the owner declared
    acceptable for this window. ``start_time < end_time`` is guaranteed by the
    owning service.
    """
    id: str
    user_id: str
    date: date
    start_time: datetime
    end_time: datetime
    location_text: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    min_level: Optional[float] = None
    max_level: Optional[float] = None
    status: str = "open"

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "location_text": self.location_text,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "min_level": self.min_level,
            "max_level": self.max_level,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Availability:
        """Build from a snapshot record.

        ``start_time``/``end_time`` may be full ISO datetimes or bare ``HH:MM``
        times that are combined with ``date``.
        """
        day = _parse_date(data["date"]) if data.get("date") is not None else None
        start = _parse_datetime(data["start_time"], day)
        end = _parse_datetime(data["end_time"], day)
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            date=day or start.date(),
            start_time=start,
            end_time=end,
            location_text=data.get("location_text") or "",
            latitude=_opt_float(data.get("latitude")),
            longitude=_opt_float(data.get("longitude")),
            min_level=_opt_float(data.get("min_level")),
            max_level=_opt_float(data.get("max_level")),
            status=(data.get("status") or "open").lower(),
        )


@dataclass(frozen=True)
class Player:
    """Tennis persona of a user. Absent entirely for unrated guests."""
    id: str
    user_id: str
    level_value: Optional[float] = None
    level_confidence: Optional[float] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    surfaces: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["surfaces"] = list(self.surfaces)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            level_value=_opt_float(data.get("level_value")),
            level_confidence=_opt_float(data.get("level_confidence")),
            city=data.get("city"),
            latitude=_opt_float(data.get("latitude")),
            longitude=_opt_float(data.get("longitude")),
            surfaces=_surface_labels(data.get("surfaces")),
        )


__all__ = ["UserRow", "Availability", "Player"]

from .interface import DataSourceInterface
from .snapshot_impl import SnapshotDataSource
from .models import UserRow, Availability, Player

__all__ = [
    "DataSourceInterface",
    "SnapshotDataSource",
    "UserRow",
    "Availability",
    "Player",
]

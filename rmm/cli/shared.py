"""Shared utilities for CLI commands.

Kept free of click so services and tests can build a data source the same
way the commands do.
"""

from __future__ import annotations
from pathlib import Path

from ..db import SnapshotDataSource


def get_data_source(cfg, snapshot_override: str | None = None) -> SnapshotDataSource:
    """Get the snapshot data source from config.

    Args:
        cfg: Configuration dictionary
        snapshot_override: Path taking precedence over ``cfg['snapshot']['path']``

    Returns:
        SnapshotDataSource instance

    Raises:
        FileNotFoundError: If the snapshot file does not exist
        ValueError: If the snapshot is malformed
    """
    path = Path(snapshot_override or cfg["snapshot"]["path"])
    return SnapshotDataSource.from_json_file(path)

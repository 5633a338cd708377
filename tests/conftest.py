"""Pytest fixtures for test configuration.

Global test safety measures:
 - Strip RMM__* variables so a developer's shell cannot change defaults
 - .env loading is already skipped while PYTEST_CURRENT_TEST is set
"""
import json
import os
from pathlib import Path
from typing import Any, Dict

import pytest

from tests.mocks.fixtures import *  # noqa: F401,F403


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith('RMM__'):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv('RMM_ENABLE_DOTENV', raising=False)


@pytest.fixture
def test_config(tmp_path: Path) -> Dict[str, Any]:
    """Provide a minimal test configuration as a dict.

    Tests should use this fixture and pass cfg to CLI/modules directly,
    rather than creating config files or setting environment variables.

    Default paths are isolated to tmp_path for test isolation.
    """
    from rmm.config_types import RankingConfig

    return {
        'log_level': 'DEBUG',
        'ranking': RankingConfig().to_dict(),
        'snapshot': {'path': str(tmp_path / 'snapshot.json')},
        'reports': {'directory': str(tmp_path / 'reports')},
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_document) -> Path:
    path = tmp_path / 'snapshot.json'
    path.write_text(json.dumps(snapshot_document), encoding='utf-8')
    return path

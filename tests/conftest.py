# tests/conftest.py

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from limnos.engine.config import EngineConfig  # noqa: E402
from limnos.observability.error_tracking import error_tracker  # noqa: E402
from limnos.shared.lake_registry import get_lake, load_registry  # noqa: E402
from limnos.shared.schemas import LakeRecord  # noqa: E402


class FixedSequence:
    """Random source replaying a fixed list of draws in [0, 1)."""

    def __init__(self, values):
        self._values = list(values)
        self._index = 0

    def random(self):
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value

    def uniform(self, low, high):
        return low + (high - low) * self.random()


@pytest.fixture
def engine_config():
    return EngineConfig()


@pytest.fixture
def clear_lake():
    return get_lake("pennesseewassee")


@pytest.fixture
def enriched_lake():
    return get_lake("china-lake")


@pytest.fixture
def registry_lakes():
    return load_registry()


@pytest.fixture
def make_lake():
    def _make(**overrides):
        values = {
            "id": "test-pond",
            "name": "Test Pond",
            "transparency_m": 5.0,
            "phosphorus_ppb": 10.0,
        }
        values.update(overrides)
        return LakeRecord(**values)
    return _make


@pytest.fixture
def fixed_sequence():
    return FixedSequence


@pytest.fixture
def reset_error_tracker():
    error_tracker.clear()
    yield error_tracker
    error_tracker.clear()

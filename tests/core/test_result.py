"""
Tests for the Result[P] envelope.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from irisstats.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**kwargs):
    defaults = dict(
        params=FakeParams(value=42.0),
        info={"method": "test"},
        timing={"total_seconds": 0.01},
        backend_name="cpu_test",
    )
    defaults.update(kwargs)
    return Result(**defaults)


class TestResult:

    def test_field_access(self):
        result = _result()
        assert result.params.value == 42.0
        assert result.info["method"] == "test"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_test"

    def test_warnings_default_empty(self):
        assert _result().warnings == ()

    def test_timing_may_be_none(self):
        assert _result(timing=None).timing is None

    def test_frozen(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "other"

    def test_has_warning_substring(self):
        result = _result(warnings=("Zero variance, correlation set to 0: (a, b)",))
        assert result.has_warning("Zero variance")
        assert not result.has_warning("singular")

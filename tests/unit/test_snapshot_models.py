"""Unit Tests for StatisticsSnapshot and its JSON encoding"""

import json

import pytest
from pydantic import ValidationError

from witness_stats.models.statistics import (
    UNKNOWN_STORAGE_SIZE,
    ResponseCodeCount,
    StatisticsSnapshot,
)
from witness_stats.utils import snapshot_to_json


def make_snapshot(**overrides) -> StatisticsSnapshot:
    values = {
        "storage_bytes": 4096,
        "result_count": 3,
        "header_count": 5,
        "network_log_count": 0,
        "console_log_count": 2,
        "response_code_distribution": (
            ResponseCodeCount(code=200, count=2),
            ResponseCodeCount(code=404, count=1),
        ),
    }
    values.update(overrides)
    return StatisticsSnapshot(**values)


class TestSnapshotValidation:
    """Test snapshot invariants."""

    def test_unknown_storage_sentinel_allowed(self):
        snapshot = make_snapshot(storage_bytes=UNKNOWN_STORAGE_SIZE)
        assert snapshot.storage_known is False
        assert snapshot.storage_human is None

    def test_other_negative_storage_rejected(self):
        with pytest.raises(ValidationError):
            make_snapshot(storage_bytes=-2)

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            make_snapshot(header_count=-1)

    def test_duplicate_codes_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate response code"):
            make_snapshot(
                response_code_distribution=(
                    ResponseCodeCount(code=200, count=1),
                    ResponseCodeCount(code=200, count=1),
                )
            )

    def test_snapshot_is_immutable(self):
        snapshot = make_snapshot()
        with pytest.raises(ValidationError):
            snapshot.result_count = 10  # type: ignore[misc]

    def test_populate_by_alias(self):
        snapshot = StatisticsSnapshot(
            dbsize=-1,
            results=1,
            headers=0,
            networklogs=0,
            consolelogs=0,
            response_code_stats=[{"code": 500, "count": 1}],
        )
        assert snapshot.result_count == 1
        assert snapshot.response_code_distribution == (
            ResponseCodeCount(code=500, count=1),
        )


class TestSnapshotProperties:
    def test_storage_human(self):
        assert make_snapshot(storage_bytes=2048).storage_human == "2.00 KB"
        assert make_snapshot(storage_bytes=512).storage_human == "512.00 B"


class TestSnapshotJSON:
    """Test wire encoding."""

    def test_wire_field_names(self):
        data = json.loads(snapshot_to_json(make_snapshot()))
        assert data == {
            "dbsize": 4096,
            "results": 3,
            "headers": 5,
            "networklogs": 0,
            "consolelogs": 2,
            "response_code_stats": [
                {"code": 200, "count": 2},
                {"code": 404, "count": 1},
            ],
        }

    def test_indented_output(self):
        assert "\n" in snapshot_to_json(make_snapshot(), indent=True)

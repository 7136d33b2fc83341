"""
Tests for the id policy (validity window and display defaults)
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from tuid.kernel.policy import (
    DEFAULT_MAX_TIMESTAMP,
    DEFAULT_MIN_TIMESTAMP,
    IdPolicy,
    default_policy,
    first_id_at,
    load_policy,
)
from tuid.kernel.time import Instant

from tests.helpers import EXPECTED_MAX_ID, EXPECTED_MIN_ID


class TestDefaultPolicy:
    """The 2000-2100 window"""

    def test_defaults(self, policy: IdPolicy) -> None:
        assert policy.min_timestamp == DEFAULT_MIN_TIMESTAMP
        assert policy.max_timestamp == DEFAULT_MAX_TIMESTAMP
        assert policy.min_timestamp.isoformat() == "2000-01-01T00:00:00Z"
        assert policy.max_timestamp.isoformat() == "2100-01-01T00:00:00Z"
        assert policy.display_time_zone == "US/Pacific"

    def test_boundary_ids(self, policy: IdPolicy) -> None:
        assert policy.min_id == EXPECTED_MIN_ID
        assert policy.max_id == EXPECTED_MAX_ID
        assert policy.id_length == 16

    def test_zone(self, policy: IdPolicy) -> None:
        assert policy.zone() == ZoneInfo("US/Pacific")

    def test_module_default(self) -> None:
        assert default_policy == IdPolicy()

    def test_frozen(self, policy: IdPolicy) -> None:
        with pytest.raises(ValidationError):
            policy.display_time_zone = "UTC"  # type: ignore[misc]

    def test_first_id_at(self) -> None:
        assert first_id_at(Instant(epoch_second=0)) == "0"
        assert first_id_at(DEFAULT_MIN_TIMESTAMP) == EXPECTED_MIN_ID


class TestPolicyValidation:
    """Windows that would break sorting are rejected"""

    def test_accepts_datetimes_and_text(self) -> None:
        policy = IdPolicy(
            min_timestamp=datetime(2010, 1, 1, tzinfo=timezone.utc),
            max_timestamp="2030-01-01T00:00:00Z",
        )
        assert policy.id_length == 16

    def test_min_must_precede_max(self) -> None:
        with pytest.raises(ValidationError):
            IdPolicy(min_timestamp="2050-01-01T00:00:00Z", max_timestamp="2040-01-01T00:00:00Z")

    def test_min_not_before_epoch(self) -> None:
        with pytest.raises(ValidationError):
            IdPolicy(min_timestamp="1969-12-31T23:59:59Z")

    def test_boundary_ids_must_share_length(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            IdPolicy(min_timestamp="1970-01-01T00:00:01Z")
        assert "differ in length" in str(exc_info.value)

    def test_unknown_time_zone(self) -> None:
        with pytest.raises(ValidationError):
            IdPolicy(display_time_zone="Mars/Olympus_Mons")

    def test_bad_timestamp_text(self) -> None:
        with pytest.raises(ValidationError):
            IdPolicy(min_timestamp="not a date")


class TestLoadPolicy:
    """Environment overrides"""

    def test_no_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("TUID_MIN_TIMESTAMP", "TUID_MAX_TIMESTAMP", "TUID_TIME_ZONE"):
            monkeypatch.delenv(name, raising=False)
        assert load_policy() == IdPolicy()

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TUID_MIN_TIMESTAMP", "2010-01-01T00:00:00Z")
        monkeypatch.setenv("TUID_MAX_TIMESTAMP", "2030-01-01")
        monkeypatch.setenv("TUID_TIME_ZONE", "Europe/Paris")

        policy = load_policy()

        assert policy.min_timestamp == Instant.parse("2010-01-01T00:00:00Z")
        assert policy.max_timestamp == Instant.parse("2030-01-01T00:00:00Z")
        assert policy.display_time_zone == "Europe/Paris"

    def test_invalid_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TUID_TIME_ZONE", "Nowhere/Special")
        with pytest.raises(ValidationError):
            load_policy()

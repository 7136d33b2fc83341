"""
Id Policy - Parameters that define which TUIDs are "valid"

The policy fixes the window of creation times considered plausible, and
the display defaults used by formatting helpers. The boundary identifiers
MIN_ID and MAX_ID are derived from it.

Lexicographic order of base-62 text only equals numeric order when the
strings have equal length, so a policy whose boundary ids encode to
different lengths is rejected outright.
"""

import os
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator

from tuid.codec import encode
from tuid.kernel.entropy import ENTROPY_BITS
from tuid.kernel.time import Instant

DEFAULT_MIN_TIMESTAMP = Instant.from_datetime(datetime(2000, 1, 1, tzinfo=timezone.utc))
DEFAULT_MAX_TIMESTAMP = Instant.from_datetime(datetime(2100, 1, 1, tzinfo=timezone.utc))


def first_id_at(instant: Instant) -> str:
    """Encode the zero-entropy identifier for an instant"""
    return encode(instant.epoch_nanos << ENTROPY_BITS)


class IdPolicy(BaseModel):
    """
    Validity window and display defaults for TUIDs

    The default window, 2000-01-01 to 2100-01-01 UTC, yields identifiers
    that are exactly 16 characters long.
    """

    min_timestamp: Instant = Field(
        default=DEFAULT_MIN_TIMESTAMP,
        description="Earliest creation time of a valid identifier (inclusive)",
    )

    max_timestamp: Instant = Field(
        default=DEFAULT_MAX_TIMESTAMP,
        description="Latest creation time of a valid identifier (inclusive, zero entropy)",
    )

    display_time_zone: str = Field(
        default="US/Pacific",
        description="IANA zone used by formatting helpers when none is given",
    )

    display_format: str = Field(
        default="%a %m-%d-%Y %I:%M:%S %Z",
        description="strftime pattern used by formatting helpers",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "description": "Validity window and display defaults for TUIDs"
        },
    }

    @field_validator("min_timestamp", "max_timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        if isinstance(v, (datetime, str)):
            return Instant.coerce(v)
        return v

    @field_validator("display_time_zone")
    @classmethod
    def zone_must_exist(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @model_validator(mode="after")
    def window_must_sort(self) -> "IdPolicy":
        if self.min_timestamp.epoch_second < 0:
            raise ValueError("min_timestamp must not precede the Unix epoch")
        if self.min_timestamp >= self.max_timestamp:
            raise ValueError("min_timestamp must be earlier than max_timestamp")
        if len(self.min_id) != len(self.max_id):
            raise ValueError(
                f"Boundary ids differ in length ({self.min_id}, {self.max_id}) - "
                "lexicographic order would not match chronological order"
            )
        return self

    @property
    def min_id(self) -> str:
        return first_id_at(self.min_timestamp)

    @property
    def max_id(self) -> str:
        return first_id_at(self.max_timestamp)

    @property
    def id_length(self) -> int:
        """Length shared by every identifier inside the window"""
        return len(self.min_id)

    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.display_time_zone)


def load_policy() -> IdPolicy:
    """
    Build a policy from environment overrides

    Reads TUID_MIN_TIMESTAMP, TUID_MAX_TIMESTAMP (ISO-8601) and
    TUID_TIME_ZONE. Unset variables keep the defaults.
    """
    overrides: dict[str, Any] = {}
    for env_var, field in (
        ("TUID_MIN_TIMESTAMP", "min_timestamp"),
        ("TUID_MAX_TIMESTAMP", "max_timestamp"),
        ("TUID_TIME_ZONE", "display_time_zone"),
    ):
        value = os.getenv(env_var)
        if value:
            overrides[field] = value
    return IdPolicy(**overrides)


# Default global policy instance
default_policy = IdPolicy()

"""
Nanosecond time primitives and the time provider abstraction

Python's datetime stops at microseconds, but TUIDs embed nanoseconds since
the Unix epoch. Instant and Duration carry the full resolution; datetime
views are offered for display and are truncated to microseconds.

The time provider is injectable so tests can freeze the clock.

Fun fact: A nanosecond is to one second what one second is to about
31.7 years. Light travels roughly 30 centimetres in that time!
"""

import re
import time
from datetime import datetime, timedelta, timezone, tzinfo
from functools import total_ordering
from typing import Any, Protocol

from pydantic import BaseModel, Field

from tuid.kernel.errors import InvalidTimestamp

NANOS_PER_SECOND = 1_000_000_000
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Only a fraction directly after the seconds field
_FRACTION = re.compile(r"(?<=\d\d:\d\d:\d\d)[.,](\d+)")


@total_ordering
class Duration(BaseModel):
    """
    Signed, nanosecond-resolution amount of time

    Produced by subtracting one Instant from another. Negative when the
    second operand is later than the first.
    """

    nanos: int = Field(..., description="Signed length in nanoseconds")

    model_config = {"frozen": True}

    @classmethod
    def of(cls, seconds: int = 0, nanos: int = 0) -> "Duration":
        """Build a duration from whole seconds plus extra nanoseconds"""
        return cls(nanos=seconds * NANOS_PER_SECOND + nanos)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        seconds = delta.days * 86_400 + delta.seconds
        return cls.of(seconds=seconds, nanos=delta.microseconds * 1_000)

    def total_seconds(self) -> float:
        return self.nanos / NANOS_PER_SECOND

    def to_timedelta(self) -> timedelta:
        """Convert to timedelta (truncated to microseconds)"""
        seconds, nanos = divmod(self.nanos, NANOS_PER_SECOND)
        return timedelta(seconds=seconds, microseconds=nanos // 1_000)

    def is_negative(self) -> bool:
        return self.nanos < 0

    def parts(self) -> tuple[int, int, int, int, int]:
        """
        Split the absolute length into calendar-free parts

        Returns:
            (days, hours, minutes, seconds, millis) of abs(self)
        """
        seconds, nanos = divmod(abs(self.nanos), NANOS_PER_SECOND)
        minutes, seconds = divmod(seconds, 60)
        hours, minutes = divmod(minutes, 60)
        days, hours = divmod(hours, 24)
        return days, hours, minutes, seconds, nanos // 1_000_000

    def __neg__(self) -> "Duration":
        return Duration(nanos=-self.nanos)

    def __abs__(self) -> "Duration":
        return Duration(nanos=abs(self.nanos))

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(nanos=self.nanos + other.nanos)

    def __lt__(self, other: "Duration") -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanos < other.nanos


@total_ordering
class Instant(BaseModel):
    """
    A point on the UTC timeline with nanosecond resolution

    Stored as whole seconds since the Unix epoch plus a nanosecond
    adjustment that is always in [0, 1e9). Seconds are floored, so instants
    before 1970 still carry a non-negative nanosecond field.
    """

    epoch_second: int = Field(..., description="Whole seconds since 1970-01-01T00:00:00Z")

    nano: int = Field(
        default=0,
        ge=0,
        lt=NANOS_PER_SECOND,
        description="Nanosecond-of-second adjustment",
    )

    model_config = {"frozen": True}

    @property
    def epoch_nanos(self) -> int:
        """Nanoseconds since the Unix epoch"""
        return self.epoch_second * NANOS_PER_SECOND + self.nano

    @classmethod
    def from_epoch_nanos(cls, nanos: int) -> "Instant":
        seconds, nano = divmod(nanos, NANOS_PER_SECOND)
        return cls(epoch_second=seconds, nano=nano)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """
        Convert a datetime to an Instant

        Naive datetimes are interpreted as UTC.
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        delta = dt - EPOCH
        seconds = delta.days * 86_400 + delta.seconds
        return cls(epoch_second=seconds, nano=delta.microseconds * 1_000)

    @classmethod
    def parse(cls, text: str) -> "Instant":
        """
        Parse an ISO-8601 timestamp with up to nine fractional digits

        Args:
            text: e.g. "2021-03-08T05:54:09.208207Z" or "2000-01-01"

        Raises:
            InvalidTimestamp: if the text is not a recognisable timestamp
        """
        fraction = _FRACTION.search(text)
        nanos = 0
        base = text
        if fraction:
            digits = fraction.group(1)
            if len(digits) > 9:
                raise InvalidTimestamp(text, "more than nine fractional digits")
            nanos = int(digits.ljust(9, "0"))
            base = text[: fraction.start()] + text[fraction.end() :]
        if "." in base or "," in base:
            raise InvalidTimestamp(text, "fraction must follow the seconds field")
        try:
            dt = datetime.fromisoformat(base.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidTimestamp(text, str(e)) from e
        return cls.from_epoch_nanos(cls.from_datetime(dt).epoch_nanos + nanos)

    @classmethod
    def coerce(cls, value: Any) -> "Instant":
        """
        Accept an Instant, a datetime or an ISO-8601 string

        Raises:
            InvalidTimestamp: for anything else
        """
        if isinstance(value, Instant):
            return value
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise InvalidTimestamp(value, "expected Instant, datetime or ISO-8601 string")

    def to_datetime(self, tz: tzinfo = timezone.utc) -> datetime:
        """
        Convert to an aware datetime in the given zone (truncated to microseconds)

        Raises:
            InvalidTimestamp: if the instant falls outside years 1-9999
        """
        try:
            dt = EPOCH + timedelta(seconds=self.epoch_second, microseconds=self.nano // 1_000)
            return dt.astimezone(tz)
        except OverflowError as e:
            raise InvalidTimestamp(self, "outside the datetime range") from e

    def isoformat(self) -> str:
        """
        UTC ISO-8601 text, with the fraction trimmed to 0, 3, 6 or 9 digits

        Example: 2021-03-08T05:54:09.208207Z

        Raises:
            InvalidTimestamp: if the instant falls outside years 1-9999
        """
        text = self.to_datetime().strftime("%Y-%m-%dT%H:%M:%S")
        if self.nano:
            fraction = f"{self.nano:09d}"
            while fraction.endswith("000"):
                fraction = fraction[:-3]
            text = f"{text}.{fraction}"
        return f"{text}Z"

    def __str__(self) -> str:
        return self.isoformat()

    def __lt__(self, other: "Instant") -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return (self.epoch_second, self.nano) < (other.epoch_second, other.nano)

    def __sub__(self, other: "Instant") -> Duration:
        if not isinstance(other, Instant):
            return NotImplemented
        return Duration(nanos=self.epoch_nanos - other.epoch_nanos)

    def __add__(self, other: Duration) -> "Instant":
        if not isinstance(other, Duration):
            return NotImplemented
        return Instant.from_epoch_nanos(self.epoch_nanos + other.nanos)


class TimeProvider(Protocol):
    """Protocol for time providers - allows deterministic testing"""

    def now(self) -> Instant:
        """Return the current instant"""
        ...


class RealTimeProvider:
    """Production time provider using the system clock"""

    def now(self) -> Instant:
        """Return current time from the system clock at nanosecond resolution"""
        return Instant.from_epoch_nanos(time.time_ns())


class TestTimeProvider:
    """
    Controllable time provider for deterministic tests

    Allows tests to freeze time, advance time, and ensure
    reproducible embedded timestamps.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, initial_time: Instant | datetime | None = None) -> None:
        """
        Initialize with optional fixed time

        Args:
            initial_time: Starting time (defaults to Unix epoch)
        """
        self._current_time = (
            Instant.coerce(initial_time) if initial_time is not None else Instant(epoch_second=0)
        )

    def now(self) -> Instant:
        """Return current test time"""
        return self._current_time

    def set_time(self, value: Instant | datetime) -> None:
        """Set current time to specific value"""
        self._current_time = Instant.coerce(value)

    def advance_seconds(self, seconds: int) -> None:
        """Advance time by specified seconds"""
        self._current_time = self._current_time + Duration.of(seconds=seconds)

    def advance_nanos(self, nanos: int) -> None:
        """Advance time by specified nanoseconds"""
        self._current_time = self._current_time + Duration(nanos=nanos)


# Global default time provider
default_time_provider: TimeProvider = RealTimeProvider()

"""
TUID - chronologically sortable unique identifier

A TUID is a non-negative integer, expressed as case-sensitive base-62 text.
The left bits hold nanoseconds since the Unix epoch, the right 32 bits hold
entropy from a secure random source:

    value = (epoch_nanos << 32) | entropy

IDs created between 2000-01-01 and 2100-01-01 UTC are 16 characters long,
so plain string sorting puts them in creation order.
Example: 91Mq07yx9IxHCi5Y was created at 2021-03-08T05:54:09.208207Z

Fun fact: The 32 entropy bits sit below the timestamp, so sorting by ID
can never reorder two IDs from different nanoseconds - randomness only
breaks ties!
"""

from datetime import date, datetime, timezone, tzinfo
from functools import total_ordering
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field, model_validator

from tuid.codec import decode, encode, is_base62
from tuid.kernel.entropy import (
    ENTROPY_BITS,
    ENTROPY_MASK,
    EntropySource,
    check_entropy,
    default_entropy_source,
)
from tuid.kernel.errors import DecodingError, InvalidTimestamp
from tuid.kernel.logging import get_logger
from tuid.kernel.policy import IdPolicy, default_policy
from tuid.kernel.time import Duration, Instant, TimeProvider, default_time_provider

logger = get_logger(__name__)

MIN_ID = default_policy.min_id  # 5Hr02eJHAfTt1tTM 2000-01-01T00:00:00Z
MAX_ID = default_policy.max_id  # MuklDY5bgW1s9Ev2 2100-01-01T00:00:00Z
ID_LENGTH = default_policy.id_length


def pack(instant: Instant, entropy: int) -> int:
    """Combine an instant and 32 bits of entropy into a TUID value"""
    return (instant.epoch_nanos << ENTROPY_BITS) | check_entropy(entropy)


def unpack_created_at(value: int) -> Instant:
    """Recover the embedded creation instant from a TUID value"""
    return Instant.from_epoch_nanos(value >> ENTROPY_BITS)


def _zone(tz: tzinfo | str | None) -> tzinfo:
    if tz is None:
        return timezone.utc
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


@total_ordering
class TUID(BaseModel):
    """
    Immutable time-based unique identifier

    The three fields are views of one quantity and are checked for
    agreement on construction. Prefer the classmethod constructors
    (now, with_timestamp, from_int, from_string, first) over calling
    TUID(...) directly.

    Equality, hashing and ordering use the text id only.
    """

    id: str = Field(..., description="Base-62 text form")

    value: int = Field(..., ge=0, description="(epoch_nanos << 32) | entropy")

    created_at: Instant = Field(..., description="Embedded creation instant")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def views_must_agree(self) -> "TUID":
        if decode(self.id) != self.value:
            raise ValueError(f"id {self.id!r} does not encode value {self.value}")
        if unpack_created_at(self.value) != self.created_at:
            raise ValueError(f"created_at {self.created_at!r} is not embedded in value {self.value}")
        return self

    # Construction

    @classmethod
    def now(
        cls,
        time_provider: TimeProvider | None = None,
        entropy_source: EntropySource | None = None,
    ) -> "TUID":
        """
        Create a new TUID with the current time as the createdAt timestamp

        Args:
            time_provider: Clock to read (defaults to the system clock)
            entropy_source: Source of the 32 entropy bits (defaults to secrets)
        """
        clock = time_provider or default_time_provider
        return cls.with_timestamp(clock.now(), entropy_source)

    @classmethod
    def with_timestamp(
        cls,
        timestamp: Instant | datetime | str,
        entropy_source: EntropySource | None = None,
    ) -> "TUID":
        """Create a new TUID with the given createdAt timestamp and fresh entropy"""
        source = entropy_source or default_entropy_source
        return cls.from_parts(timestamp, source.next_entropy())

    @classmethod
    def from_parts(cls, timestamp: Instant | datetime | str, entropy: int) -> "TUID":
        """Create a TUID from an explicit timestamp and entropy value"""
        return cls.from_int(pack(Instant.coerce(timestamp), entropy))

    @classmethod
    def from_int(cls, value: int) -> "TUID":
        """
        Create a TUID from its integer value

        Raises:
            EncodingError: if value is negative or not an integer
        """
        return cls(id=encode(value), value=value, created_at=unpack_created_at(value))

    @classmethod
    def from_string(cls, id: str) -> "TUID":
        """
        Parse a TUID from base-62 text

        The text is kept as given; it is not re-encoded.

        Raises:
            DecodingError: if id is not a string or contains characters
                outside the base-62 alphabet
        """
        if not isinstance(id, str):
            raise DecodingError(id)
        value = decode(id)
        return cls(id=id, value=value, created_at=unpack_created_at(value))

    @classmethod
    def first(cls, timestamp: Instant | datetime | str) -> "TUID":
        """
        Create the first (in chronological sort order) TUID at a timestamp

        The entropy portion is zero, so no other TUID for the same instant
        sorts before it. Useful as an inclusive lower bound when paginating
        chronologically.
        """
        return cls.from_parts(timestamp, 0)

    @staticmethod
    def is_valid(id: object, policy: IdPolicy | None = None) -> bool:
        """See is_valid_id()"""
        return is_valid_id(id, policy)

    # Diagnostic views

    def big_integer(self) -> int:
        return self.value

    def bit_length(self) -> int:
        """Number of bits used (92-94 for 21st-century timestamps)"""
        return self.value.bit_length()

    def bits(self) -> str:
        """Base-2 representation of the value"""
        return format(self.value, "b")

    @property
    def entropy(self) -> int:
        """The right-most 32 bits"""
        return self.value & ENTROPY_MASK

    # Embedded timestamp

    def timestamp(self, tz: tzinfo | str | None = None) -> datetime:
        """
        Embedded timestamp as an aware datetime

        Args:
            tz: Zone (tzinfo or IANA name); UTC when omitted

        Note: datetime stops at microseconds; use created_at for the full
        nanosecond value.
        """
        return self.created_at.to_datetime(_zone(tz))

    def local_date(self, tz: tzinfo | str | None = None) -> date:
        """Calendar date of the embedded timestamp in the given zone (UTC by default)"""
        return self.timestamp(tz).date()

    def format_timestamp(
        self,
        tz: tzinfo | str | None = None,
        fmt: str | None = None,
        policy: IdPolicy | None = None,
    ) -> str:
        """Embedded timestamp formatted for display, using policy defaults for zone and format"""
        policy = policy or default_policy
        zone = _zone(tz) if tz is not None else policy.zone()
        return self.timestamp(zone).strftime(fmt or policy.display_format)

    def duration(self, stop: "TUID") -> Duration:
        """Time from this TUID to stop (negative if stop was created earlier)"""
        return stop.created_at - self.created_at

    def duration_since(self, start: "TUID") -> Duration:
        """Time from start to this TUID"""
        return self.created_at - start.created_at

    def duration_string(self, stop: "TUID") -> str:
        """
        Millisecond-resolution duration to stop, e.g. "2 d 03:04:05.006"

        The day prefix only appears for durations of a day or more.
        """
        elapsed = self.duration(stop)
        days, hours, minutes, seconds, millis = elapsed.parts()
        sign = "-" if elapsed.is_negative() else ""
        day_string = f"{days} d " if days > 0 else ""
        return f"{sign}{day_string}{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"

    # Value semantics

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        try:
            created = str(self.created_at)
        except InvalidTimestamp:
            created = f"{self.created_at.epoch_nanos}ns"
        return f"TUID({self.id!r}, created_at={created})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TUID):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: "TUID") -> bool:
        if not isinstance(other, TUID):
            return NotImplemented
        return self.id < other.id


def is_valid_id(id: object, policy: IdPolicy | None = None) -> bool:
    """
    Check that id looks like a TUID created inside the policy window

    Checks format and plausible creation time only - not whether the ID
    is in use anywhere. Never raises; anything unexpected counts as invalid.

    Args:
        id: Candidate text
        policy: Validity window (defaults to 2000-01-01..2100-01-01 UTC)
    """
    try:
        if policy is None:
            min_id, max_id = MIN_ID, MAX_ID
        else:
            min_id, max_id = policy.min_id, policy.max_id
        return (
            isinstance(id, str)
            and bool(id.strip())
            and is_base62(id)
            and len(min_id) <= len(id) <= len(max_id)
            and min_id <= id <= max_id
        )
    except Exception:
        logger.debug("TUID validation raised", candidate=repr(id), exc_info=True)
        return False


def create_id(
    time_provider: TimeProvider | None = None,
    entropy_source: EntropySource | None = None,
) -> str:
    """Supply a new TUID id with the current time as the createdAt timestamp"""
    return TUID.now(time_provider, entropy_source).id


def created_at(id: str) -> Instant:
    """
    Creation instant embedded in a TUID id

    Raises:
        DecodingError: if id is not valid base-62 text
    """
    return TUID.from_string(id).created_at


def duration(start_id: str, stop_id: str) -> Duration:
    """Nanosecond-resolution time between two TUID ids"""
    return created_at(stop_id) - created_at(start_id)


def first_id(timestamp: Instant | datetime | str) -> str:
    """Id of the first TUID at timestamp (zero entropy)"""
    return TUID.first(timestamp).id

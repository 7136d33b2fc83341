"""
TUID - chronologically sortable unique identifiers

Compact base-62 IDs with an embedded nanosecond creation timestamp and 32
bits of secure entropy. Sorting the IDs as plain strings sorts them by
creation time.

Fun fact: The Unix epoch began at midnight UTC on 1 January 1970 - a date
picked largely because it was a convenient round number at the time!
"""

from tuid.codec import ALPHABET, decode, encode
from tuid.kernel.errors import DecodingError, EncodingError, TUIDError
from tuid.kernel.time import Duration, Instant
from tuid.model import (
    MAX_ID,
    MIN_ID,
    TUID,
    create_id,
    created_at,
    duration,
    first_id,
    is_valid_id,
)

__version__ = "0.1.0"
__all__ = [
    "TUID",
    "MIN_ID",
    "MAX_ID",
    "create_id",
    "created_at",
    "duration",
    "first_id",
    "is_valid_id",
    "encode",
    "decode",
    "ALPHABET",
    "Instant",
    "Duration",
    "TUIDError",
    "EncodingError",
    "DecodingError",
    "__version__",
]

"""
Kernel - collaborators and ambient infrastructure for TUID

Errors, nanosecond time primitives, entropy sources, the validity policy
and structured logging. The identifier model and the radix codec build on
these pieces.
"""

from tuid.kernel.entropy import (
    EntropySource,
    SecureEntropySource,
    SequenceEntropySource,
)
from tuid.kernel.errors import (
    DecodingError,
    EncodingError,
    InvalidEntropy,
    InvalidTimestamp,
    TUIDError,
)
from tuid.kernel.time import (
    Duration,
    Instant,
    RealTimeProvider,
    TestTimeProvider,
    TimeProvider,
)

__all__ = [
    # Entropy
    "EntropySource",
    "SecureEntropySource",
    "SequenceEntropySource",
    # Time
    "Instant",
    "Duration",
    "TimeProvider",
    "RealTimeProvider",
    "TestTimeProvider",
    # Errors
    "TUIDError",
    "EncodingError",
    "DecodingError",
    "InvalidTimestamp",
    "InvalidEntropy",
]

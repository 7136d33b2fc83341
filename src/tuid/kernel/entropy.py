"""
Entropy sources for the low 32 bits of a TUID

Entropy disambiguates identifiers created at the same nanosecond. The
source is injectable: production uses the operating system's CSPRNG,
tests substitute a fixed sequence.

Fun fact: With 2^32 entropy values per nanosecond, you would need to mint
about 77,000 IDs in the very same nanosecond before a collision became
likely (the birthday bound)!
"""

import secrets
from collections.abc import Iterable
from itertools import cycle
from typing import Protocol

from tuid.kernel.errors import InvalidEntropy

ENTROPY_BITS = 32
ENTROPY_MASK = (1 << ENTROPY_BITS) - 1


def check_entropy(value: int) -> int:
    """
    Ensure an entropy value fits in the low 32 bits

    Raises:
        InvalidEntropy: for non-integers, negatives and values >= 2**32
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= ENTROPY_MASK:
        raise InvalidEntropy(value)
    return value


class EntropySource(Protocol):
    """Protocol for entropy generation strategies"""

    def next_entropy(self) -> int:
        """Return a non-negative integer below 2**32"""
        ...


class SecureEntropySource:
    """Default entropy source backed by the secrets module"""

    def next_entropy(self) -> int:
        return secrets.randbits(ENTROPY_BITS)


class SequenceEntropySource:
    """
    Deterministic entropy source for tests

    Yields the given values in order, starting over when exhausted.
    """

    def __init__(self, values: Iterable[int] = (0,)) -> None:
        checked = [check_entropy(v) for v in values]
        if not checked:
            raise ValueError("SequenceEntropySource needs at least one value")
        self._values = cycle(checked)

    def next_entropy(self) -> int:
        return next(self._values)


# Global default entropy source
default_entropy_source: EntropySource = SecureEntropySource()

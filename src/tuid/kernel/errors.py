"""
Custom exceptions for TUID

A small, well-defined error hierarchy: callers can catch TUIDError for
anything raised by this package, or ValueError if they only care that
the input was bad.

Fun fact: The word "bug" predates computers - Thomas Edison used it in 1878
to describe little faults and difficulties in his inventions.
"""


class TUIDError(Exception):
    """Base exception for all TUID errors"""

    pass


class EncodingError(TUIDError, ValueError):
    """
    Raised when a value cannot be encoded as base-62

    Only non-negative integers have a base-62 representation. This is
    always a programmer error - the public construction paths never
    produce negative values.
    """

    def __init__(self, value: object, message: str = "") -> None:
        self.value = value
        super().__init__(
            message
            or f"Base62 TUID encoding error: non-negative integer value required, got {value!r}"
        )


class DecodingError(TUIDError, ValueError):
    """
    Raised when text contains characters outside the base-62 alphabet

    Signals malformed, corrupt or foreign input. Never silently coerced.
    """

    def __init__(self, text: str, message: str = "") -> None:
        self.text = text
        super().__init__(
            message or f"Base62 TUID decoding error: invalid character(s) in {text!r}"
        )


class InvalidTimestamp(TUIDError, ValueError):
    """Raised when a timestamp cannot be interpreted as an Instant"""

    def __init__(self, timestamp: object, reason: str = "") -> None:
        self.timestamp = timestamp
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid timestamp {timestamp!r}{detail}")


class InvalidEntropy(TUIDError, ValueError):
    """Raised when an entropy value does not fit in the low 32 bits"""

    def __init__(self, entropy: object) -> None:
        self.entropy = entropy
        super().__init__(
            f"Entropy must be an integer in [0, 2**32), got {entropy!r}"
        )

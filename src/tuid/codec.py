"""
Base-62 radix codec

Converts between non-negative integers and case-sensitive base-62 text
over the alphabet 0-9, A-Z, a-z (indices 0-61). Because the alphabet is in
ASCII order, equal-length encodings sort the same way as the integers
they represent.

Fun fact: 62 symbols is the largest alphabet you can build from ASCII
letters and digits alone - no punctuation needed, so the IDs survive URLs,
filenames and double-click selection intact.
"""

import re

from tuid.kernel.errors import DecodingError, EncodingError

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)
ID_PATTERN = re.compile(f"[{ALPHABET}]*")

_INDEX = {symbol: index for index, symbol in enumerate(ALPHABET)}


def is_base62(text: str) -> bool:
    """True if every character of text is in the alphabet (empty text included)"""
    return ID_PATTERN.fullmatch(text) is not None


def encode(value: int) -> str:
    """
    Encode a non-negative integer as base-62 text

    Produces the shortest representation: no leading zero symbols, and
    zero itself encodes as "0".

    Raises:
        EncodingError: if value is None, not an int, or negative
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise EncodingError(value)
    if value == 0:
        return ALPHABET[0]
    symbols = []
    while value > 0:
        value, remainder = divmod(value, BASE)
        symbols.append(ALPHABET[remainder])
    return "".join(reversed(symbols))


def decode(text: str | None) -> int:
    """
    Decode base-62 text into an integer

    Empty or missing text decodes to 0. Leading zero symbols are accepted
    and ignored.

    Raises:
        DecodingError: if text contains a character outside the alphabet
    """
    if not text:
        return 0
    if not isinstance(text, str) or not is_base62(text):
        raise DecodingError(text)
    value = 0
    for symbol in text:
        value = value * BASE + _INDEX[symbol]
    return value

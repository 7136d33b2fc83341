"""
Tests for the base-62 radix codec

Covers the alphabet order, canonical encodings, round trips for values of
TUID width and beyond, and rejection of bad input in both directions.
"""

import pytest

from tuid.codec import ALPHABET, BASE, decode, encode, is_base62
from tuid.kernel.errors import DecodingError, EncodingError, TUIDError

from tests.helpers import EXAMPLE_ENTROPY, EXAMPLE_EPOCH_NANOS, EXAMPLE_ID


class TestAlphabet:
    """The 62-symbol alphabet"""

    def test_alphabet_is_digits_upper_lower(self) -> None:
        assert len(ALPHABET) == BASE == 62
        assert ALPHABET[:10] == "0123456789"
        assert ALPHABET[10:36] == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        assert ALPHABET[36:] == "abcdefghijklmnopqrstuvwxyz"

    def test_alphabet_is_in_code_point_order(self) -> None:
        """Equal-length encodings must sort like their integers"""
        assert list(ALPHABET) == sorted(ALPHABET)
        assert len(set(ALPHABET)) == 62

    @pytest.mark.parametrize("text", ["", "0", "zZ09", EXAMPLE_ID])
    def test_is_base62_accepts_alphabet_text(self, text: str) -> None:
        assert is_base62(text)

    @pytest.mark.parametrize("text", ["-", "_", " ", "abc def", "é", "abc\n"])
    def test_is_base62_rejects_other_characters(self, text: str) -> None:
        assert not is_base62(text)


class TestEncode:
    """Integer -> text"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (9, "9"),
            (10, "A"),
            (35, "Z"),
            (36, "a"),
            (61, "z"),
            (62, "10"),
            (3843, "zz"),
            (3844, "100"),
        ],
    )
    def test_known_values(self, value: int, expected: str) -> None:
        assert encode(value) == expected

    def test_zero_is_single_symbol_not_empty(self) -> None:
        assert encode(0) == "0"

    def test_no_leading_zero_symbols(self) -> None:
        for value in (1, 62, 62**5, 2**64, 2**96 - 1):
            assert not encode(value).startswith("0")

    def test_example_tuid_value(self) -> None:
        value = (EXAMPLE_EPOCH_NANOS << 32) | EXAMPLE_ENTROPY
        assert encode(value) == EXAMPLE_ID

    def test_negative_value_rejected(self) -> None:
        with pytest.raises(EncodingError) as exc_info:
            encode(-1)
        assert exc_info.value.value == -1
        assert "encoding error" in str(exc_info.value)

    @pytest.mark.parametrize("value", [None, 1.5, "42", True])
    def test_non_integer_rejected(self, value: object) -> None:
        with pytest.raises(EncodingError):
            encode(value)  # type: ignore[arg-type]

    def test_encoding_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            encode(-62)
        assert issubclass(EncodingError, TUIDError)


class TestDecode:
    """Text -> integer"""

    @pytest.mark.parametrize(
        "text,expected",
        [("0", 0), ("z", 61), ("10", 62), ("zz", 3843), ("100", 3844)],
    )
    def test_known_values(self, text: str, expected: int) -> None:
        assert decode(text) == expected

    def test_empty_and_missing_text_decode_to_zero(self) -> None:
        assert decode("") == 0
        assert decode(None) == 0

    def test_leading_zero_symbols_ignored(self) -> None:
        assert decode("000z") == decode("z") == 61

    def test_case_sensitive(self) -> None:
        assert decode("a") != decode("A")
        assert decode("a") == 36
        assert decode("A") == 10

    @pytest.mark.parametrize("text", ["abc-def", "abc_def", "abc def", "+1", "ü"])
    def test_invalid_characters_rejected(self, text: str) -> None:
        with pytest.raises(DecodingError) as exc_info:
            decode(text)
        assert exc_info.value.text == text
        assert text in str(exc_info.value)


class TestRoundTrip:
    """decode(encode(v)) == v and encode(decode(s)) == s"""

    @pytest.mark.parametrize(
        "value",
        [
            0,
            1,
            61,
            62,
            2**32 - 1,
            2**32,
            2**63 - 1,
            2**64,
            (EXAMPLE_EPOCH_NANOS << 32) | EXAMPLE_ENTROPY,
            2**96 - 1,
            2**96,
            2**128 + 12345,
        ],
    )
    def test_integer_round_trip(self, value: int) -> None:
        assert decode(encode(value)) == value

    @pytest.mark.parametrize(
        "text", ["0", "z", "10", "Zz9", EXAMPLE_ID, "5Hr02eJHAfTt1tTM", "zzzzzzzzzzzzzzzzzzzz"]
    )
    def test_canonical_text_round_trip(self, text: str) -> None:
        assert encode(decode(text)) == text

    def test_equal_length_text_order_matches_numeric_order(self) -> None:
        values = [62**15 + i * 7919 for i in range(50)]
        texts = [encode(v) for v in values]
        assert {len(t) for t in texts} == {16}
        assert sorted(texts) == texts

"""
Formatting Buffer Unit Tests
Tests for ethdigest/buffer.py
"""
import pytest

from ethdigest.buffer import LEN, Alphabet, FormattingBuffer, fmt
from ethdigest.errors import InvalidSliceLength


class TestAlphabet:
    """Tests for Alphabet lookup tables."""

    def test_default_is_lower(self):
        assert Alphabet.default() is Alphabet.LOWER

    def test_luts(self):
        assert Alphabet.LOWER.lut == b"0123456789abcdef"
        assert Alphabet.UPPER.lut == b"0123456789ABCDEF"


class TestFmt:
    """Tests for fmt() encoding."""

    def test_length_and_prefix(self):
        buf = fmt(bytes(32))

        assert len(buf) == LEN == 66
        assert buf.as_str() == "0x" + "0" * 64

    def test_nibble_positions(self):
        data = bytes(range(32))
        buf = fmt(data)

        assert buf.as_str() == "0x" + data.hex()

    def test_every_byte_value(self):
        for value in range(256):
            buf = fmt(bytes([value]) * 32)
            assert buf.as_bytes_str() == f"{value:02x}" * 32

    def test_upper_alphabet(self):
        buf = fmt(b"\xab\xcd" * 16, Alphabet.UPPER)

        assert buf.as_str() == "0x" + "ABCD" * 16

    def test_prefix_stays_lowercase_in_upper_alphabet(self):
        assert fmt(bytes(32), Alphabet.UPPER).as_str().startswith("0x")

    def test_bytes_str_strips_prefix(self):
        buf = fmt(b"\xee" * 32)

        assert buf.as_bytes_str() == "ee" * 32
        assert buf.as_str()[2:] == buf.as_bytes_str()

    def test_views_share_buffer(self):
        buf = fmt(b"\x01" * 32)

        assert bytes(buf.view()) == buf.as_str().encode("ascii")
        assert bytes(buf.bytes_view()) == b"01" * 32
        assert buf.view().readonly

    def test_accepts_bytearray_and_memoryview(self):
        data = bytearray(range(32))

        assert fmt(data).as_str() == fmt(memoryview(data)).as_str()

    @pytest.mark.parametrize("n", [0, 31, 33])
    def test_wrong_length(self, n):
        with pytest.raises(InvalidSliceLength):
            fmt(bytes(n))


class TestFormattingBuffer:
    """Tests for the FormattingBuffer wrapper."""

    def test_str_and_repr(self):
        buf = fmt(bytes(32))

        assert str(buf) == buf.as_str()
        assert repr(buf).startswith("FormattingBuffer('0x")

    def test_rejects_partial_buffer(self):
        with pytest.raises(ValueError):
            FormattingBuffer(b"0x")

import pytest

from cbcorex.memdx.uleb128 import append_uleb128_32, decode_uleb128_32


def test_small_value_is_single_byte():
    assert append_uleb128_32(b"", 0x7F) == b"\x7f"


def test_continuation_bit_is_set():
    assert append_uleb128_32(b"", 0x80) == b"\x80\x01"


def test_known_encoding():
    assert append_uleb128_32(b"", 624485) == b"\xe5\x8e\x26"


def test_appends_to_existing_buffer():
    prefix = b"abc"
    result = append_uleb128_32(prefix, 300)
    assert result.startswith(prefix)
    assert decode_uleb128_32(result[len(prefix):]) == (300, len(result) - len(prefix))


@pytest.mark.parametrize(
    "value", [0, 1, 127, 128, 255, 16383, 16384, 2**21, 2**28 - 1, 2**28, 0xFFFFFFFF]
)
def test_round_trip(value):
    encoded = append_uleb128_32(b"", value)
    assert decode_uleb128_32(encoded) == (value, len(encoded))


def test_decode_ignores_trailing_bytes():
    encoded = append_uleb128_32(b"", 1000)
    value, consumed = decode_uleb128_32(encoded + b"\xff\xff")
    assert value == 1000
    assert consumed == len(encoded)


def test_max_value_uses_five_bytes():
    assert len(append_uleb128_32(b"", 0xFFFFFFFF)) == 5


def test_decode_empty():
    with pytest.raises(ValueError, match="no data provided"):
        decode_uleb128_32(b"")


def test_decode_truncated():
    with pytest.raises(ValueError, match="longer than provided data"):
        decode_uleb128_32(b"\x80\x80")


def test_decode_value_over_32_bits():
    with pytest.raises(ValueError, match="longer than 32 bits"):
        decode_uleb128_32(b"\xff\xff\xff\xff\x7f")


def test_decode_too_many_bytes():
    with pytest.raises(ValueError, match="longer than 32 bits"):
        decode_uleb128_32(b"\xff" * 6)


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        append_uleb128_32(b"", 0x100000000)
    with pytest.raises(ValueError):
        append_uleb128_32(b"", -1)
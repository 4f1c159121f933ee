"""Unsigned LEB128 encoding of 32-bit numbers."""

from __future__ import annotations

_MAX_U32 = 0xFFFFFFFF


def append_uleb128_32(buf: bytes, value: int) -> bytes:
    """Return ``buf`` followed by ``value`` encoded as ULEB128."""
    if not 0 <= value <= _MAX_U32:
        raise ValueError("value does not fit in 32 bits")
    out = bytearray(buf)
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            byte |= 0x80
        out.append(byte)
        if not byte & 0x80:
            break
    return bytes(out)


def decode_uleb128_32(data: bytes) -> tuple[int, int]:
    """Decode a ULEB128 number; return the value and the number of bytes read."""
    if not data:
        raise ValueError("no data provided")

    result = 0
    for index, byte in enumerate(data):
        if index * 7 > 32:
            raise ValueError("encoded data is longer than 32 bits")
        result |= (byte & 0x7F) << (index * 7)
        if not byte & 0x80:
            length = index + 1
            break
    else:
        raise ValueError("encoded number is longer than provided data")

    if result > _MAX_U32:
        raise ValueError("encoded data is longer than 32 bits")

    return result, length
"""Reading and writing packets on byte streams."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from cbcorex.memdx.packet import Magic, Packet, ProtocolError
from cbcorex.memdx.status import Status

HEADER_LEN = 24

_HEADER = struct.Struct(">BBHBBHIIQ")
_MAX_U8 = 0xFF
_MAX_U16 = 0xFFFF
_MAX_U32 = 0xFFFFFFFF


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            if buf:
                raise EOFError("unexpected end of stream")
            raise EOFError("end of stream")
        buf += chunk
    return bytes(buf)


def _to_status(value: int) -> int:
    try:
        return Status(value)
    except ValueError:
        return value


class PacketReader:
    """Reads whole packets from a binary stream."""

    def read_packet(self, stream: BinaryIO) -> Packet:
        """Read one packet; raise EOFError if the stream ends early."""
        header = _read_exact(stream, HEADER_LEN)
        (
            magic_byte,
            opcode,
            key_field,
            extras_len,
            datatype,
            vbucket_or_status,
            payload_len,
            opaque,
            cas,
        ) = _HEADER.unpack(header)

        try:
            magic = Magic(magic_byte)
        except ValueError:
            raise ProtocolError("invalid magic for key length decoding") from None

        if magic.is_extended():
            frames_len, key_len = key_field >> 8, key_field & _MAX_U8
        else:
            frames_len, key_len = 0, key_field

        if magic.is_request():
            vbucket_id, status = vbucket_or_status, Status.SUCCESS
        else:
            vbucket_id, status = 0, _to_status(vbucket_or_status)

        payload = _read_exact(stream, payload_len)
        value_len = payload_len - frames_len - extras_len - key_len
        if value_len < 0:
            raise ProtocolError("packet section lengths exceed payload length")

        view = memoryview(payload)
        framing_extras, view = bytes(view[:frames_len]), view[frames_len:]
        extras, view = bytes(view[:extras_len]), view[extras_len:]
        key, view = bytes(view[:key_len]), view[key_len:]

        return Packet(
            magic=magic,
            opcode=opcode,
            datatype=datatype,
            vbucket_id=vbucket_id,
            status=status,
            opaque=opaque,
            cas=cas,
            extras=extras,
            key=key,
            value=bytes(view),
            framing_extras=framing_extras,
        )


def encode_packet(packet: Packet) -> bytes:
    """Encode a packet into its wire form."""
    frames_len = len(packet.framing_extras)
    extras_len = len(packet.extras)
    key_len = len(packet.key)
    payload_len = frames_len + extras_len + key_len + len(packet.value)

    try:
        magic = Magic(packet.magic)
    except ValueError:
        raise ProtocolError("invalid magic for key length encoding") from None

    if magic.is_extended():
        if frames_len > _MAX_U8:
            raise ProtocolError("framing extras too long to encode")
        if key_len > _MAX_U8:
            raise ProtocolError("key too long to encode")
        key_field = (frames_len << 8) | key_len
    else:
        if frames_len > 0:
            raise ProtocolError("cannot use framing extras with non-ext packets")
        if key_len > _MAX_U16:
            raise ProtocolError("key too long to encode")
        key_field = key_len

    if extras_len > _MAX_U8:
        raise ProtocolError("extras too long to encode")

    if magic.is_request():
        if packet.status != 0:
            raise ProtocolError("cannot specify status in a request packet")
        vbucket_or_status = packet.vbucket_id
    else:
        if packet.vbucket_id != 0:
            raise ProtocolError("cannot specify vbucket in a response packet")
        vbucket_or_status = int(packet.status)

    if payload_len > _MAX_U32:
        raise ProtocolError("packet too long to encode")

    try:
        header = _HEADER.pack(
            magic,
            packet.opcode,
            key_field,
            extras_len,
            packet.datatype,
            vbucket_or_status,
            payload_len,
            packet.opaque,
            packet.cas,
        )
    except struct.error as exc:
        raise ProtocolError(f"header field out of range: {exc}") from None

    return b"".join(
        (header, packet.framing_extras, packet.extras, packet.key, packet.value)
    )


def decode_packet(data: bytes) -> Packet:
    """Decode the first packet held in ``data``."""
    return PacketReader().read_packet(io.BytesIO(data))


class PacketWriter:
    """Writes whole packets to a binary stream."""

    def write_packet(self, stream: BinaryIO, packet: Packet) -> None:
        """Encode ``packet`` and write it to ``stream`` in one call."""
        stream.write(encode_packet(packet))
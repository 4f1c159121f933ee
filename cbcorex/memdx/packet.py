"""Packets of the memcached binary protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from cbcorex.memdx.status import Status


class ProtocolError(Exception):
    """Raised when data violates the binary protocol."""


class Magic(IntEnum):
    """Leading byte of a packet, telling requests from responses."""

    REQ = 0x80
    RES = 0x81
    REQ_EXT = 0x08
    RES_EXT = 0x18

    def is_request(self) -> bool:
        """Whether this magic marks a request packet."""
        return self in (Magic.REQ, Magic.REQ_EXT)

    def is_extended(self) -> bool:
        """Whether this magic marks a packet with framing extras."""
        return self in (Magic.REQ_EXT, Magic.RES_EXT)


class PacketType(IntEnum):
    """Kind of packet."""

    UNKNOWN = 0
    REQ = 1
    RES = 2


@dataclass
class Packet:
    """A single protocol packet.

    ``vbucket_id`` is only meaningful for requests, ``status`` only for
    responses and ``framing_extras`` only for extended packets.
    """

    magic: Magic = Magic.REQ
    opcode: int = 0
    datatype: int = 0
    vbucket_id: int = 0
    status: int = Status.SUCCESS
    opaque: int = 0
    cas: int = 0
    extras: bytes = b""
    key: bytes = b""
    value: bytes = b""
    framing_extras: bytes = b""
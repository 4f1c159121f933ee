"""Range scan request encoding and response parsing."""

from __future__ import annotations

import base64
import json
import struct
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from cbcorex.memdx.packet import ProtocolError

_SCAN_UUID_LEN = 16
_CONTINUE_TAIL = struct.Struct(">III")
_ITEM_HEADER = struct.Struct(">IIQQB")
_MAX_U32 = 0xFFFFFFFF


class InvalidArgumentError(ValueError):
    """Raised when a request is built from invalid arguments."""


def _millis_until(deadline: datetime) -> int:
    remaining = deadline - datetime.now(deadline.tzinfo)
    return max(0, remaining // timedelta(milliseconds=1))


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@dataclass
class RangeScanCreateRangeScanConfig:
    """Key range to scan; one start bound and one end bound must be given."""

    start: bytes = b""
    end: bytes = b""
    exclusive_start: bytes = b""
    exclusive_end: bytes = b""


@dataclass
class RangeScanCreateRandomSamplingConfig:
    """Random sampling to perform instead of a key range scan."""

    seed: int = 0
    samples: int = 0


@dataclass
class RangeScanCreateSnapshotRequirements:
    """Requirements the vbucket snapshot must meet for the scan to start."""

    vb_uuid: int = 0
    seq_no: int = 0
    seq_no_exists: bool = False
    deadline: datetime | None = None


@dataclass
class RangeScanCreateRequest:
    """A request to create a range scan on one vbucket."""

    collection_id: int = 0
    vbucket_id: int = 0
    keys_only: bool = False
    range: RangeScanCreateRangeScanConfig | None = None
    sampling: RangeScanCreateRandomSamplingConfig | None = None
    snapshot: RangeScanCreateSnapshotRequirements | None = None
    on_behalf_of: str = ""

    def to_json(self) -> bytes:
        """Encode the request body sent to the server."""
        if self.range is not None and self.sampling is not None:
            raise InvalidArgumentError("only one of range and sampling can be set")
        if self.range is None and self.sampling is None:
            raise InvalidArgumentError("one of range and sampling must set")

        body: dict[str, Any] = {}
        if self.collection_id:
            body["collection"] = format(self.collection_id, "x")
        if self.keys_only:
            body["key_only"] = True

        if self.range is not None:
            scan = self.range
            if scan.start and scan.exclusive_start:
                raise InvalidArgumentError(
                    "only one of start and exclusive start within range can be set"
                )
            if scan.end and scan.exclusive_end:
                raise InvalidArgumentError(
                    "only one of end and exclusive end within range can be set"
                )
            if not (scan.start or scan.exclusive_start):
                raise InvalidArgumentError(
                    "one of start and exclusive start within range must both be set"
                )
            if not (scan.end or scan.exclusive_end):
                raise InvalidArgumentError(
                    "one of end and exclusive end within range must both be set"
                )

            range_body = {
                name: _b64(value)
                for name, value in (
                    ("start", scan.start),
                    ("end", scan.end),
                    ("excl_start", scan.exclusive_start),
                    ("excl_end", scan.exclusive_end),
                )
                if value
            }
            body["range"] = range_body

        if self.sampling is not None:
            if self.sampling.samples == 0:
                raise InvalidArgumentError("samples within sampling must be set")
            sampling_body: dict[str, Any] = {}
            if self.sampling.seed:
                sampling_body["seed"] = self.sampling.seed
            sampling_body["samples"] = self.sampling.samples
            body["sampling"] = sampling_body

        if self.snapshot is not None:
            snap = self.snapshot
            if snap.vb_uuid == 0:
                raise InvalidArgumentError("vbuuid within snapshot must be set")
            if snap.seq_no == 0:
                raise InvalidArgumentError("seqno within snapshot must be set")
            snap_body: dict[str, Any] = {
                "vb_uuid": str(snap.vb_uuid),
                "seqno": snap.seq_no,
            }
            if snap.seq_no_exists:
                snap_body["seqno_exists"] = True
            timeout = _millis_until(snap.deadline) if snap.deadline is not None else 0
            if timeout:
                snap_body["timeout_ms"] = timeout
            body["snapshot_requirements"] = snap_body

        return json.dumps(body, separators=(",", ":")).encode("utf-8")


@dataclass
class RangeScanItem:
    """One document or key returned by a range scan."""

    key: bytes
    value: bytes = b""
    flags: int = 0
    cas: int = 0
    expiry: int = 0
    seq_no: int = 0
    datatype: int = 0


@dataclass
class RangeScanDataResponse:
    """A batch of items delivered by a range scan continue."""

    items: list[RangeScanItem] = field(default_factory=list)
    keys_only: bool = False


@dataclass
class RangeScanActionResponse:
    """The outcome of a range scan continue: more results or complete."""

    more: bool = False
    complete: bool = False


def _check_scan_uuid(scan_uuid: bytes) -> None:
    if len(scan_uuid) != _SCAN_UUID_LEN:
        raise InvalidArgumentError(f"scanUUID must be 16 bytes, was {len(scan_uuid)}")


def encode_range_scan_continue_extras(
    scan_uuid: bytes,
    max_count: int,
    max_bytes: int,
    deadline: datetime | None,
) -> bytes:
    """Build the 28-byte extras of a range scan continue request."""
    _check_scan_uuid(scan_uuid)
    deadline_ms = _millis_until(deadline) & _MAX_U32 if deadline is not None else 0
    try:
        tail = _CONTINUE_TAIL.pack(max_count, deadline_ms, max_bytes)
    except struct.error as exc:
        raise InvalidArgumentError(f"value out of range: {exc}") from None
    return bytes(scan_uuid) + tail


def encode_range_scan_cancel_extras(scan_uuid: bytes) -> bytes:
    """Build the 16-byte extras of a range scan cancel request."""
    _check_scan_uuid(scan_uuid)
    return bytes(scan_uuid)


def _read_uvarint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise ProtocolError("truncated length prefix in range scan data")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
        if shift >= 64:
            raise ProtocolError("length prefix overflows 64 bits")


def _read_prefixed(data: bytes, pos: int) -> tuple[bytes, int]:
    length, pos = _read_uvarint(data, pos)
    end = pos + length
    if end > len(data):
        raise ProtocolError("range scan entry is longer than provided data")
    return bytes(data[pos:end]), end


def parse_range_scan_keys(data: bytes) -> list[RangeScanItem]:
    """Parse a keys-only range scan payload."""
    items = []
    pos = 0
    while pos < len(data):
        key, pos = _read_prefixed(data, pos)
        items.append(RangeScanItem(key=key))
    return items


def parse_range_scan_docs(data: bytes) -> list[RangeScanItem]:
    """Parse a range scan payload holding whole documents."""
    items = []
    pos = 0
    while pos < len(data):
        if pos + _ITEM_HEADER.size > len(data):
            raise ProtocolError("truncated range scan item")
        flags, expiry, seq_no, cas, datatype = _ITEM_HEADER.unpack_from(data, pos)
        pos += _ITEM_HEADER.size
        key, pos = _read_prefixed(data, pos)
        value, pos = _read_prefixed(data, pos)
        items.append(
            RangeScanItem(
                key=key,
                value=value,
                flags=flags,
                cas=cas,
                expiry=expiry,
                seq_no=seq_no,
                datatype=datatype,
            )
        )
    return items


def parse_range_scan_data(data: bytes, keys_only: bool) -> list[RangeScanItem]:
    """Parse a range scan payload of keys or of documents."""
    if keys_only:
        return parse_range_scan_keys(data)
    return parse_range_scan_docs(data)
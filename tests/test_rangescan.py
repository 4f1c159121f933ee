import base64
import json
import struct
from datetime import datetime, timedelta, timezone

import pytest

from cbcorex.memdx.packet import ProtocolError
from cbcorex.memdx.rangescan import (
    InvalidArgumentError,
    RangeScanCreateRandomSamplingConfig,
    RangeScanCreateRangeScanConfig,
    RangeScanCreateRequest,
    RangeScanCreateSnapshotRequirements,
    RangeScanItem,
    encode_range_scan_cancel_extras,
    encode_range_scan_continue_extras,
    parse_range_scan_data,
    parse_range_scan_docs,
    parse_range_scan_keys,
)
from cbcorex.memdx.uleb128 import append_uleb128_32

SCAN_UUID = bytes(range(16))


def test_to_json_simple_range_wire_form():
    req = RangeScanCreateRequest(range=RangeScanCreateRangeScanConfig(start=b"a", end=b"b"))
    assert req.to_json() == b'{"range":{"start":"YQ==","end":"Yg=="}}'


def test_to_json_range_with_exclusive_bounds_and_collection():
    req = RangeScanCreateRequest(
        collection_id=255,
        keys_only=True,
        range=RangeScanCreateRangeScanConfig(exclusive_start=b"key-start", exclusive_end=b"key-end"),
    )
    body = json.loads(req.to_json())
    assert body["collection"] == "ff"
    assert body["key_only"] is True
    assert set(body["range"]) == {"excl_start", "excl_end"}
    assert base64.b64decode(body["range"]["excl_start"]) == b"key-start"
    assert base64.b64decode(body["range"]["excl_end"]) == b"key-end"


def test_to_json_sampling_omits_zero_seed():
    req = RangeScanCreateRequest(sampling=RangeScanCreateRandomSamplingConfig(samples=10))
    body = json.loads(req.to_json())
    assert body == {"sampling": {"samples": 10}}

    req = RangeScanCreateRequest(sampling=RangeScanCreateRandomSamplingConfig(seed=7, samples=3))
    assert json.loads(req.to_json()) == {"sampling": {"seed": 7, "samples": 3}}


def test_to_json_snapshot():
    deadline = datetime.now(timezone.utc) + timedelta(seconds=5)
    req = RangeScanCreateRequest(
        range=RangeScanCreateRangeScanConfig(start=b"a", end=b"z"),
        snapshot=RangeScanCreateSnapshotRequirements(
            vb_uuid=123, seq_no=45, seq_no_exists=True, deadline=deadline
        ),
    )
    snap = json.loads(req.to_json())["snapshot_requirements"]
    assert snap["vb_uuid"] == "123"
    assert snap["seqno"] == 45
    assert snap["seqno_exists"] is True
    assert 0 < snap["timeout_ms"] <= 5000


def test_to_json_snapshot_without_deadline_omits_timeout():
    req = RangeScanCreateRequest(
        range=RangeScanCreateRangeScanConfig(start=b"a", end=b"z"),
        snapshot=RangeScanCreateSnapshotRequirements(vb_uuid=9, seq_no=1),
    )
    snap = json.loads(req.to_json())["snapshot_requirements"]
    assert snap == {"vb_uuid": "9", "seqno": 1}


@pytest.mark.parametrize(
    "req, message",
    [
        (
            RangeScanCreateRequest(
                range=RangeScanCreateRangeScanConfig(start=b"a", end=b"b"),
                sampling=RangeScanCreateRandomSamplingConfig(samples=1),
            ),
            "only one of range and sampling can be set",
        ),
        (RangeScanCreateRequest(), "one of range and sampling must set"),
        (
            RangeScanCreateRequest(
                range=RangeScanCreateRangeScanConfig(start=b"a", exclusive_start=b"a", end=b"b")
            ),
            "only one of start and exclusive start",
        ),
        (
            RangeScanCreateRequest(
                range=RangeScanCreateRangeScanConfig(start=b"a", end=b"b", exclusive_end=b"b")
            ),
            "only one of end and exclusive end",
        ),
        (
            RangeScanCreateRequest(range=RangeScanCreateRangeScanConfig(end=b"b")),
            "one of start and exclusive start within range must",
        ),
        (
            RangeScanCreateRequest(range=RangeScanCreateRangeScanConfig(start=b"a")),
            "one of end and exclusive end within range must",
        ),
        (
            RangeScanCreateRequest(sampling=RangeScanCreateRandomSamplingConfig(seed=1)),
            "samples within sampling must be set",
        ),
        (
            RangeScanCreateRequest(
                range=RangeScanCreateRangeScanConfig(start=b"a", end=b"b"),
                snapshot=RangeScanCreateSnapshotRequirements(seq_no=1),
            ),
            "vbuuid within snapshot must be set",
        ),
        (
            RangeScanCreateRequest(
                range=RangeScanCreateRangeScanConfig(start=b"a", end=b"b"),
                snapshot=RangeScanCreateSnapshotRequirements(vb_uuid=1),
            ),
            "seqno within snapshot must be set",
        ),
    ],
)
def test_to_json_errors(req, message):
    with pytest.raises(InvalidArgumentError, match=message):
        req.to_json()


def test_continue_extras_layout():
    extras = encode_range_scan_continue_extras(SCAN_UUID, 11, 4096, None)
    assert len(extras) == 28
    assert extras[:16] == SCAN_UUID
    assert struct.unpack(">III", extras[16:]) == (11, 0, 4096)


def test_continue_extras_deadline():
    deadline = datetime.now(timezone.utc) + timedelta(seconds=10)
    extras = encode_range_scan_continue_extras(SCAN_UUID, 0, 0, deadline)
    (deadline_ms,) = struct.unpack(">I", extras[20:24])
    assert 0 < deadline_ms <= 10000


@pytest.mark.parametrize("bad", [b"", b"short", bytes(17)])
def test_extras_reject_bad_scan_uuid(bad):
    with pytest.raises(InvalidArgumentError, match="scanUUID must be 16 bytes"):
        encode_range_scan_continue_extras(bad, 1, 1, None)
    with pytest.raises(InvalidArgumentError, match="scanUUID must be 16 bytes"):
        encode_range_scan_cancel_extras(bad)


def test_cancel_extras():
    assert encode_range_scan_cancel_extras(SCAN_UUID) == SCAN_UUID


def _encode_keys(keys):
    data = b""
    for key in keys:
        data = append_uleb128_32(data, len(key)) + key
    return data


def _encode_doc(item):
    data = struct.pack(">IIQQB", item.flags, item.expiry, item.seq_no, item.cas, item.datatype)
    data = append_uleb128_32(data, len(item.key)) + item.key
    data = append_uleb128_32(data, len(item.value)) + item.value
    return data


def test_parse_keys_round_trip():
    keys = [b"alpha", b"", b"k" * 300, b"omega"]
    items = parse_range_scan_keys(_encode_keys(keys))
    assert [item.key for item in items] == keys
    assert all(item.value == b"" and item.cas == 0 for item in items)


def test_parse_docs_round_trip():
    docs = [
        RangeScanItem(key=b"doc1", value=b'{"a":1}', flags=5, cas=99, expiry=10, seq_no=3, datatype=1),
        RangeScanItem(key=b"doc2", value=b"v" * 200, flags=0, cas=2**63, expiry=0, seq_no=4, datatype=0),
    ]
    data = b"".join(_encode_doc(doc) for doc in docs)
    assert parse_range_scan_docs(data) == docs
    assert parse_range_scan_data(data, keys_only=False) == docs


def test_parse_data_dispatches_on_keys_only():
    data = _encode_keys([b"x", b"y"])
    assert [item.key for item in parse_range_scan_data(data, keys_only=True)] == [b"x", b"y"]


def test_parse_empty():
    assert parse_range_scan_keys(b"") == []
    assert parse_range_scan_docs(b"") == []


def test_parse_truncated_data_raises():
    with pytest.raises(ProtocolError):
        parse_range_scan_keys(append_uleb128_32(b"", 10) + b"abc")
    with pytest.raises(ProtocolError):
        parse_range_scan_docs(b"\x00" * 10)
    doc = _encode_doc(RangeScanItem(key=b"key", value=b"value"))
    with pytest.raises(ProtocolError):
        parse_range_scan_docs(doc[:-1])
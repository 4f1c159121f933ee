# cbcorex

Low-level building blocks for talking to a Couchbase cluster from Python.
The package has no runtime dependencies.

## What is inside

- `cbcorex.memdx`: the memcached binary protocol.
  - `status`: the `Status` codes a server returns. `str(Status.TMP_FAIL)` gives
    `"TmpFail"`. `status_to_string` names any code and shows unknown ones as
    `x` followed by their low byte in hex.
  - `uleb128`: `append_uleb128_32` and `decode_uleb128_32`. Both raise
    `ValueError` on values or data that do not fit in 32 bits.
  - `packet`: the `Packet` dataclass, the `Magic` and `PacketType` enums, and
    `ProtocolError`.
  - `codec`: `encode_packet` and `decode_packet` for bytes, and `PacketReader`
    and `PacketWriter` for binary streams. Encoding checks the field lengths
    and the rules for request and response packets, and raises `ProtocolError`
    when they are broken. Reading raises `EOFError` when a stream ends early.
  - `pendingop`: the `PendingOp` interface. `MultiPendingOp` cancels a group of
    operations together, and so also cancels any operation that is added after
    the group was cancelled. `NoopPendingOp` ignores cancellation.
  - `subdoc`: the `SubdocOpFlag` and `SubdocDocFlag` flags, the `LookupInOp`
    and `MutateInOp` operations, and `reorder_subdoc_ops`. That function moves
    xattr operations to the front and returns, for each operation, its new
    position.
  - `rangescan`: `RangeScanCreateRequest.to_json` builds the JSON body that
    creates a scan. It takes a range or a sampling config, plus optional
    snapshot requirements. `encode_range_scan_continue_extras` and
    `encode_range_scan_cancel_extras` build request extras.
    `parse_range_scan_keys`, `parse_range_scan_docs` and `parse_range_scan_data`
    decode response payloads into `RangeScanItem` objects. Invalid arguments
    raise `InvalidArgumentError`.
- `cbcorex.scram.client`: `ScramClient`, a SCRAM client that follows RFC 5802.
  It works with any `hashlib` constructor. Failures raise `ScramError`.
- `cbcorex.servicetype`: `ServiceType` (`MEMD`, `MGMT`, `QUERY`, `SEARCH`).
- `cbcorex.parsedconfig`: `ParsedConfig` and its address groups, and
  `BucketType`. It offers revision comparison (`compare`, `is_versioned`) and
  lookup of addresses by network type.
- `cbcorex.networktype`: `NetworkTypeHeuristic.identify`, which finds the
  network (`"default"` or an alternate) whose kv or management endpoints list
  an address.
- `cbcorex.utils`: `host_from_uri`, `host_from_host_port` (IPv6 hosts come back
  in brackets) and `filter_strings_out`.
- `cbcorex.vbucketmap`: `VbucketMap`, which hashes keys to vbuckets (CRC32) and
  maps vbuckets to server indexes. Indexes outside the map raise
  `InvalidVbucketError` or `InvalidReplicaError`.
- `cbcorex.vbucketrouter`: `VbucketRouter`, which turns keys and vbucket ids
  into endpoints from the current `VbucketRoutingInfo`. It raises
  `NoVbucketMapError` or `NoServerAssignedError`.
- `cbcorex.retry`: `orchestrate_retries` calls an operation again for as long
  as a `RetryManager`'s controller allows it, up to an optional deadline on the
  `time.monotonic` clock. When the deadline is reached it raises
  `RetryDeadlineError`, which carries the last error. `RetryManagerFastFail`
  never retries.

## Examples

### Encoding and decoding packets

```python
from cbcorex.memdx.codec import encode_packet, decode_packet
from cbcorex.memdx.packet import Packet, Magic

raw = encode_packet(Packet(magic=Magic.REQ, opcode=0x00, key=b"hello"))
assert decode_packet(raw).key == b"hello"
```

### Routing keys

```python
from cbcorex.vbucketmap import VbucketMap
from cbcorex.vbucketrouter import VbucketRouter, VbucketRoutingInfo

router = VbucketRouter()
router.update_routing_info(VbucketRoutingInfo(
    vb_map=VbucketMap([[0, 1], [1, 0]], 1),
    server_list=["node1:11210", "node2:11210"],
))
endpoint, vb_id = router.dispatch_by_key(b"my-key", 0)
```

### SCRAM authentication

```python
import hashlib
from cbcorex.scram.client import ScramClient

password = "password"
client = ScramClient(hashlib.sha256, "user", password)
client.step(b"")
first_message = client.out
# Send first_message to the server, pass its reply to client.step(...),
# and send client.out again; a third step checks the server's signature.
```

## What this package does not do

This package does not open connections and does not send anything over a
network. It has no client that dispatches operations, bootstraps a
connection, or parses cluster configuration JSON from a server. It has no
management, query or search HTTP components. The only retry manager it
provides is `RetryManagerFastFail`; any backoff policy has to be written as
your own `RetryManager` subclass.

## Running the tests

```
pip install -e ".[test]"
pytest
```
"""Mapping of keys to vbuckets and vbuckets to servers."""

from __future__ import annotations

import zlib
from typing import Sequence


class InvalidVbucketError(LookupError):
    """Raised when a vbucket id is outside the map."""

    def __init__(self, requested_vb_id: int, num_vbuckets: int) -> None:
        super().__init__(
            f"invalid vbucket requested (requested: {requested_vb_id}, "
            f"vbuckets: {num_vbuckets})"
        )
        self.requested_vb_id = requested_vb_id
        self.num_vbuckets = num_vbuckets


class InvalidReplicaError(LookupError):
    """Raised when a replica or server index is outside the map."""

    def __init__(self, requested_replica: int, num_servers: int) -> None:
        super().__init__(
            f"invalid replica requested (requested: {requested_replica}, "
            f"servers: {num_servers})"
        )
        self.requested_replica = requested_replica
        self.num_servers = num_servers


class VbucketMap:
    """For each vbucket, the server indexes of its active copy and replicas."""

    def __init__(self, entries: Sequence[Sequence[int]], num_replicas: int) -> None:
        self._entries = [list(entry) for entry in entries]
        self._num_replicas = num_replicas

    def is_valid(self) -> bool:
        """Whether the map has vbuckets and the first one has servers."""
        return bool(self._entries) and bool(self._entries[0])

    def num_vbuckets(self) -> int:
        """Number of vbuckets in the map."""
        return len(self._entries)

    def num_replicas(self) -> int:
        """Number of replicas configured for the bucket."""
        return self._num_replicas

    def vbucket_by_key(self, key: bytes) -> int:
        """The vbucket a key hashes to."""
        if not self._entries:
            raise InvalidVbucketError(0, 0)
        crc = zlib.crc32(key)
        mid_bits = (crc >> 16) & 0x7FFF
        return mid_bits % len(self._entries)

    def node_by_vbucket(self, vb_id: int, replica_id: int) -> int:
        """Server index holding a copy of a vbucket, or -1 if none is assigned."""
        num_vbuckets = len(self._entries)
        if not 0 <= vb_id < num_vbuckets:
            raise InvalidVbucketError(vb_id, num_vbuckets)

        num_servers = self._num_replicas + 1
        if not 0 <= replica_id < num_servers:
            raise InvalidReplicaError(replica_id, num_servers)

        entry = self._entries[vb_id]
        if replica_id >= len(entry):
            return -1
        return entry[replica_id]

    def vbuckets_on_server(self, index: int) -> list[int]:
        """Vbuckets whose active copy lives on server ``index``."""
        by_server = self.vbuckets_by_server(0)
        if not 0 <= index < len(by_server):
            raise InvalidReplicaError(index, len(by_server))
        return by_server[index]

    def vbuckets_by_server(self, replica_id: int) -> list[list[int]]:
        """For each server index, the vbuckets whose given copy lives there."""
        if replica_id < 0:
            raise InvalidReplicaError(replica_id, self._num_replicas + 1)

        by_server: list[list[int]] = []
        for vb_id, entry in enumerate(self._entries):
            if len(entry) <= replica_id:
                continue
            server_id = entry[replica_id]
            if server_id < 0:
                continue
            while len(by_server) <= server_id:
                by_server.append([])
            by_server[server_id].append(vb_id)
        return by_server

    def node_by_key(self, key: bytes, replica_id: int) -> int:
        """Server index holding a copy of the vbucket a key hashes to."""
        return self.node_by_vbucket(self.vbucket_by_key(key), replica_id)
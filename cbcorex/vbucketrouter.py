"""Routing keys and vbuckets to server endpoints."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from cbcorex.vbucketmap import VbucketMap


class NoVbucketMapError(LookupError):
    """Raised when no routing information has been provided yet."""

    def __init__(self) -> None:
        super().__init__("no vbucket map is available")


class NoServerAssignedError(LookupError):
    """Raised when a vbucket has no server assigned to it."""

    def __init__(self, requested_vb_id: int) -> None:
        super().__init__(f"no server assigned to vbucket {requested_vb_id}")
        self.requested_vb_id = requested_vb_id


@dataclass(frozen=True)
class VbucketRoutingInfo:
    """A vbucket map together with the servers its indexes refer to."""

    vb_map: VbucketMap
    server_list: list[str] = field(default_factory=list)


class VbucketRouter:
    """Picks the endpoint for a key or vbucket from the current routing info."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._info: VbucketRoutingInfo | None = None

    def update_routing_info(self, info: VbucketRoutingInfo | None) -> None:
        """Replace the routing information in use."""
        with self._lock:
            self._info = info

    def _routing_info(self) -> VbucketRoutingInfo:
        with self._lock:
            info = self._info
        if info is None:
            raise NoVbucketMapError()
        return info

    @staticmethod
    def _endpoint(info: VbucketRoutingInfo, vb_id: int, replica_id: int) -> str:
        index = info.vb_map.node_by_vbucket(vb_id, replica_id)
        if not 0 <= index < len(info.server_list):
            raise NoServerAssignedError(vb_id)
        return info.server_list[index]

    def dispatch_by_key(self, key: bytes, replica_id: int) -> tuple[str, int]:
        """Return the endpoint and vbucket id for a key's given copy."""
        info = self._routing_info()
        vb_id = info.vb_map.vbucket_by_key(key)
        return self._endpoint(info, vb_id, replica_id), vb_id

    def dispatch_to_vbucket(self, vb_id: int) -> str:
        """Return the endpoint holding the active copy of a vbucket."""
        return self._endpoint(self._routing_info(), vb_id, 0)
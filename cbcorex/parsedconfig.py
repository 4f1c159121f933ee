"""Cluster configuration after parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from cbcorex.vbucketmap import VbucketMap

DEFAULT_NETWORK = "default"


class BucketType(IntEnum):
    """Kind of bucket a configuration describes."""

    NONE = -1
    INVALID = 0
    COUCHBASE = 2
    MEMCACHED = 3


@dataclass
class ParsedConfigServiceAddresses:
    """Endpoints of each service on one side (TLS or plain)."""

    kv: list[str] = field(default_factory=list)
    kv_data: list[str] = field(default_factory=list)
    mgmt: list[str] = field(default_factory=list)
    views: list[str] = field(default_factory=list)
    query: list[str] = field(default_factory=list)
    search: list[str] = field(default_factory=list)


@dataclass
class ParsedConfigAddresses:
    """Plain and TLS endpoints of a network."""

    non_ssl: ParsedConfigServiceAddresses = field(
        default_factory=ParsedConfigServiceAddresses
    )
    ssl: ParsedConfigServiceAddresses = field(
        default_factory=ParsedConfigServiceAddresses
    )


@dataclass
class ParsedConfig:
    """A parsed cluster or bucket configuration."""

    rev_id: int = 0
    rev_epoch: int = 0
    bucket_uuid: str = ""
    bucket_name: str = ""
    bucket_type: BucketType = BucketType.INVALID
    vbucket_map: VbucketMap | None = None
    addresses: ParsedConfigAddresses = field(default_factory=ParsedConfigAddresses)
    alternate_addresses: dict[str, ParsedConfigAddresses] = field(default_factory=dict)

    def is_versioned(self) -> bool:
        """Whether the configuration carries a revision."""
        return self.rev_epoch > 0 or self.rev_id > 0

    def compare(self, other: ParsedConfig) -> int:
        """Order two configurations by revision.

        Returns -2 or +2 when the epochs differ, -1 or +1 when only the
        revision differs, and 0 when both match.
        """
        if self.rev_epoch < other.rev_epoch:
            return -2
        if self.rev_epoch > other.rev_epoch:
            return 2
        if self.rev_id < other.rev_id:
            return -1
        if self.rev_id > other.rev_id:
            return 1
        return 0

    def addresses_group_for_network_type(self, network_type: str) -> ParsedConfigAddresses:
        """Addresses of a network; an empty group if the network is unknown."""
        if network_type == DEFAULT_NETWORK:
            return self.addresses
        return self.alternate_addresses.get(network_type, ParsedConfigAddresses())
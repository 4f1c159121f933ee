"""Guessing which network a bootstrap address belongs to."""

from __future__ import annotations

from cbcorex.parsedconfig import DEFAULT_NETWORK, ParsedConfig, ParsedConfigAddresses


def _contains_address(hosts: ParsedConfigAddresses | None, address: str) -> bool:
    if hosts is None:
        return False
    return any(
        address in group
        for group in (hosts.non_ssl.kv, hosts.ssl.kv, hosts.non_ssl.mgmt, hosts.ssl.mgmt)
    )


class NetworkTypeHeuristic:
    """Identifies the network type from the address used to connect."""

    def identify(self, config: ParsedConfig, address: str) -> str:
        """Return the network whose kv or management endpoints list ``address``.

        The default network wins when an address appears in several, and is
        also the answer when none matches.
        """
        if _contains_address(config.addresses, address):
            return DEFAULT_NETWORK
        for network_type, alt_addresses in config.alternate_addresses.items():
            if _contains_address(alt_addresses, address):
                return network_type
        return DEFAULT_NETWORK
"""Small helpers for addresses and string lists."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urlsplit


def host_from_uri(uri: str) -> str:
    """Return the host (with port, without user info) of a URI."""
    parts = urlsplit(uri)
    try:
        parts.port
    except ValueError as exc:
        raise ValueError(f"invalid port in {uri!r}: {exc}") from None
    return parts.netloc.rpartition("@")[2]


def _split_host_port(hostport: str) -> tuple[str, str]:
    colon = hostport.rfind(":")
    if colon < 0:
        raise ValueError(f"missing port in address {hostport!r}")

    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address {hostport!r}")
        if end + 1 == len(hostport):
            raise ValueError(f"missing port in address {hostport!r}")
        if end + 1 != colon:
            if hostport[end + 1] == "]":
                raise ValueError(f"too many ']' in address {hostport!r}")
            raise ValueError(f"missing port in address {hostport!r}")
        host = hostport[1:end]
        head, tail = hostport[1:], hostport[end + 1:]
    else:
        host = hostport[:colon]
        if ":" in host:
            raise ValueError(f"too many colons in address {hostport!r}")
        head, tail = hostport, hostport

    if "[" in head:
        raise ValueError(f"unexpected '[' in address {hostport!r}")
    if "]" in tail:
        raise ValueError(f"unexpected ']' in address {hostport!r}")
    return host, hostport[colon + 1:]


def host_from_host_port(hostport: str) -> str:
    """Return the host of a host:port pair, bracketing IPv6 addresses."""
    host, _ = _split_host_port(hostport)
    if ":" in host:
        return f"[{host}]"
    return host


def filter_strings_out(strs: Iterable[str], to_remove: Iterable[str]) -> list[str]:
    """Return ``strs`` without any string found in ``to_remove``, order kept."""
    removed = set(to_remove)
    return [s for s in strs if s not in removed]
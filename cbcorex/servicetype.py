"""Couchbase service types."""

from __future__ import annotations

from enum import IntEnum


class ServiceType(IntEnum):
    """A particular Couchbase service."""

    MEMD = 1
    MGMT = 2
    QUERY = 4
    SEARCH = 5

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    ServiceType.MEMD: "Memd",
    ServiceType.MGMT: "Mgmt",
    ServiceType.QUERY: "Query",
    ServiceType.SEARCH: "Search",
}
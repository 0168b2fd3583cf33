"""Data models for a parsed OpenVPN status report.

All records are frozen dataclasses. A ``Snapshot`` is produced once per
parse and owns its ``Client`` and ``Route`` records outright; nothing links
a route to a client other than the shared ``common_name`` string.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from ipaddress import IPv4Address, IPv4Interface, IPv6Address, IPv6Interface, ip_interface
from typing import Any, Dict, Optional, Tuple, Union

IPAddress = Union[IPv4Address, IPv6Address]


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _text(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


@dataclass(frozen=True)
class Address:
    """An INET address: IP plus port."""

    ip: IPAddress
    port: int

    def __str__(self) -> str:
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"


@dataclass(frozen=True)
class RouteAddress:
    """
    A routing table address: IP, prefix length and remote flag.

    ``remote`` means the route was learned via the remote host and the
    server is forwarding it to that host. The IP keeps its host bits, so
    ``10.3.0.1/16`` stays ``10.3.0.1`` rather than collapsing to the network.
    """

    ip: IPAddress
    prefixlen: int
    remote: bool = False

    @property
    def network(self) -> Union[IPv4Interface, IPv6Interface]:
        return ip_interface(f"{self.ip}/{self.prefixlen}")

    @property
    def netmask(self) -> IPAddress:
        return self.network.netmask

    @property
    def version(self) -> int:
        return self.ip.version

    def __str__(self) -> str:
        suffix = "C" if self.remote else ""
        return f"{self.ip}/{self.prefixlen}{suffix}"


@dataclass(frozen=True)
class Client:
    """A connected client from the CLIENT LIST section."""

    common_name: str = ""
    real_address: Optional[Address] = None
    bytes_received: int = 0
    bytes_sent: int = 0
    connected_since: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "common_name": self.common_name,
            "real_address": _text(self.real_address),
            "bytes_received": self.bytes_received,
            "bytes_sent": self.bytes_sent,
            "connected_since": _isoformat(self.connected_since),
        }


@dataclass(frozen=True)
class Route:
    """A routing table entry from the ROUTING TABLE section."""

    virtual_address: Optional[RouteAddress] = None
    common_name: str = ""
    real_address: Optional[Address] = None
    last_ref: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "virtual_address": _text(self.virtual_address),
            "remote": self.virtual_address.remote if self.virtual_address else False,
            "common_name": self.common_name,
            "real_address": _text(self.real_address),
            "last_ref": _isoformat(self.last_ref),
        }


@dataclass(frozen=True)
class Snapshot:
    """The OpenVPN status at a point in time."""

    updated: Optional[datetime] = None
    clients: Tuple[Client, ...] = field(default_factory=tuple)
    routes: Tuple[Route, ...] = field(default_factory=tuple)
    max_queue_length: int = 0

    def clients_by_name(self, common_name: str) -> Tuple[Client, ...]:
        """Return every client session with the given common name."""
        return tuple(c for c in self.clients if c.common_name == common_name)

    def routes_for(self, common_name: str) -> Tuple[Route, ...]:
        """Return every route entry owned by the given common name."""
        return tuple(r for r in self.routes if r.common_name == common_name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "updated": _isoformat(self.updated),
            "clients": [c.to_dict() for c in self.clients],
            "routes": [r.to_dict() for r in self.routes],
            "max_queue_length": self.max_queue_length,
        }

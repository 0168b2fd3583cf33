"""Parse OpenVPN status files into structured snapshots of clients and routes."""

from __future__ import annotations

from .core.status_parser import StatusParser, parse, parse_file, parse_string
from .exceptions import (
    ConfigError,
    FieldError,
    OvpnStatusError,
    ParserError,
    StatusParseError,
    UnexpectedTextError,
)
from .models import Address, Client, Route, RouteAddress, Snapshot

__all__ = [
    "Address",
    "Client",
    "ConfigError",
    "FieldError",
    "OvpnStatusError",
    "ParserError",
    "Route",
    "RouteAddress",
    "Snapshot",
    "StatusParseError",
    "StatusParser",
    "UnexpectedTextError",
    "parse",
    "parse_file",
    "parse_string",
]

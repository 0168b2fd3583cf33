"""Typed parsers for the individual fields of a status report line.

Every parser takes the raw text of one comma-separated field and either
returns the typed value or raises ``FieldError``.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from ipaddress import ip_address, ip_interface

from ..constants import MONTH_NAMES, REMOTE_ROUTE_SUFFIX, WEEKDAY_NAMES
from ..exceptions import FieldError
from ..models import Address, IPAddress, RouteAddress

_UINT_RE = re.compile(r"^[0-9]+$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_TIMESTAMP_RE = re.compile(
    r"^(" + "|".join(WEEKDAY_NAMES) + r") +(" + "|".join(MONTH_NAMES) + r") +"
    r"([0-9]{1,2}) ([0-9]{1,2}):([0-9]{2}):([0-9]{2}) ([0-9]{4})$",
    re.IGNORECASE,
)
_MONTHS = {name: number for number, name in enumerate(MONTH_NAMES, start=1)}

UINT64_MAX = 2**64 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_uint64(text: str) -> int:
    """Parse an unsigned base-10 integer that fits in 64 bits."""
    if not _UINT_RE.match(text):
        raise FieldError(f"invalid unsigned integer: {text!r}")
    value = int(text)
    if value > UINT64_MAX:
        raise FieldError(f"unsigned integer out of range: {text!r}")
    return value


def parse_int64(text: str) -> int:
    """Parse a signed base-10 integer that fits in 64 bits."""
    if not _INT_RE.match(text):
        raise FieldError(f"invalid integer: {text!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise FieldError(f"integer out of range: {text!r}")
    return value


def parse_timestamp(text: str) -> datetime:
    """
    Parse a status report timestamp such as ``Thu Nov  5 15:34:43 2015``.

    Day and month names are always English; the weekday is checked for
    syntax only. The report carries no zone, so the result is taken as UTC.
    """
    match = _TIMESTAMP_RE.match(text)
    if not match:
        raise FieldError(f"invalid timestamp: {text!r}")
    _weekday, month, day, hour, minute, second, year = match.groups()
    try:
        return datetime(
            int(year),
            _MONTHS[month.title()],
            int(day),
            int(hour),
            int(minute),
            int(second),
            tzinfo=timezone.utc,
        )
    except ValueError as exc:
        raise FieldError(f"invalid timestamp {text!r}: {exc}") from exc


def parse_ip(text: str) -> IPAddress:
    """Parse an IPv4 or IPv6 literal."""
    try:
        return ip_address(text)
    except ValueError as exc:
        raise FieldError(f"invalid IP address: {text!r}") from exc


def split_host_port(text: str) -> tuple[str, str]:
    """
    Split ``host:port`` or ``[host]:port`` into its two parts.

    An unbracketed host may not itself contain a colon.
    """
    if text.startswith("["):
        end = text.find("]")
        if end < 0:
            raise FieldError(f"missing ']' in address: {text!r}")
        if text[end + 1:end + 2] != ":":
            raise FieldError(f"missing port in address: {text!r}")
        return text[1:end], text[end + 2:]

    host, sep, port = text.rpartition(":")
    if not sep:
        raise FieldError(f"missing port in address: {text!r}")
    if ":" in host:
        raise FieldError(f"too many colons in address: {text!r}")
    return host, port


def parse_address(text: str) -> Address:
    """Parse an ``ip:port`` address."""
    host, port = split_host_port(text)
    ip = parse_ip(host)
    if not _INT_RE.match(port):
        raise FieldError(f"invalid port in address: {text!r}")
    return Address(ip=ip, port=int(port))


def parse_route_address(text: str) -> RouteAddress:
    """
    Parse a routing table virtual address.

    Accepts ``ip/prefixlen`` or a bare IP, optionally followed by the
    remote marker ``C``. A bare IP gets a full-length prefix for its family.
    """
    remote = False
    if text.endswith(REMOTE_ROUTE_SUFFIX):
        text = text[: -len(REMOTE_ROUTE_SUFFIX)]
        remote = True

    if "/" in text:
        prefix = text.partition("/")[2]
        if not _UINT_RE.match(prefix):
            raise FieldError(f"invalid route address: {text!r}")
        try:
            iface = ip_interface(text)
        except ValueError as exc:
            raise FieldError(f"invalid route address: {text!r}") from exc
        return RouteAddress(ip=iface.ip, prefixlen=iface.network.prefixlen, remote=remote)

    try:
        ip = ip_address(text)
    except ValueError as exc:
        raise FieldError(f"invalid route address: {text!r}") from exc
    return RouteAddress(ip=ip, prefixlen=ip.max_prefixlen, remote=remote)

"""Positional, type-directed record filling.

Each record type has an explicit ordered schema whose order is the column
order of its section. ``fill_record`` walks the schema and the split text
fields side by side, parsing each field with the parser for its kind.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Sequence, Tuple, Type, TypeVar

from ..exceptions import FieldError
from ..models import Client, Route
from . import fields

T = TypeVar("T")


class FieldKind(Enum):
    STRING = "string"
    UINT64 = "uint64"
    INT64 = "int64"
    TIMESTAMP = "timestamp"
    ADDRESS = "address"
    IP = "ip"
    ROUTE_ADDRESS = "route_address"


def _verbatim(text: str) -> str:
    return text


FIELD_PARSERS: Mapping[FieldKind, Callable[[str], Any]] = MappingProxyType(
    {
        FieldKind.STRING: _verbatim,
        FieldKind.UINT64: fields.parse_uint64,
        FieldKind.INT64: fields.parse_int64,
        FieldKind.TIMESTAMP: fields.parse_timestamp,
        FieldKind.ADDRESS: fields.parse_address,
        FieldKind.IP: fields.parse_ip,
        FieldKind.ROUTE_ADDRESS: fields.parse_route_address,
    }
)


@dataclass(frozen=True)
class FieldSpec:
    """One column of a record schema: the record attribute and its kind."""

    name: str
    kind: FieldKind

    def parse(self, text: str) -> Any:
        return FIELD_PARSERS[self.kind](text)


Schema = Tuple[FieldSpec, ...]

# Common Name,Real Address,Bytes Received,Bytes Sent,Connected Since
CLIENT_SCHEMA: Schema = (
    FieldSpec("common_name", FieldKind.STRING),
    FieldSpec("real_address", FieldKind.ADDRESS),
    FieldSpec("bytes_received", FieldKind.UINT64),
    FieldSpec("bytes_sent", FieldKind.UINT64),
    FieldSpec("connected_since", FieldKind.TIMESTAMP),
)

# Virtual Address,Common Name,Real Address,Last Ref
ROUTE_SCHEMA: Schema = (
    FieldSpec("virtual_address", FieldKind.ROUTE_ADDRESS),
    FieldSpec("common_name", FieldKind.STRING),
    FieldSpec("real_address", FieldKind.ADDRESS),
    FieldSpec("last_ref", FieldKind.TIMESTAMP),
)


def fill_values(schema: Schema, parts: Sequence[str]) -> Dict[str, Any]:
    """
    Parse ``parts`` against ``schema`` position by position.

    Stops at the shorter of the two sequences, so surplus columns are
    ignored and missing trailing columns are simply absent from the result.

    Raises:
        FieldError: For the first field that fails to parse.
    """
    values: Dict[str, Any] = {}
    for spec, text in zip(schema, parts):
        try:
            values[spec.name] = spec.parse(text)
        except FieldError as exc:
            raise FieldError(f"{spec.name}: {exc}", field=spec.name) from exc
    return values


def fill_record(record_cls: Type[T], schema: Schema, parts: Sequence[str]) -> T:
    """Build a ``record_cls`` instance from the positional text fields."""
    return record_cls(**fill_values(schema, parts))


def parse_client(parts: Sequence[str]) -> Client:
    return fill_record(Client, CLIENT_SCHEMA, parts)


def parse_route(parts: Sequence[str]) -> Route:
    return fill_record(Route, ROUTE_SCHEMA, parts)

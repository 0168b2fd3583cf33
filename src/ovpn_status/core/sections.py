"""Section detection for the status report state machine."""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from ..constants import (
    CLIENT_LIST_HEADER,
    END_MARKER,
    GLOBAL_STATS_HEADER,
    ROUTING_TABLE_HEADER,
    UPDATED_PREFIX,
)
from ..exceptions import UnexpectedTextError


class Section(Enum):
    UNKNOWN = "unknown"
    CLIENTS = "clients"
    ROUTES = "routes"
    STATS = "stats"
    END = "end"


class LineAction(Enum):
    STOP = "stop"          # terminal marker, parsing ends successfully
    SKIP = "skip"          # section header, carries no record
    UPDATED = "updated"    # report generation timestamp
    RECORD = "record"      # data or column-header line of the current section


class Classification(NamedTuple):
    section: Section
    action: LineAction


_HEADERS = (
    (CLIENT_LIST_HEADER, Section.CLIENTS),
    (ROUTING_TABLE_HEADER, Section.ROUTES),
    (GLOBAL_STATS_HEADER, Section.STATS),
)


def classify_line(text: str, current: Section) -> Classification:
    """
    Decide what ``text`` is, given the section the parser is currently in.

    Checks run in a fixed order: terminal marker, section headers, the
    ``Updated,`` line, then data for the current section. ``Updated,`` never
    changes the section.

    Raises:
        UnexpectedTextError: For data text seen before any section header.
    """
    if text == "" or text == END_MARKER:
        return Classification(Section.END, LineAction.STOP)

    for marker, section in _HEADERS:
        if marker in text:
            return Classification(section, LineAction.SKIP)

    if text.startswith(UPDATED_PREFIX):
        return Classification(current, LineAction.UPDATED)

    if current is Section.UNKNOWN:
        raise UnexpectedTextError("Unexpected text encountered outside any known section")
    if current is Section.END:
        return Classification(current, LineAction.SKIP)
    return Classification(current, LineAction.RECORD)

"""Line-by-line driver that turns a status report into a ``Snapshot``.

The parser consumes one line at a time with no lookahead. Section headers
switch the active record parser; an empty line or ``END`` stops parsing.
Any field error aborts the whole parse and is re-raised as
``StatusParseError`` carrying the 1-based line number.
"""
from __future__ import annotations

import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from ..config import Settings, load_config
from ..constants import (
    CLIENT_COLUMN_LABEL,
    DEFAULT_ENCODING,
    FIELD_SEPARATOR,
    MAX_QUEUE_LABEL,
    ROUTE_COLUMN_LABEL,
    UPDATED_PREFIX,
)
from ..exceptions import FieldError, ParserError, StatusParseError
from ..models import Client, Route, Snapshot
from .fields import parse_timestamp, parse_uint64
from .schema import parse_client, parse_route
from .sections import LineAction, Section, classify_line


class StatusParser:
    """
    Incremental status report parser.

    Feed lines with ``feed`` until it returns False (terminal marker) or the
    input runs out, then call ``snapshot`` for the frozen result.
    """

    def __init__(self) -> None:
        self.section = Section.UNKNOWN
        self.line_number = 0
        self.updated: Optional[datetime] = None
        self.clients: List[Client] = []
        self.routes: List[Route] = []
        self.max_queue_length = 0
        self._handlers: Dict[Section, Callable[[str], None]] = {
            Section.CLIENTS: self._parse_client,
            Section.ROUTES: self._parse_route,
            Section.STATS: self._parse_stat,
        }

    @property
    def finished(self) -> bool:
        return self.section is Section.END

    def feed(self, text: str) -> bool:
        """
        Process one line of text, without its line terminator.

        Returns:
            False once the terminal marker has been seen, True otherwise.
        Raises:
            StatusParseError: If the line cannot be parsed.
        """
        self.line_number += 1
        try:
            return self._process(text)
        except ParserError as exc:
            raise StatusParseError(self.line_number, str(exc)) from exc

    def snapshot(self) -> Snapshot:
        return Snapshot(
            updated=self.updated,
            clients=tuple(self.clients),
            routes=tuple(self.routes),
            max_queue_length=self.max_queue_length,
        )

    def _process(self, text: str) -> bool:
        section, action = classify_line(text, self.section)
        if section is not self.section:
            logging.debug("Line %d: entering section %s", self.line_number, section.value)
            self.section = section

        if action is LineAction.STOP:
            return False
        if action is LineAction.UPDATED:
            self.updated = parse_timestamp(text[len(UPDATED_PREFIX):])
        elif action is LineAction.RECORD:
            self._handlers[self.section](text)
        return True

    def _is_column_header(self, parts: List[str], label: str) -> bool:
        if parts[0] == label:
            logging.debug("Line %d: skipping column header row", self.line_number)
            return True
        return False

    def _parse_client(self, text: str) -> None:
        parts = text.split(FIELD_SEPARATOR)
        try:
            client = parse_client(parts)
        except FieldError:
            if self._is_column_header(parts, CLIENT_COLUMN_LABEL):
                return
            raise
        self.clients.append(client)

    def _parse_route(self, text: str) -> None:
        parts = text.split(FIELD_SEPARATOR)
        try:
            route = parse_route(parts)
        except FieldError:
            if self._is_column_header(parts, ROUTE_COLUMN_LABEL):
                return
            raise
        self.routes.append(route)

    def _parse_stat(self, text: str) -> None:
        parts = text.split(FIELD_SEPARATOR)
        if MAX_QUEUE_LABEL not in parts[0]:
            logging.debug("Line %d: ignoring stats entry %r", self.line_number, parts[0])
            return
        if len(parts) < 2:
            raise FieldError(f"missing value for {parts[0]!r}", field="max_queue_length")
        self.max_queue_length = parse_uint64(parts[1])


def parse(stream: Iterable[str]) -> Snapshot:
    """
    Parse an OpenVPN status report from an iterable of text lines.

    Args:
        stream: An open text file, ``io.StringIO`` or any iterable of lines.
            Trailing line terminators are stripped.

    Returns:
        The parsed ``Snapshot``. Input that ends without ``END`` is accepted.
    Raises:
        StatusParseError: If any line fails to parse. No partial snapshot
            is returned.
    """
    if isinstance(stream, str):
        raise TypeError("parse() expects an iterable of lines; use parse_string() for text")

    parser = StatusParser()
    for line in stream:
        if not parser.feed(line.rstrip("\r\n")):
            break

    snapshot = parser.snapshot()
    logging.info(
        "Parsed status report: %d clients, %d routes in %d lines.",
        len(snapshot.clients),
        len(snapshot.routes),
        parser.line_number,
    )
    return snapshot


def parse_string(text: str) -> Snapshot:
    """Parse a status report held in memory. Lines break at line feeds only."""
    return parse(io.StringIO(text))


def parse_file(
    path: str | Path | None = None,
    *,
    settings: Settings | None = None,
    encoding: str | None = None,
) -> Snapshot:
    """
    Open a status file, parse it and close it again.

    Settings are only consulted for what the caller leaves out. With an
    explicit ``path`` and no ``settings`` nothing is loaded and the file is
    read as UTF-8 unless ``encoding`` says otherwise.

    Args:
        path: The status file. Defaults to ``settings.status_file``.
        settings: Settings supplying the default path and the file encoding.
            Loaded with ``load_config`` when needed and omitted.
        encoding: Overrides the encoding from ``settings``.

    Raises:
        ConfigError: If settings had to be loaded and are invalid.
        OSError: If the file cannot be opened or read.
        StatusParseError: If the contents fail to parse.
    """
    if settings is None and path is None:
        settings = load_config()

    status_path = Path(path) if path is not None else settings.status_file
    if encoding is None:
        encoding = settings.encoding if settings is not None else DEFAULT_ENCODING

    logging.debug("Reading status file %s", status_path)
    with open(status_path, "r", encoding=encoding) as fh:
        return parse(fh)

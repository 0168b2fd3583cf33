"""Custom exception types for the ovpn_status package."""

from __future__ import annotations

from typing import Optional


class OvpnStatusError(Exception):
    """Base exception class for all package-specific errors."""

    pass


class ParserError(OvpnStatusError):
    """Raised for errors while parsing a status report."""

    pass


class FieldError(ParserError):
    """Raised when a single field fails its typed parse."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnexpectedTextError(ParserError):
    """Raised for data lines that appear before any section header."""

    pass


class StatusParseError(ParserError):
    """
    Raised by the driver when a line cannot be parsed.

    Wraps the original error with the 1-based line number it occurred on.
    The original exception is available as ``__cause__``.
    """

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"Error on line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


class ConfigError(OvpnStatusError):
    """Raised for configuration-related errors."""

    pass

from __future__ import annotations

import logging
import re
from ipaddress import ip_address
from pathlib import Path
from typing import Optional


class AddressMaskingFilter(logging.Filter):
    """Filter to mask client IP addresses in log messages"""

    # Candidates only; each match is confirmed with ipaddress before masking
    PATTERNS = {
        "ipv6": re.compile(
            r"(?<![\w:])(?:[0-9a-f]{0,4}:){2,7}"
            r"(?:(?:\d{1,3}\.){3}\d{1,3}|[0-9a-f]{0,4})(?![\w:])",
            re.IGNORECASE,
        ),
        "ipv4": re.compile(r"(?<![\w.])(?:\d{1,3}\.){3}\d{1,3}(?!\w|\.\d)"),
    }
    MASK = "[MASKED_IP]"

    @classmethod
    def _mask(cls, match: re.Match) -> str:
        try:
            ip_address(match.group(0))
        except ValueError:
            return match.group(0)
        return cls.MASK

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern in self.PATTERNS.values():
            message = pattern.sub(self._mask, message)
        record.msg = message
        record.args = ()
        return True


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    mask_addresses: bool = False,
) -> None:
    """Setup root logging with an optional log file and address masking"""

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if mask_addresses:
        if not any(isinstance(f, AddressMaskingFilter) for f in root_logger.filters):
            root_logger.addFilter(AddressMaskingFilter())

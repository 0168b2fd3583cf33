"""Test configuration and shared status report fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

SAMPLE_STATUS = """\
OpenVPN CLIENT LIST
Updated,Thu Nov  5 15:34:43 2015
Common Name,Real Address,Bytes Received,Bytes Sent,Connected Since
test1,6.6.6.6:1000,100,98,Thu Nov  5 15:34:43 2015
ROUTING TABLE
Virtual Address,Common Name,Real Address,Last Ref
10.0.0.1,test1,6.6.6.6:1000,Thu Nov  5 15:34:43 2015
10.1.0.1C,test1,6.6.6.6:1000,Thu Nov  5 15:34:43 2015
10.3.0.1/16,test1,6.6.6.6:1000,Thu Nov  5 15:34:43 2015
GLOBAL STATS
Max bcast / mcast queue length,39
END
"""


@pytest.fixture
def sample_status() -> str:
    """The reference status report with one client and three routes."""
    return SAMPLE_STATUS


@pytest.fixture
def status_file(tmp_path: Path) -> Path:
    """Write the reference status report to a temporary file."""
    path = tmp_path / "openvpn-status.log"
    path.write_text(SAMPLE_STATUS)
    return path


@pytest.fixture
def reset_logging():
    """Restore the root logger after tests that reconfigure it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    filters = root.filters[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.filters = filters
    root.setLevel(level)

import logging

import pytest

from ovpn_status.logging_config import AddressMaskingFilter, setup_logging


@pytest.fixture
def log_record():
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="",
        args=(),
        exc_info=None,
    )


def test_masking_filter_masks_ipv4(log_record):
    log_record.msg = "Client test1 connected from %s"
    log_record.args = ("6.6.6.6:1000",)
    AddressMaskingFilter().filter(log_record)
    assert log_record.getMessage() == "Client test1 connected from [MASKED_IP]:1000"


def test_masking_filter_masks_ipv6(log_record):
    log_record.msg = "Route 2001:db8:0:0:0:0:0:1 added"
    AddressMaskingFilter().filter(log_record)
    assert "2001:db8" not in log_record.getMessage()


def test_masking_filter_keeps_other_text(log_record):
    log_record.msg = "Parsed status report: 1 clients, 3 routes in 12 lines."
    assert AddressMaskingFilter().filter(log_record) is True
    assert log_record.getMessage() == "Parsed status report: 1 clients, 3 routes in 12 lines."


def test_masking_filter_masks_compressed_ipv6(log_record):
    log_record.msg = "peer %s connected"
    log_record.args = ("2001:db8::1",)
    AddressMaskingFilter().filter(log_record)
    assert log_record.getMessage() == "peer [MASKED_IP] connected"


def test_masking_filter_masks_bracketed_ipv6_endpoint(log_record):
    log_record.msg = "Client from [fe80::1]:1194."
    AddressMaskingFilter().filter(log_record)
    assert log_record.getMessage() == "Client from [[MASKED_IP]]:1194."


def test_masking_filter_masks_ipv4_mapped_ipv6(log_record):
    log_record.msg = "Route ::ffff:10.0.0.1 added"
    AddressMaskingFilter().filter(log_record)
    assert log_record.getMessage() == "Route [MASKED_IP] added"


@pytest.mark.parametrize(
    "text",
    [
        "Updated Thu Nov 5 15:34:43 2015",
        "Connected since 15:34:43",
        "Version 2.4.12 loaded",
        "Fingerprint aa:bb:cc",
    ],
)
def test_masking_filter_keeps_times_and_non_addresses(log_record, text):
    log_record.msg = text
    AddressMaskingFilter().filter(log_record)
    assert log_record.getMessage() == text


def test_setup_logging_sets_level_and_handler(reset_logging):
    setup_logging("debug")
    root = reset_logging
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_setup_logging_with_file(reset_logging, tmp_path):
    log_file = tmp_path / "ovpn_status.log"
    setup_logging("INFO", log_file=log_file)
    logging.info("hello from test")
    for handler in reset_logging.handlers:
        handler.flush()
    assert "hello from test" in log_file.read_text()


def test_setup_logging_adds_mask_filter_once(reset_logging):
    setup_logging(mask_addresses=True)
    setup_logging(mask_addresses=True)
    masks = [f for f in reset_logging.filters if isinstance(f, AddressMaskingFilter)]
    assert len(masks) == 1

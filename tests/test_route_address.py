from ipaddress import IPv4Address, IPv6Address, ip_interface

import pytest

from ovpn_status.core.fields import parse_route_address
from ovpn_status.exceptions import FieldError


def test_bare_ipv4_gets_full_prefix():
    r = parse_route_address("10.0.0.1")
    assert r.ip == IPv4Address("10.0.0.1")
    assert r.prefixlen == 32
    assert r.remote is False
    assert str(r.netmask) == "255.255.255.255"


def test_remote_suffix_is_stripped():
    r = parse_route_address("10.1.0.1C")
    assert r.ip == IPv4Address("10.1.0.1")
    assert r.prefixlen == 32
    assert r.remote is True
    assert str(r) == "10.1.0.1/32C"


def test_cidr_keeps_host_bits():
    r = parse_route_address("10.3.0.1/16")
    assert r.ip == IPv4Address("10.3.0.1")
    assert r.prefixlen == 16
    assert r.remote is False
    assert r.network == ip_interface("10.3.0.1/16")
    assert str(r.netmask) == "255.255.0.0"


def test_remote_cidr():
    r = parse_route_address("192.168.10.0/24C")
    assert r.ip == IPv4Address("192.168.10.0")
    assert r.prefixlen == 24
    assert r.remote is True


def test_bare_ipv6_gets_128_prefix():
    r = parse_route_address("2001:db8::1")
    assert r.ip == IPv6Address("2001:db8::1")
    assert r.prefixlen == 128
    assert r.version == 6


def test_ipv6_cidr_with_remote_marker():
    r = parse_route_address("2001:db8::/64C")
    assert r.ip == IPv6Address("2001:db8::")
    assert r.prefixlen == 64
    assert r.remote is True


def test_ipv4_mapped_address_uses_parsed_family():
    r = parse_route_address("::ffff:10.0.0.1")
    assert r.version == 6
    assert r.prefixlen == 128


@pytest.mark.parametrize(
    "text",
    [
        "",
        "C",
        "10.0.0",
        "10.0.0.1/33",
        "10.0.0.1/",
        "not-an-ip",
        "10.0.0.1CC",
        "10.3.0.1/255.255.0.0",
        "10.3.0.1/0.0.255.255",
        "10.3.0.1/+16",
        "10.3.0.1/\u0661\u0666",
    ],
)
def test_invalid_route_address(text):
    with pytest.raises(FieldError, match="invalid route address"):
        parse_route_address(text)

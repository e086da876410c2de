"""
Unit tests for models.address module.

Tests:
- host/port splitting for IPv4, names, bracketed and bare IPv6
- Default port injection and explicit port pass-through
- Wire compaction of default ports
- Rejection of malformed addresses
"""

import pytest

from stampkit.core.exceptions import InvalidField
from stampkit.models.address import (
    compact_address,
    join_host_port,
    normalize_address,
    split_host_port,
)


class TestSplitHostPort:
    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            ("8.8.8.8", ("8.8.8.8", None)),
            ("8.8.8.8:53", ("8.8.8.8", 53)),
            ("dns.example.com", ("dns.example.com", None)),
            ("dns.example.com:443", ("dns.example.com", 443)),
            ("[2001:db8::1]", ("2001:db8::1", None)),
            ("[2001:db8::1]:853", ("2001:db8::1", 853)),
            ("[::1]:1", ("::1", 1)),
            ("2001:db8::1", ("2001:db8::1", None)),
            ("1.1.1.1:0", ("1.1.1.1", 0)),
            ("1.1.1.1:65535", ("1.1.1.1", 65535)),
        ],
    )
    def test_valid(self, address, expected):
        assert split_host_port(address) == expected

    @pytest.mark.parametrize(
        "address",
        [
            "",
            "[2001:db8::1",
            "[2001:db8::1]x",
            "[2001:db8::1]:",
            "[1.2.3.4]",
            "[not-an-ip]",
            "a]b",
            "host:abc",
            "host:",
            "host:70000",
            "host:-1",
            ":53",
            "2001:db8::zz",
        ],
    )
    def test_invalid(self, address):
        with pytest.raises(InvalidField):
            split_host_port(address)


class TestJoinHostPort:
    def test_ipv4(self):
        assert join_host_port("1.2.3.4", 53) == "1.2.3.4:53"

    def test_ipv6_bracketed(self):
        assert join_host_port("::1", 1) == "[::1]:1"

    def test_no_port(self):
        assert join_host_port("2001:db8::1", None) == "[2001:db8::1]"
        assert join_host_port("example.com", None) == "example.com"


class TestNormalizeAddress:
    """Canonical address held by a stamp."""

    def test_default_port_appended(self):
        assert normalize_address("8.8.8.8", 53) == "8.8.8.8:53"
        assert normalize_address("9.9.9.9", 853) == "9.9.9.9:853"

    def test_explicit_port_preserved(self):
        assert normalize_address("1.1.1.1:8853", 853) == "1.1.1.1:8853"

    def test_explicit_port_kept_as_written(self):
        assert normalize_address("1.1.1.1:0853", 853) == "1.1.1.1:0853"

    def test_bracketed_ipv6_gets_default(self):
        assert (
            normalize_address("[2001:4860:4860::8888]", 853) == "[2001:4860:4860::8888]:853"
        )

    def test_bare_ipv6_bracketed(self):
        assert normalize_address("2001:db8::1", 853) == "[2001:db8::1]:853"
        assert normalize_address("2001:db8::1", None) == "[2001:db8::1]"

    def test_hostname_gets_default(self):
        assert normalize_address("dns.example.com", 853) == "dns.example.com:853"

    def test_no_default(self):
        assert normalize_address("127.0.0.1", None) == "127.0.0.1"

    def test_empty_stays_empty(self):
        assert normalize_address("", 853) == ""

    def test_invalid_raises(self):
        with pytest.raises(InvalidField):
            normalize_address("host:port", 53)


class TestCompactAddress:
    """Wire form of a canonical address."""

    def test_default_port_stripped(self):
        assert compact_address("8.8.8.8:53", 53) == "8.8.8.8"

    def test_ipv6_default_port_stripped(self):
        assert compact_address("[2001:db8::1]:853", 853) == "[2001:db8::1]"

    def test_other_port_kept(self):
        assert compact_address("8.8.8.8:8053", 53) == "8.8.8.8:8053"

    def test_zero_padded_port_kept(self):
        assert compact_address("8.8.8.8:053", 53) == "8.8.8.8:053"

    def test_no_default(self):
        assert compact_address("127.0.0.1:53", None) == "127.0.0.1:53"

    def test_empty(self):
        assert compact_address("", 53) == ""

    @pytest.mark.parametrize(
        ("address", "port"),
        [
            ("8.8.8.8", 53),
            ("1.1.1.1:8853", 853),
            ("[2001:4860:4860::8888]", 853),
            ("dns.example.com", 853),
        ],
    )
    def test_inverse_of_normalize(self, address, port):
        canonical = normalize_address(address, port)
        assert normalize_address(compact_address(canonical, port), port) == canonical

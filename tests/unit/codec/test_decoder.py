"""
Unit tests for codec.decoder module.

Tests:
- Decoding every reference vector into the right stamp class and fields
- Default port reported after decode
- Re-encoding after decode: reference vectors and every protocol variant
- Canonical re-encoding of non-canonical records
- Optional trailing bootstrap array
- Each error kind: BadScheme, BadEncoding, UnknownProtocol, TruncatedInput,
  TrailingBytes, InvalidField
"""

import logging

import pytest

from stampkit.codec.decoder import decode_payload, decode_record, decode_stamp
from stampkit.codec.encoder import encode_payload, encode_stamp
from stampkit.codec.wire import write_item
from stampkit.core.exceptions import (
    BadEncoding,
    BadScheme,
    DecodeError,
    InvalidField,
    TrailingBytes,
    TruncatedInput,
    UnknownProtocol,
)
from stampkit.models import (
    DNSCryptStamp,
    DoHStamp,
    DoTStamp,
    ODoHRelayStamp,
    ODoHTargetStamp,
    PlainStamp,
    ServerProperties,
)
from tests.fixtures.stamps import (
    ALL_PROPS,
    DNSCRYPT_STAMP,
    DOH_ONE_HASH_STAMP,
    DOH_QUAD9_STAMP,
    ODOH_RELAY_STAMP,
    ODOH_TARGET_STAMP,
    PK1,
    PK2,
    PLAIN_STAMP,
    PLAIN_WITH_PORT_STAMP,
    REFERENCE_VECTORS,
)


NO_PROPS = b"\x00" * 8


def _sdns(record: bytes) -> str:
    return "sdns://" + encode_payload(record)


class TestReferenceVectors:
    def test_dnscrypt(self):
        stamp = decode_stamp(DNSCRYPT_STAMP)
        assert isinstance(stamp, DNSCryptStamp)
        assert stamp.properties == ALL_PROPS
        assert stamp.server_address == "127.0.0.1"
        assert stamp.server_public_key == PK1
        assert stamp.provider_name == "2.dnscrypt-cert.localhost"

    def test_doh_one_hash(self):
        stamp = decode_stamp(DOH_ONE_HASH_STAMP)
        assert isinstance(stamp, DoHStamp)
        assert stamp.hashes == (PK1,)
        assert stamp.hostname == "example.com"
        assert stamp.path == "/dns-query"
        assert stamp.bootstrap_ips == ()

    def test_doh_quad9(self):
        stamp = decode_stamp(DOH_QUAD9_STAMP)
        assert isinstance(stamp, DoHStamp)
        assert stamp.properties == ServerProperties.NO_LOG | ServerProperties.NO_FILTER
        assert stamp.server_address == "9.9.9.10"
        assert stamp.hashes == ()
        assert stamp.hostname == "dns9.quad9.net:443"

    def test_odoh_target(self):
        stamp = decode_stamp(ODOH_TARGET_STAMP)
        assert stamp == ODoHTargetStamp("odoh.example.com", path="/target", properties=ALL_PROPS)

    def test_odoh_relay(self):
        stamp = decode_stamp(ODOH_RELAY_STAMP)
        assert isinstance(stamp, ODoHRelayStamp)
        assert stamp.server_address == "[::1]:1"
        assert stamp.hashes == (b"\xab\xcd", b"\x01\x23")
        assert stamp.hostname == "doh.example.com"
        assert stamp.path == "/relay"

    def test_plain_reports_default_port(self):
        stamp = decode_stamp(PLAIN_STAMP)
        assert isinstance(stamp, PlainStamp)
        assert stamp.server_address == "8.8.8.8:53"
        assert stamp.to_string() == PLAIN_STAMP

    def test_plain_with_port(self):
        stamp = decode_stamp(PLAIN_WITH_PORT_STAMP)
        assert stamp.server_address == "8.8.8.8:8053"
        assert stamp.to_string() == PLAIN_WITH_PORT_STAMP


class TestRoundTrip:
    @pytest.mark.parametrize("text", REFERENCE_VECTORS)
    def test_reference_vector_reencodes_identically(self, text):
        assert decode_stamp(text).to_string() == text

    def test_encode_decode_encode(self, any_stamp):
        text = encode_stamp(any_stamp)
        decoded = decode_stamp(text)
        assert decoded == any_stamp
        assert decoded.to_string() == text

    def test_default_port_survives(self, dot_stamp, doq_stamp):
        assert decode_stamp(dot_stamp.to_string()).server_address == "9.9.9.9:853"
        assert decode_stamp(doq_stamp.to_string()).server_address == (
            "[2001:4860:4860::8888]:853"
        )

    def test_bootstrap_order_survives(self, doh_stamp):
        decoded = decode_stamp(doh_stamp.to_string())
        assert decoded.bootstrap_ips == ("9.9.9.9", "149.112.112.112", "2620:fe::fe")  # type: ignore[union-attr]

    def test_hashes_survive(self, doh_stamp):
        decoded = decode_stamp(doh_stamp.to_string())
        assert decoded.hashes == (PK1, PK2)  # type: ignore[union-attr]


class TestCanonicalization:
    """Non-canonical records decode, then re-encode in canonical form."""

    def test_default_port_on_wire(self):
        record = b"\x00" + NO_PROPS + write_item(b"8.8.8.8:53")
        stamp = decode_record(record)
        assert stamp.server_address == "8.8.8.8:53"  # type: ignore[union-attr]
        assert stamp.to_bytes() == b"\x00" + NO_PROPS + write_item(b"8.8.8.8")

    def test_bare_ipv6_bracketed(self):
        stamp = decode_record(b"\x81" + write_item(b"::1"))
        assert stamp.server_address == "[::1]"  # type: ignore[union-attr]
        assert stamp.to_bytes() == b"\x81" + write_item(b"[::1]")

    def test_zero_length_hash_dropped(self):
        record = b"\x03" + NO_PROPS + b"\x00" + b"\x80\x00" + b"\x01h"
        stamp = decode_record(record)
        assert stamp.hashes == ()  # type: ignore[union-attr]
        assert stamp.to_bytes() == b"\x03" + NO_PROPS + b"\x00" + b"\x00" + b"\x01h"

    def test_explicit_empty_bootstrap_dropped(self):
        record = b"\x03" + NO_PROPS + b"\x00\x00\x01h\x00"
        assert decode_record(record).to_bytes() == record[:-1]


class TestOptionalBootstrap:
    def test_absent(self):
        record = b"\x03" + NO_PROPS + b"\x079.9.9.9\x00\x01h"
        stamp = decode_record(record)
        assert isinstance(stamp, DoTStamp)
        assert stamp.bootstrap_ips == ()

    def test_explicit_empty(self):
        record = b"\x03" + NO_PROPS + b"\x079.9.9.9\x00\x01h\x00"
        assert decode_record(record).bootstrap_ips == ()  # type: ignore[union-attr]

    def test_present(self):
        record = b"\x04" + NO_PROPS + b"\x079.9.9.9\x00\x01h\x87149.112\x071.1.1.1"
        assert decode_record(record).bootstrap_ips == ("149.112", "1.1.1.1")  # type: ignore[union-attr]

    def test_not_read_for_odoh_relay(self):
        record = b"\x85" + NO_PROPS + b"\x00\x00\x01h\x01/\x00"
        with pytest.raises(TrailingBytes):
            decode_record(record)


class TestSchemeAndEncoding:
    @pytest.mark.parametrize(
        "text",
        ["", "AAcAAAAAAAAABzguOC44Ljg", "https://example.com", "SDNS://AAcA", "sdns:/AAcA"],
    )
    def test_bad_scheme(self, text):
        with pytest.raises(BadScheme):
            decode_stamp(text)

    def test_non_str(self):
        with pytest.raises(BadScheme):
            decode_stamp(PLAIN_STAMP.encode())  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "payload",
        ["AAcA+AAA", "AAcA/AAA", "AAc A", "A", "AAAAA", "AA=A", "AA===", "é"],
    )
    def test_bad_encoding(self, payload):
        with pytest.raises(BadEncoding):
            decode_stamp("sdns://" + payload)

    def test_padding_tolerated(self):
        assert decode_stamp(PLAIN_STAMP + "=") == decode_stamp(PLAIN_STAMP)

    def test_decode_payload(self):
        assert decode_payload("-_8") == b"\xfb\xff"
        assert decode_payload("-_8=") == b"\xfb\xff"
        assert decode_payload("") == b""

    def test_invalid_utf8_hostname(self):
        record = b"\x03" + NO_PROPS + b"\x00\x00\x01\xff"
        with pytest.raises(BadEncoding, match="hostname is not valid UTF-8"):
            decode_stamp(_sdns(record))


class TestStructure:
    def test_unknown_protocol(self):
        with pytest.raises(UnknownProtocol) as exc_info:
            decode_stamp(_sdns(b"\x42" + NO_PROPS))
        assert exc_info.value.tag == 0x42
        assert "0x42" in str(exc_info.value)

    @pytest.mark.parametrize("tag", [0x06, 0x80, 0x82, 0xFF])
    def test_unregistered_tags(self, tag):
        with pytest.raises(UnknownProtocol):
            decode_record(bytes([tag]) + NO_PROPS + b"\x00")

    def test_empty_record(self):
        with pytest.raises(TruncatedInput, match="empty record"):
            decode_stamp("sdns://")

    @pytest.mark.parametrize(
        "record",
        [
            b"\x00",
            b"\x00\x07\x00\x00",
            b"\x00" + NO_PROPS,
            b"\x00" + NO_PROPS + b"\x098.8.8.8",
            b"\x01" + NO_PROPS + b"\x071.2.3.4\x20" + PK1[:16],
            b"\x02" + NO_PROPS + b"\x00\x82\xab\xcd",
            b"\x02" + NO_PROPS + b"\x00\x00\x01h",
            b"\x05" + NO_PROPS + b"\x01h",
            b"\x81",
        ],
    )
    def test_truncated(self, record):
        with pytest.raises(TruncatedInput):
            decode_stamp(_sdns(record))

    def test_trailing_bytes(self):
        record = b"\x00" + NO_PROPS + b"\x078.8.8.8\xff\xff"
        with pytest.raises(TrailingBytes) as exc_info:
            decode_stamp(_sdns(record))
        assert exc_info.value.count == 2

    def test_trailing_after_bootstrap(self):
        record = b"\x03" + NO_PROPS + b"\x00\x00\x01h\x00\x00"
        with pytest.raises(TrailingBytes):
            decode_record(record)

    def test_relay_has_no_properties(self):
        record = b"\x81" + write_item(b"1.2.3.4:443")
        assert decode_record(record).server_address == "1.2.3.4:443"  # type: ignore[union-attr]

    def test_errors_are_decode_errors(self):
        for exc in (BadScheme, BadEncoding, UnknownProtocol, TruncatedInput, TrailingBytes):
            assert issubclass(exc, DecodeError)


class TestFieldValidation:
    @pytest.mark.parametrize("size", [31, 33])
    def test_dnscrypt_key_length(self, size):
        record = (
            b"\x01" + NO_PROPS + write_item(b"1.2.3.4") + write_item(b"k" * size) + write_item(b"p")
        )
        with pytest.raises(InvalidField, match="must be 32 bytes"):
            decode_stamp(_sdns(record))

    def test_invalid_address(self):
        record = b"\x00" + NO_PROPS + write_item(b"8.8.8.8:dns")
        with pytest.raises(InvalidField, match="Invalid port"):
            decode_stamp(_sdns(record))


class TestLogging:
    def test_decode_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="stampkit"):
            decode_stamp(DOH_QUAD9_STAMP)
        record = next(r for r in caplog.records if r.getMessage() == "stamp_decoded")
        assert record.structured_kv["protocol"] == "DoH"

    def test_rejection_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="stampkit"), pytest.raises(BadScheme):
            decode_stamp("https://example.com")
        record = next(r for r in caplog.records if r.getMessage() == "stamp_rejected")
        assert record.structured_kv["error"] == "BadScheme"

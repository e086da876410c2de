"""Stamp decoder: ``sdns://`` URL or binary record to stamp value.

Decoding is strict. Every structural mismatch is a
[DecodeError][stampkit.core.exceptions.DecodeError] subclass; a record that
is well-formed but carries an illegal value (a 31-byte DNSCrypt key, an
unparseable address) raises
[InvalidField][stampkit.core.exceptions.InvalidField] from the stamp
constructor.

Non-canonical records decode to the canonical stamp and re-encode in
canonical form: a default port stored on the wire, a bare IPv6 literal,
zero-length array items and an explicit empty bootstrap array are not kept.

Examples:
    ```python
    stamp = decode_stamp("sdns://AAcAAAAAAAAABzguOC44Ljg")
    stamp.server_address   # '8.8.8.8:53'
    stamp.to_string()      # 'sdns://AAcAAAAAAAAABzguOC44Ljg'
    ```
"""

from __future__ import annotations

import base64
import binascii
import re

from stampkit.core.exceptions import (
    BadEncoding,
    BadScheme,
    StampError,
    TrailingBytes,
    TruncatedInput,
    UnknownProtocol,
)
from stampkit.core.logger import Logger
from stampkit.models.constants import STAMP_SCHEME, StampProtocol
from stampkit.models.stamp import STAMP_TYPES, Stamp

from .layouts import LAYOUTS, FieldKind, FieldSpec
from .wire import read_array, read_item, read_properties


_logger = Logger(__name__)

_PAYLOAD_PATTERN = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def _text(raw: bytes, name: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BadEncoding(f"{name} is not valid UTF-8: {e.reason}") from e


def _decode_field(spec: FieldSpec, data: bytes, offset: int) -> tuple[object, int]:
    kind = spec.kind
    if kind is FieldKind.PROPERTIES:
        return read_properties(data, offset)
    if kind is FieldKind.BYTES:
        return read_item(data, offset)
    if kind in (FieldKind.ADDRESS, FieldKind.TEXT):
        raw, offset = read_item(data, offset)
        return _text(raw, spec.name), offset
    if kind is FieldKind.BYTES_ARRAY:
        items, offset = read_array(data, offset)
        return tuple(items), offset
    if kind is FieldKind.TEXT_ARRAY:
        items, offset = read_array(data, offset)
        return tuple(_text(item, spec.name) for item in items), offset
    raise AssertionError(f"unhandled field kind {kind}")


def decode_payload(payload: str) -> bytes:
    """Decode base64url text; padding is optional.

    Raises:
        BadEncoding: If the text has characters outside the URL-safe
            alphabet, misplaced padding, or an impossible length.
    """
    if not _PAYLOAD_PATTERN.fullmatch(payload):
        raise BadEncoding("payload is not base64url")
    stripped = payload.rstrip("=")
    if len(stripped) % 4 == 1:
        raise BadEncoding("payload has an invalid base64url length")
    try:
        return base64.urlsafe_b64decode(stripped + "=" * (-len(stripped) % 4))
    except (binascii.Error, ValueError) as e:
        raise BadEncoding(f"payload is not base64url: {e}") from e


def decode_record(data: bytes) -> Stamp:
    """Parse a binary record (tag byte included) into a stamp.

    Raises:
        UnknownProtocol: If the tag byte is not registered.
        TruncatedInput: If the record is empty or ends inside a field.
        TrailingBytes: If data remains after the last field.
        BadEncoding: If a string field is not UTF-8.
        InvalidField: If a field value is rejected by the stamp class.
    """
    if not data:
        raise TruncatedInput("empty record")
    try:
        protocol = StampProtocol(data[0])
    except ValueError:
        raise UnknownProtocol(data[0]) from None

    offset = 1
    kwargs: dict[str, object] = {}
    for spec in LAYOUTS[protocol]:
        if spec.optional and offset == len(data):
            break
        kwargs[spec.name], offset = _decode_field(spec, data, offset)

    if offset != len(data):
        raise TrailingBytes(len(data) - offset)

    stamp = STAMP_TYPES[protocol](**kwargs)  # type: ignore[arg-type]
    _logger.debug("stamp_decoded", protocol=protocol.label, size=len(data))
    return stamp


def decode_stamp(text: str) -> Stamp:
    """Parse an ``sdns://`` URL into a stamp.

    Raises:
        BadScheme: If *text* does not start with ``sdns://``.
        BadEncoding: If the payload is not base64url.
        DecodeError: Any other [decode_record()][stampkit.codec.decoder.decode_record]
            failure.
        InvalidField: If a field value is rejected by the stamp class.
    """
    try:
        if not isinstance(text, str) or not text.startswith(STAMP_SCHEME):
            raise BadScheme(f"stamps must start with {STAMP_SCHEME!r}")
        return decode_record(decode_payload(text[len(STAMP_SCHEME) :]))
    except StampError as e:
        _logger.debug("stamp_rejected", error=type(e).__name__, reason=str(e))
        raise

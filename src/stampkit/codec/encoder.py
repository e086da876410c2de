"""Stamp encoder: stamp value to binary record and ``sdns://`` URL.

Walks the protocol's entry in [LAYOUTS][stampkit.codec.layouts.LAYOUTS] and
frames each field with the [wire][stampkit.codec.wire] primitives. Addresses
are written in their compact form, without a port equal to the protocol
default (see [compact_address()][stampkit.models.address.compact_address]).

Examples:
    ```python
    from stampkit.models import PlainStamp, ServerProperties

    encode_stamp(PlainStamp("8.8.8.8", ServerProperties.all()))
    # 'sdns://AAcAAAAAAAAABzguOC44Ljg'
    ```
"""

from __future__ import annotations

import base64

from stampkit.core.config import DEFAULT_CONFIG, CodecConfig
from stampkit.core.exceptions import InvalidField
from stampkit.core.logger import Logger
from stampkit.models.address import compact_address
from stampkit.models.builder import StampBuilder
from stampkit.models.constants import STAMP_SCHEME, StampProtocol
from stampkit.models.stamp import STAMP_TYPES, Stamp

from .layouts import LAYOUTS, FieldKind, FieldSpec
from .wire import write_array, write_item, write_properties


_logger = Logger(__name__)

_STAMP_CLASSES = tuple(STAMP_TYPES.values())


def _utf8(value: str, name: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidField(f"{name} cannot be encoded as UTF-8: {e.reason}") from e


def _encode_field(spec: FieldSpec, value: object, protocol: StampProtocol) -> bytes:
    kind = spec.kind
    if kind is FieldKind.PROPERTIES:
        return write_properties(int(value))  # type: ignore[call-overload]
    if kind is FieldKind.ADDRESS:
        wire_address = compact_address(value, protocol.default_port)  # type: ignore[arg-type]
        return write_item(_utf8(wire_address, spec.name))
    if kind is FieldKind.BYTES:
        return write_item(value)  # type: ignore[arg-type]
    if kind is FieldKind.TEXT:
        return write_item(_utf8(value, spec.name))  # type: ignore[arg-type]
    if kind is FieldKind.BYTES_ARRAY:
        return write_array(value)  # type: ignore[arg-type]
    if kind is FieldKind.TEXT_ARRAY:
        return write_array([_utf8(item, spec.name) for item in value])  # type: ignore[attr-defined]
    raise AssertionError(f"unhandled field kind {kind}")


def encode_record(stamp: Stamp | StampBuilder, config: CodecConfig | None = None) -> bytes:
    """Return the binary record for *stamp*, tag byte included.

    Args:
        stamp: A frozen stamp, or a builder that is built first.
        config: Encoder options; defaults to
            [DEFAULT_CONFIG][stampkit.core.config.DEFAULT_CONFIG].

    Raises:
        InvalidField: If *stamp* is not a stamp, the builder is incomplete,
            or a field cannot be framed (e.g. an array item over 127 bytes).
    """
    if isinstance(stamp, StampBuilder):
        stamp = stamp.build()
    if not isinstance(stamp, _STAMP_CLASSES):
        raise InvalidField(f"Expected a stamp, got {type(stamp).__name__}")
    config = config or DEFAULT_CONFIG

    protocol = stamp.protocol
    out = bytearray([protocol])
    for spec in LAYOUTS[protocol]:
        value = getattr(stamp, spec.name)
        if spec.optional and not value and not config.emit_empty_bootstrap_ips:
            continue
        out += _encode_field(spec, value, protocol)

    record = bytes(out)
    _logger.debug("stamp_encoded", protocol=protocol.label, size=len(record))
    return record


def encode_payload(record: bytes) -> str:
    """Return *record* as unpadded base64url text."""
    return base64.urlsafe_b64encode(record).rstrip(b"=").decode("ascii")


def encode_stamp(stamp: Stamp | StampBuilder, config: CodecConfig | None = None) -> str:
    """Return the ``sdns://`` URL for *stamp*.

    See Also:
        [encode_record()][stampkit.codec.encoder.encode_record]: Arguments
            and errors.
    """
    return STAMP_SCHEME + encode_payload(encode_record(stamp, config))

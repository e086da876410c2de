"""Codec layer: ``sdns://`` text and binary records to and from stamp values.

Depends on ``stampkit.core`` and ``stampkit.models``. All functions are pure;
they share no mutable state and may be called from any number of threads.

Attributes:
    encode_stamp: Stamp to ``sdns://`` URL.
        See [encode_stamp()][stampkit.codec.encoder.encode_stamp].
    decode_stamp: ``sdns://`` URL to stamp.
        See [decode_stamp()][stampkit.codec.decoder.decode_stamp].
    encode_relay_pair / decode_relay_pair: Relay+target pair form.
        See [stampkit.codec.pair][].
    read_item / write_item / read_array / write_array: Wire framing.
        See [stampkit.codec.wire][].
"""

from .decoder import decode_payload, decode_record, decode_stamp
from .encoder import encode_payload, encode_record, encode_stamp
from .layouts import LAYOUTS, FieldKind, FieldSpec
from .pair import decode_relay_pair, encode_relay_pair
from .wire import (
    read_array,
    read_item,
    read_properties,
    read_varint,
    write_array,
    write_item,
    write_properties,
    write_varint,
)


__all__ = [
    "LAYOUTS",
    "FieldKind",
    "FieldSpec",
    "decode_payload",
    "decode_record",
    "decode_relay_pair",
    "decode_stamp",
    "encode_payload",
    "encode_record",
    "encode_relay_pair",
    "encode_stamp",
    "read_array",
    "read_item",
    "read_properties",
    "read_varint",
    "write_array",
    "write_item",
    "write_properties",
    "write_varint",
]

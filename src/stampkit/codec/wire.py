"""
Binary framing primitives shared by every stamp record layout.

All readers take ``(data, offset)`` and return ``(value, new_offset)``; all
writers return fresh ``bytes``. Nothing here knows about protocols.

Framing:

* **varint** -- base-128 little endian; bit 7 of each byte means "more
  length bytes follow".
* **item** (length-prefixed) -- ``varint(len(value)) || value``.
* **array** -- items back to back, each with a one-byte header whose low 7
  bits hold the length and whose bit 7 means "another item follows". An
  empty array is the single byte ``0x00``; zero-length items are skipped
  when reading.
* **properties** -- 8-byte little-endian unsigned integer.

Examples:
    ```python
    write_item(b"8.8.8.8")                 # b'\\x078.8.8.8'
    write_array([b"\\xab\\xcd", b"\\x01\\x23"])  # b'\\x82\\xab\\xcd\\x02\\x01\\x23'
    write_array([])                        # b'\\x00'
    read_item(b"\\x02hi!", 0)               # (b'hi', 3)
    ```
"""

from __future__ import annotations

from collections.abc import Sequence

from stampkit.core.exceptions import InvalidField, TruncatedInput
from stampkit.models.constants import PROPERTIES_MAX, PROPERTIES_SIZE


_MORE = 0x80
_LOW7 = 0x7F

#: Largest item an array header can describe.
ARRAY_ITEM_MAX = _LOW7

#: Upper bound on varint length bytes; ten bytes cover a 64-bit length.
_VARINT_MAX_BYTES = 10


def read_exact(data: bytes, offset: int, n: int) -> tuple[bytes, int]:
    """Return the next *n* bytes at *offset*.

    Raises:
        TruncatedInput: If fewer than *n* bytes remain.
    """
    end = offset + n
    if end > len(data):
        raise TruncatedInput(f"needed {n} byte(s) at offset {offset}, {len(data) - offset} left")
    return bytes(data[offset:end]), end


def write_varint(value: int) -> bytes:
    """Encode a non-negative integer as a base-128 little-endian varint."""
    if value < 0:
        raise InvalidField(f"Cannot encode negative length: {value}")
    out = bytearray()
    while value > _LOW7:
        out.append((value & _LOW7) | _MORE)
        value >>= 7
    out.append(value)
    return bytes(out)


def read_varint(data: bytes, offset: int) -> tuple[int, int]:
    """Decode a base-128 little-endian varint starting at *offset*.

    Raises:
        TruncatedInput: If the data ends before a byte with bit 7 clear.
        InvalidField: If the varint is longer than ten bytes.
    """
    value = 0
    shift = 0
    for _ in range(_VARINT_MAX_BYTES):
        if offset >= len(data):
            raise TruncatedInput(f"length varint truncated at offset {offset}")
        byte = data[offset]
        offset += 1
        value |= (byte & _LOW7) << shift
        if not byte & _MORE:
            return value, offset
        shift += 7
    raise InvalidField(f"length varint longer than {_VARINT_MAX_BYTES} bytes")


def write_item(value: bytes) -> bytes:
    """Frame *value* as a length-prefixed item."""
    return write_varint(len(value)) + value


def read_item(data: bytes, offset: int) -> tuple[bytes, int]:
    """Read one length-prefixed item.

    Raises:
        TruncatedInput: If the length or the payload is incomplete.
    """
    length, offset = read_varint(data, offset)
    return read_exact(data, offset, length)


def write_array(items: Sequence[bytes]) -> bytes:
    """Frame an ordered sequence of byte strings.

    Raises:
        InvalidField: If an item is empty or longer than 127 bytes.
    """
    if not items:
        return bytes([0])
    out = bytearray()
    last = len(items) - 1
    for i, item in enumerate(items):
        if not item:
            raise InvalidField(f"array item {i} is empty")
        if len(item) > ARRAY_ITEM_MAX:
            raise InvalidField(
                f"array item {i} is {len(item)} bytes, the limit is {ARRAY_ITEM_MAX}"
            )
        out.append(len(item) | (_MORE if i < last else 0))
        out += item
    return bytes(out)


def read_array(data: bytes, offset: int) -> tuple[list[bytes], int]:
    """Read items until one whose header has bit 7 clear.

    Raises:
        TruncatedInput: If a header or an item payload is incomplete.
    """
    items: list[bytes] = []
    while True:
        header, offset = read_exact(data, offset, 1)
        length = header[0] & _LOW7
        item, offset = read_exact(data, offset, length)
        if length:
            items.append(item)
        if not header[0] & _MORE:
            return items, offset


def write_properties(value: int) -> bytes:
    if not 0 <= value <= PROPERTIES_MAX:
        raise InvalidField(f"properties out of range for 64 bits: {value}")
    return int(value).to_bytes(PROPERTIES_SIZE, "little")


def read_properties(data: bytes, offset: int) -> tuple[int, int]:
    raw, offset = read_exact(data, offset, PROPERTIES_SIZE)
    return int.from_bytes(raw, "little"), offset

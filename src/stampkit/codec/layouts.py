"""Record layout per protocol tag.

A record is the tag byte followed by the fields listed in ``LAYOUTS`` for
that tag, in that order. The encoder and the decoder both walk this table,
so a layout is defined exactly once.

```text
tag   protocol              fields after the tag byte
0x00  Plain                 props  addr
0x01  DNSCrypt              props  addr  pk(32)  provider_name
0x02  DoH                   props  addr  hashes  hostname  path  [bootstrap_ips]
0x03  DoT                   props  addr  hashes  hostname  [bootstrap_ips]
0x04  DoQ                   props  addr  hashes  hostname  [bootstrap_ips]
0x05  ODoH target           props  hostname  path
0x81  Anonymized relay      addr
0x85  ODoH relay            props  addr  hashes  hostname  path
```

``[bootstrap_ips]`` is optional trailing data: present when bytes remain
after the previous field.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from stampkit.models.constants import StampProtocol


class FieldKind(Enum):
    """How a field is framed on the wire."""

    PROPERTIES = "properties"
    ADDRESS = "address"
    BYTES = "bytes"
    TEXT = "text"
    BYTES_ARRAY = "bytes_array"
    TEXT_ARRAY = "text_array"


class FieldSpec(NamedTuple):
    """One field of a record layout.

    Attributes:
        name: Attribute name on the stamp class.
        kind: Wire framing.
        optional: Trailing field that may be absent from the record.
    """

    name: str
    kind: FieldKind
    optional: bool = False


_PROPS = FieldSpec("properties", FieldKind.PROPERTIES)
_ADDR = FieldSpec("server_address", FieldKind.ADDRESS)
_HASHES = FieldSpec("hashes", FieldKind.BYTES_ARRAY)
_HOSTNAME = FieldSpec("hostname", FieldKind.TEXT)
_PATH = FieldSpec("path", FieldKind.TEXT)
_BOOTSTRAP = FieldSpec("bootstrap_ips", FieldKind.TEXT_ARRAY, optional=True)

LAYOUTS: dict[StampProtocol, tuple[FieldSpec, ...]] = {
    StampProtocol.PLAIN: (_PROPS, _ADDR),
    StampProtocol.DNSCRYPT: (
        _PROPS,
        _ADDR,
        FieldSpec("server_public_key", FieldKind.BYTES),
        FieldSpec("provider_name", FieldKind.TEXT),
    ),
    StampProtocol.DOH: (_PROPS, _ADDR, _HASHES, _HOSTNAME, _PATH, _BOOTSTRAP),
    StampProtocol.DOT: (_PROPS, _ADDR, _HASHES, _HOSTNAME, _BOOTSTRAP),
    StampProtocol.DOQ: (_PROPS, _ADDR, _HASHES, _HOSTNAME, _BOOTSTRAP),
    StampProtocol.ODOH_TARGET: (_PROPS, _HOSTNAME, _PATH),
    StampProtocol.DNSCRYPT_RELAY: (_ADDR,),
    StampProtocol.ODOH_RELAY: (_PROPS, _ADDR, _HASHES, _HOSTNAME, _PATH),
}

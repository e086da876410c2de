"""Frozen dataclasses describing DNS stamps, with zero I/O.

Every stamp class uses ``@dataclass(frozen=True, slots=True)`` and validates
in ``__post_init__`` so invalid instances never escape the constructor.
Validation errors are always
[InvalidField][stampkit.core.exceptions.InvalidField].

Attributes:
    Stamp: Union of the eight per-protocol stamp classes
        ([PlainStamp][stampkit.models.stamp.PlainStamp],
        [DNSCryptStamp][stampkit.models.stamp.DNSCryptStamp],
        [DoHStamp][stampkit.models.stamp.DoHStamp],
        [DoTStamp][stampkit.models.stamp.DoTStamp],
        [DoQStamp][stampkit.models.stamp.DoQStamp],
        [ODoHTargetStamp][stampkit.models.stamp.ODoHTargetStamp],
        [DNSCryptRelayStamp][stampkit.models.stamp.DNSCryptRelayStamp],
        [ODoHRelayStamp][stampkit.models.stamp.ODoHRelayStamp]).
    StampBuilder: Mutable builder finalized into one of the stamp classes.
    RelayAndServerStamp: A relay stamp paired with its target.
    StampProtocol: Protocol tag registry with labels and default ports.
    ServerProperties: DNSSEC / no-log / no-filter flags.

Note:
    Stamp classes expose ``to_string()`` and ``from_string()`` for
    convenience. They import ``stampkit.codec`` lazily, inside the method, so
    the models layer keeps no import-time dependency on the codec.
"""

from .address import compact_address, join_host_port, normalize_address, split_host_port
from .builder import StampBuilder
from .constants import (
    DNSCRYPT_PUBLIC_KEY_SIZE,
    STAMP_SCHEME,
    ServerProperties,
    StampProtocol,
)
from .relay_pair import RelayAndServerStamp
from .stamp import (
    STAMP_TYPES,
    DNSCryptRelayStamp,
    DNSCryptStamp,
    DoHStamp,
    DoQStamp,
    DoTStamp,
    ODoHRelayStamp,
    ODoHTargetStamp,
    PlainStamp,
    Stamp,
)


__all__ = [
    "DNSCRYPT_PUBLIC_KEY_SIZE",
    "STAMP_SCHEME",
    "STAMP_TYPES",
    "DNSCryptRelayStamp",
    "DNSCryptStamp",
    "DoHStamp",
    "DoQStamp",
    "DoTStamp",
    "ODoHRelayStamp",
    "ODoHTargetStamp",
    "PlainStamp",
    "RelayAndServerStamp",
    "ServerProperties",
    "Stamp",
    "StampBuilder",
    "StampProtocol",
    "compact_address",
    "join_host_port",
    "normalize_address",
    "split_host_port",
]

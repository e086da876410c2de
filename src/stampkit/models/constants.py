"""Shared constants for the models layer.

Defines the protocol tag registry and the informal property flags carried by
every stamp. Placing them here lets the models and codec layers share them
without circular imports.

See Also:
    [stampkit.models.stamp][]: One stamp class per
        [StampProtocol][stampkit.models.constants.StampProtocol] member.
    [stampkit.codec.layouts][]: Field order per protocol tag.
"""

from __future__ import annotations

from enum import KEEP, IntEnum, IntFlag


STAMP_SCHEME = "sdns://"
DNSCRYPT_PUBLIC_KEY_SIZE = 32
PROPERTIES_SIZE = 8
PROPERTIES_MAX = (1 << (8 * PROPERTIES_SIZE)) - 1


class StampProtocol(IntEnum):
    """Protocol tag byte selecting the record layout of a stamp.

    Attributes:
        PLAIN: Unencrypted DNS over UDP/TCP.
        DNSCRYPT: DNSCrypt resolver.
        DOH: DNS-over-HTTPS.
        DOT: DNS-over-TLS.
        DOQ: DNS-over-QUIC.
        ODOH_TARGET: Oblivious DoH target.
        DNSCRYPT_RELAY: Anonymized DNSCrypt relay.
        ODOH_RELAY: Oblivious DoH relay.

    Examples:
        ```python
        StampProtocol(0x02)              # StampProtocol.DOH
        StampProtocol.DOT.default_port   # 853
        StampProtocol.DOH.default_port   # None
        StampProtocol.DNSCRYPT_RELAY.label  # 'Anonymized DNSCrypt relay'
        ```
    """

    PLAIN = 0x00
    DNSCRYPT = 0x01
    DOH = 0x02
    DOT = 0x03
    DOQ = 0x04
    ODOH_TARGET = 0x05
    DNSCRYPT_RELAY = 0x81
    ODOH_RELAY = 0x85

    @property
    def label(self) -> str:
        """Human-readable protocol name."""
        return _LABELS[self]

    @property
    def default_port(self) -> int | None:
        """Port implied when a stamp address has none, or ``None``.

        Only plain DNS, DoT and DoQ imply a port. DoH and the ODoH variants
        rely on the HTTPS convention; DNSCrypt addresses are used as given.
        """
        return _DEFAULT_PORTS.get(self)


_LABELS: dict[StampProtocol, str] = {
    StampProtocol.PLAIN: "Plain",
    StampProtocol.DNSCRYPT: "DNSCrypt",
    StampProtocol.DOH: "DoH",
    StampProtocol.DOT: "DoT",
    StampProtocol.DOQ: "DoQ",
    StampProtocol.ODOH_TARGET: "ODoH target",
    StampProtocol.DNSCRYPT_RELAY: "Anonymized DNSCrypt relay",
    StampProtocol.ODOH_RELAY: "ODoH relay",
}

DEFAULT_DNS_PORT = 53
DEFAULT_TLS_DNS_PORT = 853

_DEFAULT_PORTS: dict[StampProtocol, int] = {
    StampProtocol.PLAIN: DEFAULT_DNS_PORT,
    StampProtocol.DOT: DEFAULT_TLS_DNS_PORT,
    StampProtocol.DOQ: DEFAULT_TLS_DNS_PORT,
}


class ServerProperties(IntFlag, boundary=KEEP):
    """Informal properties a resolver operator declares about its service.

    Stored on the wire as an 8-byte little-endian integer. Bits beyond the
    three known flags are reserved; they are kept as-is so stamps produced by
    newer tools round-trip unchanged.

    Attributes:
        DNSSEC: The resolver validates DNSSEC.
        NO_LOG: The resolver does not keep query logs.
        NO_FILTER: The resolver does not block or rewrite answers.

    Examples:
        ```python
        props = ServerProperties.DNSSEC | ServerProperties.NO_LOG
        int(props)                      # 3
        ServerProperties(0x107) & 0x100  # reserved bit kept
        ```
    """

    NONE = 0
    DNSSEC = 1 << 0
    NO_LOG = 1 << 1
    NO_FILTER = 1 << 2

    @classmethod
    def all(cls) -> ServerProperties:
        return cls.DNSSEC | cls.NO_LOG | cls.NO_FILTER

"""
Immutable DNS stamp values, one class per protocol.

A stamp describes how to reach and authenticate an encrypted-DNS resolver.
Each protocol carries a different set of fields, so each gets its own frozen
dataclass holding only the fields legal for it: a DoH stamp with a DNSCrypt
public key cannot be constructed at all.

All validation happens in ``__post_init__``; invalid instances never escape
the constructor. ``server_address`` is normalized on construction (see
[normalize_address()][stampkit.models.address.normalize_address]), so a
plain DNS stamp created with ``"8.8.8.8"`` reports ``"8.8.8.8:53"``.

Examples:
    ```python
    stamp = DoTStamp("9.9.9.9", hostname="dns.quad9.net",
                     bootstrap_ips=["9.9.9.9", "149.112.112.112"])
    stamp.server_address   # '9.9.9.9:853'
    text = stamp.to_string()
    DoTStamp.from_string(text) == stamp   # True
    ```

See Also:
    [StampBuilder][stampkit.models.builder.StampBuilder]: Mutable builder for
        callers that fill fields incrementally.
    [encode_stamp()][stampkit.codec.encoder.encode_stamp] /
        [decode_stamp()][stampkit.codec.decoder.decode_stamp]: The codec.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Self, TypeAlias

from stampkit.core.exceptions import InvalidField

from ._validation import (
    coerce_bytes,
    coerce_bytes_tuple,
    coerce_properties,
    coerce_str_tuple,
    validate_str,
)
from .address import normalize_address
from .constants import DNSCRYPT_PUBLIC_KEY_SIZE, ServerProperties, StampProtocol


if TYPE_CHECKING:
    from stampkit.core.config import CodecConfig


class _StampBase:
    """Behaviour shared by every stamp class; holds no fields."""

    __slots__ = ()

    protocol: ClassVar[StampProtocol]

    def to_bytes(self, config: CodecConfig | None = None) -> bytes:
        """Return the binary record (tag byte included)."""
        from stampkit.codec.encoder import encode_record  # noqa: PLC0415  # codec imports models

        return encode_record(self, config)  # type: ignore[arg-type]

    def to_string(self, config: CodecConfig | None = None) -> str:
        """Return the ``sdns://`` URL of this stamp."""
        from stampkit.codec.encoder import encode_stamp  # noqa: PLC0415

        return encode_stamp(self, config)  # type: ignore[arg-type]

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Decode an ``sdns://`` URL, requiring it to describe this protocol.

        Raises:
            DecodeError: If the text is not a valid stamp.
            InvalidField: If the stamp is valid but of another protocol.
        """
        from stampkit.codec.decoder import decode_stamp  # noqa: PLC0415

        stamp = decode_stamp(text)
        if not isinstance(stamp, cls):
            raise InvalidField(
                f"Expected a {cls.protocol.label} stamp, got {stamp.protocol.label}"
            )
        return stamp

    def __str__(self) -> str:
        return self.to_string()

    # Frozen dataclasses require object.__setattr__ inside __post_init__
    def _set(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def _init_properties(self) -> None:
        self._set("properties", coerce_properties(self.properties))  # type: ignore[attr-defined]

    def _init_address(self, *, required: bool) -> None:
        address = self.server_address  # type: ignore[attr-defined]
        validate_str(address, "server_address", allow_empty=not required)
        self._set("server_address", normalize_address(address, self.protocol.default_port))

    def _init_hostname(self, name: str = "hostname") -> None:
        validate_str(getattr(self, name), name)

    def _init_path(self) -> None:
        validate_str(self.path, "path")  # type: ignore[attr-defined]

    def _init_hashes(self) -> None:
        hashes = coerce_bytes_tuple(self.hashes, "hashes")  # type: ignore[attr-defined]
        for i, value in enumerate(hashes):
            if not value:
                raise InvalidField(f"hashes[{i}] must not be empty")
        self._set("hashes", hashes)

    def _init_bootstrap_ips(self) -> None:
        ips = coerce_str_tuple(self.bootstrap_ips, "bootstrap_ips")  # type: ignore[attr-defined]
        for i, value in enumerate(ips):
            if not value:
                raise InvalidField(f"bootstrap_ips[{i}] must not be empty")
        self._set("bootstrap_ips", ips)


@dataclass(frozen=True, slots=True)
class PlainStamp(_StampBase):
    """Unencrypted DNS resolver.

    Attributes:
        server_address: ``host[:port]``; port 53 when omitted.
        properties: Informal [ServerProperties][stampkit.models.constants.ServerProperties].
    """

    server_address: str
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.PLAIN

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_address(required=True)


@dataclass(frozen=True, slots=True)
class DNSCryptStamp(_StampBase):
    """DNSCrypt resolver.

    Attributes:
        server_address: ``host[:port]``; used as given, no default port.
        server_public_key: The provider's 32-byte Ed25519 signing key.
        provider_name: Provider name, e.g. ``2.dnscrypt-cert.example.com``.
        properties: Informal [ServerProperties][stampkit.models.constants.ServerProperties].

    Raises:
        InvalidField: If the public key is not exactly 32 bytes.
    """

    server_address: str
    server_public_key: bytes
    provider_name: str
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.DNSCRYPT

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_address(required=True)
        key = coerce_bytes(self.server_public_key, "server_public_key")
        if len(key) != DNSCRYPT_PUBLIC_KEY_SIZE:
            raise InvalidField(
                f"server_public_key must be {DNSCRYPT_PUBLIC_KEY_SIZE} bytes, got {len(key)}"
            )
        self._set("server_public_key", key)
        self._init_hostname("provider_name")


@dataclass(frozen=True, slots=True)
class DoHStamp(_StampBase):
    """DNS-over-HTTPS resolver.

    Attributes:
        server_address: ``host[:port]`` or empty to resolve ``hostname``.
        hostname: TLS server name (may carry a ``:port``).
        path: HTTP path, e.g. ``/dns-query``.
        hashes: SHA-256 digests of certificates in the chain, in order.
        bootstrap_ips: Resolvers used to look up ``hostname``.
        properties: Informal [ServerProperties][stampkit.models.constants.ServerProperties].
    """

    server_address: str
    hostname: str
    path: str
    hashes: tuple[bytes, ...] = ()
    bootstrap_ips: tuple[str, ...] = ()
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.DOH

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_address(required=False)
        self._init_hashes()
        self._init_hostname()
        self._init_path()
        self._init_bootstrap_ips()


@dataclass(frozen=True, slots=True)
class DoTStamp(_StampBase):
    """DNS-over-TLS resolver; port 853 when the address has none."""

    server_address: str
    hostname: str
    hashes: tuple[bytes, ...] = ()
    bootstrap_ips: tuple[str, ...] = ()
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.DOT

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_address(required=False)
        self._init_hashes()
        self._init_hostname()
        self._init_bootstrap_ips()


@dataclass(frozen=True, slots=True)
class DoQStamp(_StampBase):
    """DNS-over-QUIC resolver; port 853 when the address has none."""

    server_address: str
    hostname: str
    hashes: tuple[bytes, ...] = ()
    bootstrap_ips: tuple[str, ...] = ()
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.DOQ

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_address(required=False)
        self._init_hashes()
        self._init_hostname()
        self._init_bootstrap_ips()


@dataclass(frozen=True, slots=True)
class ODoHTargetStamp(_StampBase):
    """Oblivious DoH target: reached only through an ODoH relay, so no address."""

    hostname: str
    path: str
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.ODOH_TARGET

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_hostname()
        self._init_path()


@dataclass(frozen=True, slots=True)
class DNSCryptRelayStamp(_StampBase):
    """Anonymized DNSCrypt relay. Carries nothing but its address."""

    server_address: str

    protocol: ClassVar[StampProtocol] = StampProtocol.DNSCRYPT_RELAY

    def __post_init__(self) -> None:
        self._init_address(required=True)


@dataclass(frozen=True, slots=True)
class ODoHRelayStamp(_StampBase):
    """Oblivious DoH relay."""

    server_address: str
    hostname: str
    path: str
    hashes: tuple[bytes, ...] = ()
    properties: ServerProperties = ServerProperties.NONE

    protocol: ClassVar[StampProtocol] = StampProtocol.ODOH_RELAY

    def __post_init__(self) -> None:
        self._init_properties()
        self._init_address(required=False)
        self._init_hashes()
        self._init_hostname()
        self._init_path()


Stamp: TypeAlias = (
    PlainStamp
    | DNSCryptStamp
    | DoHStamp
    | DoTStamp
    | DoQStamp
    | ODoHTargetStamp
    | DNSCryptRelayStamp
    | ODoHRelayStamp
)

STAMP_TYPES: dict[StampProtocol, type[Stamp]] = {
    cls.protocol: cls
    for cls in (
        PlainStamp,
        DNSCryptStamp,
        DoHStamp,
        DoTStamp,
        DoQStamp,
        ODoHTargetStamp,
        DNSCryptRelayStamp,
        ODoHRelayStamp,
    )
}

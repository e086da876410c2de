"""Mutable stamp builder.

[StampBuilder][stampkit.models.builder.StampBuilder] accepts every field of
every protocol, so callers that assemble a stamp step by step (from a form,
a resolver list, command-line flags) can fill it in any order. ``build()``
then checks the combination against the protocol and returns the matching
frozen stamp class.

Examples:
    ```python
    builder = StampBuilder(StampProtocol.DOH)
    builder.properties |= ServerProperties.DNSSEC
    builder.server_address = "9.9.9.10"
    builder.hostname = "dns9.quad9.net:443"
    builder.path = "/dns-query"
    builder.to_string()
    # 'sdns://AgEAAAAAAAAACDkuOS4...'
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from stampkit.core.exceptions import InvalidField

from .constants import ServerProperties, StampProtocol
from .stamp import STAMP_TYPES, Stamp


if TYPE_CHECKING:
    from stampkit.core.config import CodecConfig


# Fields every protocol requires; the rest of a stamp class's fields have defaults.
_REQUIRED: dict[StampProtocol, tuple[str, ...]] = {
    StampProtocol.PLAIN: ("server_address",),
    StampProtocol.DNSCRYPT: ("server_address", "server_public_key", "provider_name"),
    StampProtocol.DOH: ("server_address", "hostname", "path"),
    StampProtocol.DOT: ("server_address", "hostname"),
    StampProtocol.DOQ: ("server_address", "hostname"),
    StampProtocol.ODOH_TARGET: ("hostname", "path"),
    StampProtocol.DNSCRYPT_RELAY: ("server_address",),
    StampProtocol.ODOH_RELAY: ("server_address", "hostname", "path"),
}


@dataclass
class StampBuilder:
    """Mutable collection of stamp fields, finalized by ``build()``.

    Unset optional fields are ``None``. Sequence fields start empty; an empty
    sequence is treated as unset.
    """

    protocol: StampProtocol
    properties: ServerProperties = ServerProperties.NONE
    server_address: str | None = None
    server_public_key: bytes | None = None
    provider_name: str | None = None
    hostname: str | None = None
    path: str | None = None
    hashes: list[bytes] = field(default_factory=list)
    bootstrap_ips: list[str] = field(default_factory=list)

    @classmethod
    def from_stamp(cls, stamp: Stamp) -> StampBuilder:
        """Return an editable copy of *stamp*."""
        builder = cls(stamp.protocol)
        for f in fields(stamp):
            value = getattr(stamp, f.name)
            if isinstance(value, tuple):
                value = list(value)
            setattr(builder, f.name, value)
        return builder

    def _is_set(self, name: str) -> bool:
        value = getattr(self, name)
        if name == "properties":
            return bool(value)
        if isinstance(value, list):
            return bool(value)
        return value is not None

    def build(self) -> Stamp:
        """Return the frozen stamp described by the current fields.

        Raises:
            InvalidField: If the protocol is unknown, a required field is
                missing, a field the protocol does not carry is set, or a
                field value is invalid.
        """
        try:
            protocol = StampProtocol(self.protocol)
        except ValueError:
            raise InvalidField(f"Unknown protocol: {self.protocol!r}") from None

        cls = STAMP_TYPES[protocol]
        allowed = {f.name for f in fields(cls)}

        missing = [name for name in _REQUIRED[protocol] if getattr(self, name) is None]
        if missing:
            raise InvalidField(f"{protocol.label} stamp requires: {', '.join(missing)}")

        illegal = [
            f.name
            for f in fields(self)
            if f.name != "protocol" and f.name not in allowed and self._is_set(f.name)
        ]
        if illegal:
            raise InvalidField(f"{protocol.label} stamp does not carry: {', '.join(illegal)}")

        kwargs: dict[str, Any] = {
            name: getattr(self, name)
            for name in allowed
            if getattr(self, name) is not None
        }
        return cls(**kwargs)

    def to_string(self, config: CodecConfig | None = None) -> str:
        """Build the stamp and return its ``sdns://`` URL."""
        return self.build().to_string(config)

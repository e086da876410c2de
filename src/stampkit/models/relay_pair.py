"""Relay and target stamp pair used for anonymized and oblivious DNS routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stampkit.core.exceptions import InvalidField

from .stamp import STAMP_TYPES, Stamp


if TYPE_CHECKING:
    from stampkit.core.config import CodecConfig


_STAMP_CLASSES = tuple(STAMP_TYPES.values())


@dataclass(frozen=True, slots=True)
class RelayAndServerStamp:
    """A relay stamp and the target stamp queries are forwarded to.

    Textual form: the relay's ``sdns://`` URL, a ``/``, then the target's
    payload, e.g. ``sdns://hQcA.../BQcA...``.

    Attributes:
        relay: Stamp of the relay (usually ODoH relay or anonymized DNSCrypt relay).
        target: Stamp of the resolver behind the relay.
    """

    relay: Stamp
    target: Stamp

    def __post_init__(self) -> None:
        for name in ("relay", "target"):
            value = getattr(self, name)
            if not isinstance(value, _STAMP_CLASSES):
                raise InvalidField(f"{name} must be a stamp, got {type(value).__name__}")

    def to_string(self, config: CodecConfig | None = None) -> str:
        from stampkit.codec.pair import encode_relay_pair  # noqa: PLC0415  # codec imports models

        return encode_relay_pair(self, config)

    @classmethod
    def from_string(cls, text: str) -> RelayAndServerStamp:
        from stampkit.codec.pair import decode_relay_pair  # noqa: PLC0415

        return decode_relay_pair(text)

    def __str__(self) -> str:
        return self.to_string()

"""Relay+target pair codec.

A pair is written as one URI: the relay payload in the authority position
and the target payload as a single path segment,
``sdns://<relay>/<target>``. The target may also carry its own scheme,
``sdns://<relay>/sdns://<target>``; both forms decode to the same pair.

The URI is split with ``rfc3986``; a query string or fragment is rejected.
"""

from __future__ import annotations

from rfc3986 import uri_reference

from stampkit.core.config import DEFAULT_CONFIG, CodecConfig
from stampkit.core.exceptions import InvalidField, MalformedPair, StampError
from stampkit.core.logger import Logger
from stampkit.models.constants import STAMP_SCHEME
from stampkit.models.relay_pair import RelayAndServerStamp

from .decoder import decode_stamp
from .encoder import encode_record, encode_payload, encode_stamp


_logger = Logger(__name__)


def _split(text: str) -> tuple[str, str]:
    if not isinstance(text, str) or not text.startswith(STAMP_SCHEME):
        raise MalformedPair(f"relay pairs must start with {STAMP_SCHEME!r}")

    uri = uri_reference(text)
    if uri.query is not None or uri.fragment is not None:
        raise MalformedPair("relay pairs must not contain a query or a fragment")
    if not uri.path:
        raise MalformedPair("missing '/' between relay and target stamps")

    relay = uri.authority or ""
    target = uri.path[1:]
    if target.startswith(STAMP_SCHEME):
        target = target[len(STAMP_SCHEME) :]
    if "/" in target:
        raise MalformedPair("relay pairs must contain exactly one '/' separator")
    if not relay or not target:
        raise MalformedPair("relay and target stamps must both be present")
    return relay, target


def decode_relay_pair(text: str) -> RelayAndServerStamp:
    """Parse ``sdns://<relay>/<target>`` into its two stamps.

    Raises:
        MalformedPair: If the separator is missing or repeated, or either
            half fails to decode. The failure of the half is chained as
            ``__cause__``.
    """
    relay_payload, target_payload = _split(text)
    halves = []
    for name, payload in (("relay", relay_payload), ("target", target_payload)):
        try:
            halves.append(decode_stamp(STAMP_SCHEME + payload))
        except StampError as e:
            raise MalformedPair(f"{name} stamp is invalid: {e}") from e

    pair = RelayAndServerStamp(relay=halves[0], target=halves[1])
    _logger.debug(
        "relay_pair_decoded",
        relay=pair.relay.protocol.label,
        target=pair.target.protocol.label,
    )
    return pair


def encode_relay_pair(pair: RelayAndServerStamp, config: CodecConfig | None = None) -> str:
    """Return the textual form of a relay+target pair.

    With ``config.prefix_pair_target`` the target half repeats the
    ``sdns://`` scheme.

    Raises:
        InvalidField: If *pair* is not a ``RelayAndServerStamp`` or a half
            cannot be encoded.
    """
    if not isinstance(pair, RelayAndServerStamp):
        raise InvalidField(f"Expected a RelayAndServerStamp, got {type(pair).__name__}")
    config = config or DEFAULT_CONFIG

    target = encode_payload(encode_record(pair.target, config))
    if config.prefix_pair_target:
        target = STAMP_SCHEME + target
    return f"{encode_stamp(pair.relay, config)}/{target}"

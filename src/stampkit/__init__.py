r"""stampkit -- DNS stamp (``sdns://``) encoder and decoder.

A DNS stamp packs everything a client needs to reach an encrypted-DNS
resolver (protocol, address, public key or certificate hashes, host name,
path, bootstrap resolvers) into one URL-safe string. stampkit converts
between that string and typed, immutable Python values.

Imports flow strictly downward:

```text
              codec           encoder, decoder, relay pairs, wire framing
             /     \
         models     |         frozen stamp classes, builder, addresses
             \     /
              core            exceptions, logging, configuration
```

Attributes:
    core: Exceptions, structured logger, YAML loading, ``CodecConfig``.
    models: Per-protocol stamp dataclasses. No I/O.
    codec: Pure encode/decode functions.

Note:
    Top-level imports (``from stampkit import decode_stamp``) use lazy
    loading and resolve on first access.

Examples:
    ```python
    from stampkit import decode_stamp

    stamp = decode_stamp("sdns://AAcAAAAAAAAABzguOC44Ljg")
    stamp.server_address   # '8.8.8.8:53'
    ```
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("stampkit")

__all__ = [
    "BadEncoding",
    "BadScheme",
    "CodecConfig",
    "DNSCryptRelayStamp",
    "DNSCryptStamp",
    "DecodeError",
    "DoHStamp",
    "DoQStamp",
    "DoTStamp",
    "InvalidField",
    "MalformedPair",
    "ODoHRelayStamp",
    "ODoHTargetStamp",
    "PlainStamp",
    "RelayAndServerStamp",
    "ServerProperties",
    "Stamp",
    "StampBuilder",
    "StampError",
    "StampProtocol",
    "TrailingBytes",
    "TruncatedInput",
    "UnknownProtocol",
    "decode_relay_pair",
    "decode_stamp",
    "encode_relay_pair",
    "encode_stamp",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BadEncoding": ("stampkit.core", "BadEncoding"),
    "BadScheme": ("stampkit.core", "BadScheme"),
    "CodecConfig": ("stampkit.core", "CodecConfig"),
    "DecodeError": ("stampkit.core", "DecodeError"),
    "InvalidField": ("stampkit.core", "InvalidField"),
    "MalformedPair": ("stampkit.core", "MalformedPair"),
    "StampError": ("stampkit.core", "StampError"),
    "TrailingBytes": ("stampkit.core", "TrailingBytes"),
    "TruncatedInput": ("stampkit.core", "TruncatedInput"),
    "UnknownProtocol": ("stampkit.core", "UnknownProtocol"),
    "DNSCryptRelayStamp": ("stampkit.models", "DNSCryptRelayStamp"),
    "DNSCryptStamp": ("stampkit.models", "DNSCryptStamp"),
    "DoHStamp": ("stampkit.models", "DoHStamp"),
    "DoQStamp": ("stampkit.models", "DoQStamp"),
    "DoTStamp": ("stampkit.models", "DoTStamp"),
    "ODoHRelayStamp": ("stampkit.models", "ODoHRelayStamp"),
    "ODoHTargetStamp": ("stampkit.models", "ODoHTargetStamp"),
    "PlainStamp": ("stampkit.models", "PlainStamp"),
    "RelayAndServerStamp": ("stampkit.models", "RelayAndServerStamp"),
    "ServerProperties": ("stampkit.models", "ServerProperties"),
    "Stamp": ("stampkit.models", "Stamp"),
    "StampBuilder": ("stampkit.models", "StampBuilder"),
    "StampProtocol": ("stampkit.models", "StampProtocol"),
    "decode_relay_pair": ("stampkit.codec", "decode_relay_pair"),
    "decode_stamp": ("stampkit.codec", "decode_stamp"),
    "encode_relay_pair": ("stampkit.codec", "encode_relay_pair"),
    "encode_stamp": ("stampkit.codec", "encode_stamp"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'stampkit' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__

"""Core layer: the foundation every other stampkit package builds on.

Sits at the bottom of the dependency graph -- depends only on third-party
libraries and is imported by ``stampkit.models`` and ``stampkit.codec``.

Attributes:
    StampError: Root of the exception hierarchy.
        See [stampkit.core.exceptions][].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][stampkit.core.logger.Logger].
    CodecConfig: Pydantic model holding the encoder options.
        See [CodecConfig][stampkit.core.config.CodecConfig].
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.
        See [load_yaml()][stampkit.core.yaml.load_yaml].
"""

from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import (
    BadEncoding,
    BadScheme,
    ConfigurationError,
    DecodeError,
    InvalidField,
    MalformedPair,
    StampError,
    TrailingBytes,
    TruncatedInput,
    UnknownProtocol,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .yaml import load_yaml


__all__ = [
    "DEFAULT_CONFIG",
    "BadEncoding",
    "BadScheme",
    "CodecConfig",
    "ConfigurationError",
    "DecodeError",
    "InvalidField",
    "Logger",
    "MalformedPair",
    "StampError",
    "StructuredFormatter",
    "TrailingBytes",
    "TruncatedInput",
    "UnknownProtocol",
    "format_kv_pairs",
    "load_yaml",
]

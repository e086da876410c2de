"""stampkit exception hierarchy.

Every failure of the codec is reported as a specific subclass so callers can
tell a malformed URL apart from an unsupported protocol or a bad field value.
Nothing is retried or recovered internally: the codec has no notion of partial
success.

Exception hierarchy:

```text
StampError (base -- never raised directly)
├── DecodeError              -- the sdns:// text could not be turned into a stamp
│   ├── BadScheme            -- missing or incorrect ``sdns://`` prefix
│   ├── BadEncoding          -- invalid base64url, or a string field that is not UTF-8
│   ├── UnknownProtocol      -- unrecognized protocol tag byte
│   ├── TruncatedInput       -- record ends before a field is complete
│   ├── TrailingBytes        -- unconsumed bytes after the last field
│   └── MalformedPair        -- relay+target pair separator missing or a half is invalid
├── InvalidField             -- a field is missing, illegal, or has the wrong size
└── ConfigurationError       -- invalid codec configuration (YAML, dict)
```

See Also:
    [decode_stamp()][stampkit.codec.decoder.decode_stamp]: Raises the
        [DecodeError][stampkit.core.exceptions.DecodeError] family.
    [encode_stamp()][stampkit.codec.encoder.encode_stamp]: Raises
        [InvalidField][stampkit.core.exceptions.InvalidField].
    [CodecConfig][stampkit.core.config.CodecConfig]: Raises
        [ConfigurationError][stampkit.core.exceptions.ConfigurationError].
"""

from __future__ import annotations


class StampError(Exception):
    """Base exception for all stampkit errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class DecodeError(StampError):
    """Base for every failure turning ``sdns://`` text into a stamp."""


class BadScheme(DecodeError):
    """The text does not start with ``sdns://``."""


class BadEncoding(DecodeError):
    """The payload is not valid base64url, or a string field is not valid UTF-8."""


class UnknownProtocol(DecodeError):
    """The record starts with a protocol tag this codec does not know.

    Attributes:
        tag: The offending tag byte.
    """

    def __init__(self, tag: int) -> None:
        super().__init__(f"unknown protocol tag 0x{tag:02x}")
        self.tag = tag


class TruncatedInput(DecodeError):
    """The record ended before the selected layout was fully read."""


class TrailingBytes(DecodeError):
    """Bytes remain after the last field of the selected layout.

    Attributes:
        count: Number of unconsumed bytes.
    """

    def __init__(self, count: int) -> None:
        super().__init__(f"{count} trailing byte(s) after the last field")
        self.count = count


class MalformedPair(DecodeError):
    """A relay+target pair is missing its separator or one half fails to decode.

    The underlying [DecodeError][stampkit.core.exceptions.DecodeError] or
    [InvalidField][stampkit.core.exceptions.InvalidField] is chained as
    ``__cause__`` when a half fails.
    """


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class InvalidField(StampError, ValueError):
    """A stamp field is missing, not allowed for the protocol, or malformed.

    Raised at construction, build, and encode time, and during decoding when a
    structurally complete record carries an invalid value (for example a
    DNSCrypt public key that is not 32 bytes long).
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(StampError):
    """Invalid or missing codec configuration (YAML file, dict, keyword)."""

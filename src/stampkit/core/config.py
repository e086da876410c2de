"""Codec configuration model.

The defaults reproduce the stamps produced by the reference implementations
byte for byte. The two switches exist for interoperability with producers
that emit the optional parts of the grammar explicitly.

Examples:
    ```python
    from stampkit.core.config import CodecConfig

    config = CodecConfig.from_yaml("stampkit.yaml")
    stamp.to_string(config)
    ```

    ```yaml
    # stampkit.yaml
    emit_empty_bootstrap_ips: true
    prefix_pair_target: false
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError
from .yaml import load_yaml


class CodecConfig(BaseModel):
    """Encoder options.

    Decoding never depends on configuration: both variants of every optional
    part are always accepted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    emit_empty_bootstrap_ips: bool = Field(
        default=False,
        description=(
            "Write a trailing empty bootstrap IP array (0x00) for DoH, DoT and DoQ "
            "stamps that have no bootstrap IPs."
        ),
    )
    prefix_pair_target: bool = Field(
        default=False,
        description="Repeat the sdns:// scheme before the target half of a relay pair.",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a configuration from a plain dictionary.

        Raises:
            ConfigurationError: If a key is unknown or a value has the wrong type.
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid codec configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """Build a configuration from a YAML file.

        See Also:
            [load_yaml()][stampkit.core.yaml.load_yaml]: Safe YAML loading.
        """
        return cls.from_dict(load_yaml(config_path))


DEFAULT_CONFIG = CodecConfig()

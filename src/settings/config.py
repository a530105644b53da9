from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "symref.toml"

NotationName = Literal["canonical", "ssa", "trace"]


class SymrefConfig(BaseModel):
    """Configuration for the symref command-line tool."""

    model_config = ConfigDict(extra="forbid")

    default_notation: NotationName = Field(
        default="canonical",
        description="Notation assumed when --from is not given",
    )
    json_output: bool = Field(
        default=False,
        description="Print JSON instead of human-readable text by default",
    )
    convert_targets: list[NotationName] = Field(
        default_factory=lambda: ["canonical", "ssa", "trace"],
        description="Notations printed by the convert command, in order",
    )

    @field_validator("convert_targets", mode="before")
    @classmethod
    def validate_convert_targets(cls, v: Any) -> Any:
        """Reject an empty or repeating list of convert targets.

        Note: this runs in `mode="before"` so the error message can quote
        the raw TOML values.
        """
        if not isinstance(v, list):
            msg = "convert_targets must be a list of notation names"
            raise TypeError(msg)

        if not v:
            msg = "convert_targets must name at least one notation"
            raise ValueError(msg)

        duplicates = sorted({item for item in v if v.count(item) > 1})
        if duplicates:
            msg = f"convert_targets repeats notations: {', '.join(duplicates)}"
            raise ValueError(msg)

        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> SymrefConfig:
    """Load configuration from symref.toml if it exists."""
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        return SymrefConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SymrefConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

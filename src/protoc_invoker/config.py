"""Pydantic configuration models for protoc-invoker.

This module provides:
- ProtoConfiguration: Proto root, include paths and compiler selection
- load_configuration: Load a ProtoConfiguration from a YAML file
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from protoc_invoker.errors import ConfigurationError


class ProtoConfiguration(BaseModel):
    """Where the protos live and how to compile them.

    All paths are checked for existence when the model is built, so an
    invalid configuration never reaches the compiler.

    Attributes:
        root_directory: Root of the proto tree (required, must exist).
        include_paths: Additional directories passed to protoc as -I flags.
        protoc_path: System protoc binary. None uses the compiler bundled
            with grpcio-tools.
        keep_descriptor_file: Leave the generated descriptor file on disk
            after it has been parsed.

    Example:
        >>> config = ProtoConfiguration(
        ...     root_directory="protos",
        ...     include_paths=["third_party/googleapis"],
        ... )
        >>> config.root_directory
        'protos'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_directory: str = Field(
        ...,
        min_length=1,
        description="Root directory of the proto tree",
    )
    include_paths: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Additional include directories for resolving imports",
    )
    protoc_path: str | None = Field(
        default=None,
        description="Path to a protoc binary (default: bundled grpc_tools compiler)",
    )
    keep_descriptor_file: bool = Field(
        default=True,
        description="Keep the temporary descriptor set file after parsing",
    )

    @field_validator("root_directory")
    @classmethod
    def root_must_exist(cls, v: str) -> str:
        """Validate that the proto root exists on disk."""
        if not Path(v).exists():
            msg = f"Proto root does not exist: {v}"
            raise ValueError(msg)
        return v

    @field_validator("include_paths")
    @classmethod
    def include_paths_must_exist(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that every include path exists on disk."""
        for include_path in v:
            if not Path(include_path).exists():
                msg = f"Include path does not exist: {include_path}"
                raise ValueError(msg)
        return v


def _resolve_relative(value: str, base_dir: Path) -> str:
    path = Path(value)
    if path.is_absolute():
        return value
    return str(base_dir / path)


def load_configuration(file_path: Path | str) -> ProtoConfiguration:
    """Load a ProtoConfiguration from a YAML file.

    Relative root and include paths are interpreted relative to the
    directory containing the YAML file.

    Args:
        file_path: Path to the YAML configuration file.

    Returns:
        Validated ProtoConfiguration.

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid.

    Example:
        >>> config = load_configuration("protos.yaml")
    """
    path = Path(file_path)

    try:
        content = path.read_text()
    except FileNotFoundError:
        raise ConfigurationError("Configuration file not found", file_path=str(path)) from None
    except OSError as e:
        raise ConfigurationError(
            "Unable to read configuration file", file_path=str(path), cause=str(e)
        ) from e

    try:
        raw_data: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError("Invalid YAML", file_path=str(path), cause=str(e)) from e

    if not isinstance(raw_data, dict):
        raise ConfigurationError("Configuration must be a YAML mapping", file_path=str(path))

    base_dir = path.parent
    data = dict(raw_data)
    if isinstance(data.get("root_directory"), str) and data["root_directory"]:
        data["root_directory"] = _resolve_relative(data["root_directory"], base_dir)
    if isinstance(data.get("include_paths"), list):
        data["include_paths"] = [
            _resolve_relative(p, base_dir) if isinstance(p, str) else p
            for p in data["include_paths"]
        ]

    try:
        return ProtoConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid proto configuration", file_path=str(path), cause=str(e)
        ) from e

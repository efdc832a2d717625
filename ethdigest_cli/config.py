"""
CLI Configuration

Configuration management for the ethdigest CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from ethdigest.literals import DEFAULT_CONSTRUCTOR


# Environment variable prefix
ENV_PREFIX = "ETHDIGEST_"

DEFAULT_CONFIG_NAMES = ("ethdigest.json", ".ethdigest.json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Literal build phase
    constructor: str = DEFAULT_CONSTRUCTOR
    digest_name: str = "digest"
    keccak_name: str = "keccak"
    include: str = "*.py"

    # Hashing
    hash_chunk_size: int = 65536

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    @property
    def macro_names(self) -> dict[str, str]:
        """Call name -> literal kind, as used by the build phase."""
        return {self.digest_name: "digest", self.keccak_name: "keccak"}

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_FIELDS = {
    "constructor": str,
    "digest_name": str,
    "keccak_name": str,
    "include": str,
    "hash_chunk_size": int,
    "log_level": str,
    "log_file": str,
    "default_output_format": str,
}

_OPTIONAL = {"log_file"}


def _coerce(name: str, value: Any, source: str) -> Any:
    """Convert a raw config value to its field type."""
    if value is None and name in _OPTIONAL:
        return None
    kind = _FIELDS[name]
    if kind is int and isinstance(value, str):
        try:
            return int(value)
        except ValueError as e:
            raise ValueError(f"Invalid value for {name} in {source}: {value!r}") from e
    if type(value) is not kind:
        raise ValueError(
            f"Invalid value for {name} in {source}: expected {kind.__name__}, got {value!r}"
        )
    return value


def validate_config(config: CLIConfig) -> CLIConfig:
    """
    Check cross-field constraints.

    Raises:
        ValueError: On duplicate literal call names or a non-positive chunk size
    """
    if config.digest_name == config.keccak_name:
        raise ValueError(
            f"digest_name and keccak_name must differ (both are {config.digest_name!r})"
        )
    for name in (config.digest_name, config.keccak_name):
        if not name.isidentifier():
            raise ValueError(f"Literal call name is not an identifier: {name!r}")
    if config.hash_chunk_size <= 0:
        raise ValueError(f"hash_chunk_size must be positive, got {config.hash_chunk_size}")
    return config


def load_config_from_env() -> dict[str, Any]:
    """Collect configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}
    for name in _FIELDS:
        variable = f"{ENV_PREFIX}{name.upper()}"
        raw = os.getenv(variable)
        if raw:
            overrides[name] = _coerce(name, raw, variable)
    return overrides


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")

    unknown = sorted(set(data) - set(_FIELDS))
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    config = CLIConfig()
    for name, value in data.items():
        setattr(config, name, _coerce(name, value, str(path)))
    return config


def default_config_paths() -> list[Path]:
    paths = [Path.cwd() / name for name in DEFAULT_CONFIG_NAMES]
    paths.append(Path.home() / ".config" / "ethdigest" / "config.json")
    return paths


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    for name, value in load_config_from_env().items():
        setattr(config, name, value)

    return validate_config(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"

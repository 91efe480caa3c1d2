"""
Configuration loader for appforge.
Merges built-in defaults with user-level overrides and CLI options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from appforge.errors import ConfigError


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class CleanEnvConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    prefixes: tuple[str, ...] = ("BUNDLE_", "BUNDLER_")
    names: tuple[str, ...] = ("RUBYOPT", "RUBYLIB")

    def matches(self, key: str) -> bool:
        return key in self.names or key.startswith(self.prefixes)


class AppConfig(BaseModel):
    """
    Resolved options for one pipeline run.

    Immutable. Unknown keys are kept (extra="allow") so tasks can read
    options this model does not know about.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    app_path: Path
    verbose: bool = False
    auto_confirm: bool = False
    install_gem_bundler_rails: bool = True
    start_server: bool = True
    simple_form: bool = False
    database: Literal["postgresql", "mysql", "sqlite3"] = "postgresql"
    clean_env: CleanEnvConfig = Field(default_factory=CleanEnvConfig)

    @property
    def app_name(self) -> str:
        return self.app_path.expanduser().resolve().name

    def get(self, key: str, default: Any = None) -> Any:
        """Look up any option, including unrecognized extras."""
        return getattr(self, key, default)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"
_USER_CONFIG_PATH = Path.home() / ".appforge" / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
    return data


def load_config(config_file: Path | None = None, **options: Any) -> AppConfig:
    """
    Load config by merging:
      1. Built-in defaults (appforge/config.yaml)
      2. User overrides (config_file, or ~/.appforge/config.yaml if present)
      3. Keyword options (CLI flags); None means "not given"
    """
    # 1. Built-in defaults
    base = _read_yaml(_DEFAULT_CONFIG_PATH)

    # 2. User overrides
    if config_file is not None:
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")
        base = _deep_merge(base, _read_yaml(config_file))
    elif _USER_CONFIG_PATH.exists():
        base = _deep_merge(base, _read_yaml(_USER_CONFIG_PATH))

    # 3. Explicit options win
    base = _deep_merge(base, {k: v for k, v in options.items() if v is not None})

    try:
        return AppConfig(**base)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}") from e

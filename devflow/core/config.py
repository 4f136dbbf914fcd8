"""Configuration discovery and loading."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

PROJECT_CONFIG_NAME = "devflow.toml"


class ConfigError(RuntimeError):
    """Raised when config file parsing or toolchain resolution fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def user_config_path() -> Path:
    """Get the per-user config file path."""
    return expand_path("~/.config/devflow/config.toml")


def project_config_path(directory: Optional[Path] = None) -> Path:
    """Get the project-local config file path."""
    return (directory or Path.cwd()) / PROJECT_CONFIG_NAME


def default_config_path(directory: Optional[Path] = None) -> Path:
    """Resolve config path: env override, project file, then user file."""
    raw = os.getenv("DEVFLOW_CONFIG_FILE")
    if raw:
        return expand_path(raw)
    project = project_config_path(directory)
    if project.exists():
        return project.resolve()
    return user_config_path()


def _default_config() -> Dict[str, Any]:
    return {
        "toolchain": "go",
        "theme": "dark",
        "strict": False,
        "toolchains": {},
    }


def _validate(cfg: Dict[str, Any]) -> None:
    for key in ("toolchain", "theme"):
        if not isinstance(cfg.get(key), str):
            raise ConfigError(f"'{key}' must be a string")
    if not isinstance(cfg.get("strict"), bool):
        raise ConfigError("'strict' must be true or false")
    if not isinstance(cfg.get("toolchains"), dict):
        raise ConfigError("'toolchains' must be a table of toolchain overrides")


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        elif suffix in {".yaml", ".yml"}:
            loaded = yaml.safe_load(text) or {}
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None, directory: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults.

    An explicit ``path`` that does not exist is an error; a missing
    discovered file just yields the defaults.
    """
    cfg = _default_config()

    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        source: Optional[Path] = path
    else:
        candidate = default_config_path(directory)
        source = candidate if candidate.exists() else None

    if source:
        loaded = _read_config(source)
        cfg = _deep_merge(cfg, loaded)

    _validate(cfg)

    env_toolchain = os.getenv("DEVFLOW_TOOLCHAIN")
    if env_toolchain:
        cfg["toolchain"] = env_toolchain

    return cfg

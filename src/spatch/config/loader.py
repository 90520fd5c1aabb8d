"""Load and merge configuration from .spatch.toml, env vars, and CLI flags."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from spatch.config.defaults import CONFIG_FILENAME
from spatch.config.schema import (
    COLLISION_CHOICES,
    FORMAT_CHOICES,
    ONLY_CHOICES,
    SPLIT_MODES,
    FilterConfig,
    OutputConfig,
    SpatchConfig,
    SplitConfig,
)


class ConfigError(Exception):
    """Raised when config is malformed, unreadable, or inconsistent."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: SpatchConfig) -> None:
    """Apply SPATCH_* environment variable overrides."""
    if val := os.environ.get("SPATCH_OUTPUT_DIR"):
        cfg.output.directory = val
    if val := os.environ.get("SPATCH_ON_COLLISION"):
        if val in COLLISION_CHOICES:
            cfg.output.on_collision = val  # type: ignore[assignment]
    if val := os.environ.get("SPATCH_FORMAT"):
        if val in FORMAT_CHOICES:
            cfg.output.format = val  # type: ignore[assignment]


def _check_choice(value: object, choices: tuple, key: str) -> None:
    if value not in choices:
        raise ConfigError(f"{key} must be one of {', '.join(choices)} (got {value!r})")


def _check_choices(cfg: SpatchConfig) -> None:
    _check_choice(cfg.split.mode, SPLIT_MODES, "split.mode")
    _check_choice(cfg.split.only, ONLY_CHOICES, "split.only")
    _check_choice(cfg.output.on_collision, COLLISION_CHOICES, "output.on_collision")
    _check_choice(cfg.output.format, FORMAT_CHOICES, "output.format")


def validate_config(cfg: SpatchConfig) -> None:
    """Full validation, run once every override has been applied."""
    _check_choices(cfg)
    if cfg.filter.glob and cfg.filter.regex:
        raise ConfigError("filter.glob and filter.regex are mutually exclusive")
    if cfg.split.mode == "file" and cfg.split.only == "all":
        raise ConfigError(
            "extracting file contents requires only = 'new' or 'removed' "
            "(--only-new / --only-removed)"
        )


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> SpatchConfig:
    """Load and return a SpatchConfig with env overrides applied."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = SpatchConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = SpatchConfig(
            version=str(raw.get("version", "1.0")),
            split=_build_section(raw, SplitConfig, "split"),
            filter=_build_section(raw, FilterConfig, "filter"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _check_choices(cfg)

    _merge_env_overrides(cfg)
    return cfg

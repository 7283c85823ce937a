"""Load and merge configuration from .trunkdump.toml and env vars."""

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

from trunkdump.config.schema import (
    FilterConfig,
    OutputConfig,
    ParseConfig,
    TrunkDumpConfig,
)

CONFIG_FILENAME = ".trunkdump.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


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


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _merge_env_overrides(cfg: TrunkDumpConfig) -> None:
    """Apply TRUNKDUMP_* environment variable overrides."""
    if val := os.environ.get("TRUNKDUMP_ROOT"):
        cfg.parse.root = val
    if val := os.environ.get("TRUNKDUMP_VERBOSITY"):
        if val in ("0", "1", "2"):
            cfg.parse.verbosity = int(val)
    if val := os.environ.get("TRUNKDUMP_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("TRUNKDUMP_INCLUDE"):
        cfg.filter.include.extend(_split_list(val))
    if val := os.environ.get("TRUNKDUMP_EXCLUDE"):
        cfg.filter.exclude.extend(_split_list(val))
    if val := os.environ.get("TRUNKDUMP_TZ_OFFSET_MINUTES"):
        try:
            cfg.parse.tz_offset_minutes = int(val)
        except ValueError:
            pass


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def _validate(cfg: TrunkDumpConfig) -> None:
    if cfg.parse.verbosity not in (0, 1, 2):
        raise ConfigError(f"parse.verbosity must be 0, 1 or 2, not {cfg.parse.verbosity!r}")
    if cfg.parse.on_io_error not in ("raise", "drop"):
        raise ConfigError(f"parse.on_io_error must be 'raise' or 'drop', not {cfg.parse.on_io_error!r}")
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"output.format must be 'terminal' or 'json', not {cfg.output.format!r}")
    for key in ("include", "exclude"):
        if not isinstance(getattr(cfg.filter, key), list):
            raise ConfigError(f"filter.{key} must be a list of filter tokens")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> TrunkDumpConfig:
    """Load, validate, and return a TrunkDumpConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = TrunkDumpConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = TrunkDumpConfig(
            version=raw.get("version", "1.0"),
            parse=_build_section(raw, ParseConfig, "parse"),
            filter=_build_section(raw, FilterConfig, "filter"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        if cfg.filter.file and not Path(cfg.filter.file).is_absolute():
            cfg.filter.file = str(config_path.parent / cfg.filter.file)

    _validate(cfg)
    _merge_env_overrides(cfg)
    return cfg

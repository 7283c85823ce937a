"""Configuration loading, schema, and defaults."""

from trunkdump.config.loader import ConfigError, load_config
from trunkdump.config.schema import TrunkDumpConfig

__all__ = [
    "ConfigError",
    "TrunkDumpConfig",
    "load_config",
]

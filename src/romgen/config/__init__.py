"""Configuration document model and parser."""

from romgen.config.io import config_from_dict, parse_config, read_config, serialize_config
from romgen.config.model import CONFIG_VERSION, RomConfig, RomEntry, RomSetEntry

__all__ = [
    "CONFIG_VERSION",
    "RomConfig",
    "RomEntry",
    "RomSetEntry",
    "config_from_dict",
    "parse_config",
    "read_config",
    "serialize_config",
]

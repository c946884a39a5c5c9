"""Loading, validating and modelling `[tool.stubgen]` configuration."""

from .loader import find_config_file, load_config, parse_config
from .model import CompilerSettings, StubgenConfig
from .schema import validate_config

__all__ = [
    "CompilerSettings",
    "StubgenConfig",
    "find_config_file",
    "load_config",
    "parse_config",
    "validate_config",
]

"""Configuration management with Pydantic validation."""

from dockside.core.config.models import (
    CONFIG_DIR,
    CONFIG_FILE,
    Config,
    Theme,
    export_default_config,
    load_config,
)

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "Config",
    "Theme",
    "export_default_config",
    "load_config",
]

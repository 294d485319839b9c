"""Configuration models and loading.

Configuration lives in ~/.config/dockside/config.yaml. Every field has a
default, so a missing file is equivalent to an empty one.

Usage:
    from dockside.core.config import load_config

    config = load_config(docker_path="tcp://127.0.0.1:2375")
    print(config.theme.title_colour())
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator
from rich.color import Color, ColorParseError

CONFIG_DIR = Path.home() / ".config" / "dockside"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_PROMPT = "🦆"
DEFAULT_EXEC = "/bin/bash"


def default_docker_path() -> str:
    """Return the platform's default engine endpoint."""
    if sys.platform == "win32":
        return "npipe:////./pipe/docker_engine"
    return "unix:///var/run/docker.sock"


class Theme(BaseModel):
    """Colour theme.

    Custom colours apply only when `use_theme` is set; otherwise each
    accessor returns a plain named colour that follows the terminal palette.
    """

    model_config = ConfigDict(extra="forbid")

    use_theme: bool = False
    title: str = "#96e072"
    help: str = "#ee5d43"
    background: str = "#23262e"
    footer: str = "#00e8c6"
    success: str = "#96e072"
    error: str = "#ee5d43"
    positive_highlight: str = "#96e072"
    negative_highlight: str = "#ff00aa"

    @field_validator(
        "title",
        "help",
        "background",
        "footer",
        "success",
        "error",
        "positive_highlight",
        "negative_highlight",
    )
    @classmethod
    def validate_colour(cls, v: str) -> str:
        """Validate the value is a colour rich understands."""
        try:
            Color.parse(v)
        except ColorParseError as e:
            raise ValueError(f"invalid colour: {v}") from e
        return v

    def _pick(self, custom: str, fallback: str) -> str:
        return custom if self.use_theme else fallback

    def title_colour(self) -> str:
        return self._pick(self.title, "green")

    def help_colour(self) -> str:
        return self._pick(self.help, "red")

    def background_colour(self) -> str:
        return self._pick(self.background, "default")

    def footer_colour(self) -> str:
        return self._pick(self.footer, "cyan")

    def success_colour(self) -> str:
        return self._pick(self.success, "green")

    def error_colour(self) -> str:
        return self._pick(self.error, "red")

    def positive_highlight_colour(self) -> str:
        return self._pick(self.positive_highlight, "green")

    def negative_highlight_colour(self) -> str:
        return self._pick(self.negative_highlight, "magenta")


class Config(BaseModel):
    """Complete dashboard configuration."""

    model_config = ConfigDict(extra="forbid")

    prompt: str = DEFAULT_PROMPT
    default_exec: str = DEFAULT_EXEC
    docker_path: str = default_docker_path()
    check_for_update: bool = True
    theme: Theme = Theme()

    @field_validator("default_exec", "docker_path")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Validate the value is not empty."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> Config:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            DOCKSIDE_DOCKER_PATH: Engine endpoint
            DOCKSIDE_DEFAULT_EXEC: Shell used when attaching
            DOCKSIDE_PROMPT: Command prompt glyph
        """
        config_dict = base_config.copy() if base_config else {}

        if docker_path := os.environ.get("DOCKSIDE_DOCKER_PATH"):
            config_dict["docker_path"] = docker_path

        if default_exec := os.environ.get("DOCKSIDE_DEFAULT_EXEC"):
            config_dict["default_exec"] = default_exec

        if prompt := os.environ.get("DOCKSIDE_PROMPT"):
            config_dict["prompt"] = prompt

        return cls.model_validate(config_dict)

    def to_yaml(self) -> str:
        """Serialize to YAML."""
        return yaml.safe_dump(self.model_dump(), sort_keys=False, allow_unicode=True)


def load_config(path: Path | None = None, docker_path: str | None = None) -> Config:
    """Load configuration from YAML, environment and CLI overrides.

    Args:
        path: Config file; defaults to CONFIG_FILE. A missing file is fine.
        docker_path: Engine endpoint from the command line; wins over all.

    Returns:
        The validated configuration.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If the file has invalid values.
    """
    path = path or CONFIG_FILE
    raw: dict[str, Any] = {}
    if path.exists():
        loaded = yaml.safe_load(path.read_text())
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"{path} must contain a mapping")
        raw = loaded or {}

    config = Config.from_env(raw)
    if docker_path:
        config = config.model_copy(update={"docker_path": docker_path})
    return config


def export_default_config(path: Path | None = None) -> Path:
    """Write the default configuration to `path`, creating directories.

    Returns:
        The path written.
    """
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(Config().to_yaml())
    return path

"""Logging configuration for dockside."""

from dockside.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]

"""Command-line interface for dockside."""

"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from dockside import __version__
from dockside.core.config import CONFIG_FILE, export_default_config, load_config
from dockside.integrations.docker import DockerClient, DockerError
from dockside.logging.config import configure_logging

app = typer.Typer(
    name="dockside",
    help="Terminal dashboard for Docker containers, images, volumes and networks.",
    add_completion=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dockside version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
    docker_path: str | None = typer.Option(
        None,
        "--docker-path",
        "-d",
        help="Docker engine endpoint, e.g. unix:///var/run/docker.sock.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help=f"Config file to use instead of {CONFIG_FILE}.",
    ),
    export_config: bool = typer.Option(
        False,
        "--export-default-config",
        help="Write the default config file and exit.",
    ),
) -> None:
    """Dockside - operate a Docker engine from the terminal."""
    # The dashboard owns the terminal, so logs only go to the log file
    configure_logging(verbose=verbose, debug=debug, console=False)

    if export_config:
        written = export_default_config(config_path)
        console.print(f"[green]Default config written to {written}[/green]")
        raise typer.Exit()

    try:
        config = load_config(config_path, docker_path=docker_path)
    except (ValidationError, yaml.YAMLError, ValueError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1) from None

    client = DockerClient(config.docker_path)
    try:
        client.connect()
    except DockerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    from dockside.tui.apps.docker import DockerApp

    with client:
        DockerApp(client, config).run()


if __name__ == "__main__":
    app()

"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Optional, Callable, Any, NoReturn

import typer
from docker.errors import DockerException
from rich.console import Console
from rich.table import Table

from mongo_runner.config import ConfigStore, coerce_value
from mongo_runner.errors import RunnerError
from mongo_runner.models.config import RunnerConfig
from mongo_runner.models.image import BASE_IMAGE_TYPE
from mongo_runner.models.topology import Topology
from mongo_runner.providers.image import ImageProvider
from mongo_runner.providers.registry import get_launcher, list_topologies
from mongo_runner.utils.docker import get_client
from mongo_runner.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="mongo-runner",
    help="Mongo Runner - disposable MongoDB deployments in Docker",
    add_completion=False,
)

# Console for rich output
console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _load_settings(config_path: Optional[Path], log_level: Optional[str]) -> RunnerConfig:
    """Load persisted settings and apply command-line overrides."""
    try:
        config = ConfigStore(config_path).load()
        if log_level:
            config = RunnerConfig(**{**config.model_dump(), "log_level": log_level})
    except (RunnerError, ValueError) as e:
        _fail(str(e))
    setup_logging(config.log_level)
    return config


def _run_engine_command(handler: Callable[..., Any], config: RunnerConfig, **kwargs: Any):
    """Helper to run a command against the Docker engine with error handling."""
    try:
        client = get_client(config.docker_host)
        return handler(client, config, **kwargs)
    except (RunnerError, DockerException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _launch(client, config: RunnerConfig, version: str, topology: Topology):
    launcher = get_launcher(topology, client, config)
    return launcher.launch(version)


def _build(client, config: RunnerConfig, version: str, image_type: str) -> str:
    images = ImageProvider(client, templates_dir=config.templates_dir)
    return images.ensure_image(version, image_type)


@app.command("run")
def run_command(
    version: Optional[str] = typer.Argument(None, help="MongoDB version, e.g. 3.4.2"),
    topology: Optional[str] = typer.Argument(
        None, help=f"Deployment topology ({', '.join(list_topologies())})"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (default ~/.mongo-runner)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level override"),
):
    """Build images if needed and launch a MongoDB topology."""
    if not version:
        _fail("Please specify a version")
    if not topology:
        _fail("Please specify a topology")

    try:
        selected = Topology(topology)
    except ValueError:
        _fail(f"Unknown topology: {topology}")

    config = _load_settings(config_path, log_level)
    progress = _run_engine_command(_launch, config, version=version, topology=selected)

    console.print(
        f"[green]✓[/green] MongoDB {version} {selected.value} running "
        f"({len(progress.members)} member(s), image {progress.image})"
    )


@app.command("build")
def build_command(
    version: str = typer.Argument(..., help="MongoDB version, e.g. 3.4.2"),
    image_type: str = typer.Argument(BASE_IMAGE_TYPE, help="Image type to build"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (default ~/.mongo-runner)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level override"),
):
    """Build an image (and its base) without starting containers."""
    config = _load_settings(config_path, log_level)
    reference = _run_engine_command(_build, config, version=version, image_type=image_type)
    console.print(f"[green]✓[/green] Image {reference} ready")


# Config subcommands
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show_command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (default ~/.mongo-runner)"
    ),
):
    """Show persisted configuration."""
    store = ConfigStore(config_path)
    try:
        config = store.load()
    except RunnerError as e:
        _fail(str(e))

    table = Table(title=str(store.path))
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in config.model_dump().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@config_app.command("set")
def config_set_command(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="Setting value (YAML scalar for custom keys)"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (default ~/.mongo-runner)"
    ),
):
    """Set a configuration value."""
    # Known settings are all strings; only extra keys take YAML scalars
    parsed = value if key in RunnerConfig.model_fields else coerce_value(value)

    def _set(config: RunnerConfig):
        validated = RunnerConfig(**{**config.model_dump(), key: parsed})
        setattr(config, key, getattr(validated, key))

    try:
        ConfigStore(config_path).with_config(_set)
    except (RunnerError, ValueError) as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] {key} = {parsed!r}")


@config_app.command("unset")
def config_unset_command(
    key: str = typer.Argument(..., help="Setting name"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (default ~/.mongo-runner)"
    ),
):
    """Remove a configuration value (known settings revert to defaults)."""

    def _unset(config: RunnerConfig):
        if key in RunnerConfig.model_fields:
            setattr(config, key, RunnerConfig.model_fields[key].get_default())
        elif config.model_extra and key in config.model_extra:
            delattr(config, key)
        else:
            raise KeyError(key)

    try:
        ConfigStore(config_path).with_config(_unset)
    except KeyError:
        _fail(f"Unknown setting: {key}")
    except RunnerError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] {key} unset")


def main():
    """Main entry point for CLI."""
    app()

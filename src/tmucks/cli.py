"""Command-line entry point.

With no command the interactive TUI starts.  Each subcommand performs a
single store operation and exits non-zero if it fails:

    tmucks list
    tmucks apply work        # .conf is appended when missing
    tmucks save work
    tmucks update work
    tmucks delete work
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import NoReturn

import typer

from tmucks.app import TmucksApp
from tmucks.config import (
    ConfigError,
    HomeDirUnavailableError,
    Settings,
    load_settings,
    settings_path,
)
from tmucks.domain.names import ensure_conf_extension
from tmucks.logs import setup_logging
from tmucks.reload import make_reloader
from tmucks.session import Session
from tmucks.store import SnapshotStore, StoreError

logger = logging.getLogger(__name__)

app = typer.Typer(help="Tmux config manager", add_completion=False)

_NAME_HELP = "Config name; the .conf suffix is optional"
_CONFIG_HELP = "Path to the settings file (default: ~/.config/tmucks.json)"


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


def _settings(ctx: typer.Context) -> Settings:
    settings: Settings = ctx.obj["settings"]
    return settings


def _open_store(settings: Settings) -> SnapshotStore:
    try:
        return SnapshotStore.open(
            settings.snapshot_dir,
            settings.live_config_path,
            make_reloader(settings.reload_command),
        )
    except StoreError as exc:
        _fail(exc)


def _run_once(
    ctx: typer.Context,
    operation: Callable[[SnapshotStore, str], None],
    name: str,
    done: str,
) -> None:
    """Normalize ``name``, run one store operation, and report the outcome."""
    store = _open_store(_settings(ctx))
    config_name = ensure_conf_extension(name)
    try:
        operation(store, config_name)
    except StoreError as exc:
        logger.debug("%s failed", operation.__name__, exc_info=True)
        _fail(exc)
    typer.echo(f"✓ {done}: {config_name}")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Manage named snapshots of ~/.tmux.conf. Starts the TUI when no command is given."""
    interactive = ctx.invoked_subcommand is None
    setup_logging(verbose, tui=interactive)
    try:
        config_file = config or settings_path()
        settings = load_settings(config_file)
    except (HomeDirUnavailableError, ConfigError) as exc:
        _fail(exc)
    logger.debug(
        "snapshots in %s, live config %s", settings.snapshot_dir, settings.live_config_path
    )
    ctx.obj = {"settings": settings, "config_file": config_file}

    if interactive:
        store = _open_store(settings)
        session = Session(store, notification_timeout=settings.notification_timeout)
        TmucksApp(session, settings_path=config_file).run()


@app.command("list")
def list_configs(ctx: typer.Context) -> None:
    """List all saved configs."""
    store = _open_store(_settings(ctx))
    if not store.snapshots:
        typer.echo(f"No configs found in {store.snapshot_dir}")
        return
    typer.echo("Available configs:")
    for name in store.snapshots:
        typer.echo(f"  - {name}")


@app.command()
def apply(ctx: typer.Context, name: str = typer.Argument(..., help=_NAME_HELP)) -> None:
    """Apply a config by name."""
    _run_once(ctx, SnapshotStore.apply, name, "Applied config")


@app.command()
def save(ctx: typer.Context, name: str = typer.Argument(..., help=_NAME_HELP)) -> None:
    """Save the current tmux config under a new name."""
    _run_once(ctx, SnapshotStore.save, name, "Saved current config as")


@app.command()
def update(ctx: typer.Context, name: str = typer.Argument(..., help=_NAME_HELP)) -> None:
    """Overwrite an existing config with the current tmux config."""
    _run_once(ctx, SnapshotStore.update, name, "Updated config")


@app.command()
def delete(ctx: typer.Context, name: str = typer.Argument(..., help=_NAME_HELP)) -> None:
    """Delete a config by name."""
    _run_once(ctx, SnapshotStore.delete, name, "Deleted config")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

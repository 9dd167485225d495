"""Shared helpers for CLI commands: global options, loading and error exits."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer

from guesstimate.adapters.config_loader import CONFIG_FILENAME, find_config_file, resolve_config
from guesstimate.adapters.estimation_store import EstimationStore
from guesstimate.core.estimation import Estimation
from guesstimate.core.models import Config


@dataclass
class CliState:
    """Global options collected by the root callback."""

    config_path: Optional[Path] = None


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    if isinstance(state, CliState):
        return state
    return CliState()


def config_target(ctx: typer.Context) -> Path:
    """Where config edits go: --config, else the discovered file, else ./.guesstimate.yml."""
    state = get_state(ctx)
    if state.config_path is not None:
        return state.config_path
    return find_config_file() or Path(CONFIG_FILENAME)


def load_config_or_exit(ctx: typer.Context) -> Config:
    state = get_state(ctx)
    try:
        return resolve_config(state.config_path)
    except (ValueError, OSError) as exc:
        error(f"Failed to load configuration: {exc}", 1)


def load_estimation_or_exit(store: EstimationStore, path: Path) -> Estimation:
    try:
        return store.load(path)
    except FileNotFoundError as exc:
        error(str(exc), 1)
    except (ValueError, OSError) as exc:
        error(f"Failed to load estimation: {exc}", 1)


def save_estimation_or_exit(store: EstimationStore, path: Path, estimation: Estimation) -> None:
    try:
        store.save(path, estimation)
    except OSError as exc:
        error(f"Failed to save estimation: {exc}", 1)


def error(message: str, exit_code: int) -> NoReturn:
    """Print error to stderr and exit."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=exit_code)

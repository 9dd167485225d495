"""Typer application entrypoint."""

import logging
from pathlib import Path
from typing import Optional

import typer

from guesstimate.cli.commands import config as config_commands
from guesstimate.cli.commands import task as task_commands
from guesstimate.cli.commands._context import CliState
from guesstimate.cli.commands.estimation import (
    run_list,
    run_new,
    run_summary,
    run_validate,
    run_view,
)
from guesstimate.version import __version__

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Create and manage three-point (PERT) estimations with confidence intervals and costs.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"guesstimate {__version__}")
        raise typer.Exit()


@app.callback()
def _global_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (default: nearest .guesstimate.yml, else built-in defaults).",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    version: Optional[bool] = typer.Option(  # noqa: ARG001
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Global options for guesstimate."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s", force=True)
    ctx.obj = CliState(config_path=config)


app.command("new")(run_new)
app.command("view")(run_view)
app.command("summary")(run_summary)
app.command("list")(run_list)
app.command("validate")(run_validate)
app.add_typer(task_commands.app, name="task")
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Run the CLI app."""
    app()


if __name__ == "__main__":
    main()

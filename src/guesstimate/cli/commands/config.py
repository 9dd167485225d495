"""Configuration commands: init, view, category add/remove."""

from __future__ import annotations

import json

import typer
import yaml

from guesstimate.adapters.config_loader import config_to_dict, load_default_config, save_config
from guesstimate.cli.commands._context import config_target, error, load_config_or_exit
from guesstimate.core.models import DEFAULT_COST_PER_TIME_UNIT, Config, TaskCategory

app = typer.Typer(no_args_is_help=True, help="Manage the guesstimate configuration file.")
category_app = typer.Typer(no_args_is_help=True, help="Manage task categories.")
app.add_typer(category_app, name="category")


@app.command("init")
def run_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
) -> None:
    """Write the default configuration file."""
    path = config_target(ctx)
    if path.exists() and not force:
        error(f"Configuration file already exists at {path}, use --force to overwrite", 2)
    try:
        save_config(load_default_config(), path)
    except OSError as exc:
        error(f"Failed to save configuration: {exc}", 1)
    typer.echo(f"Configuration file created at {path}")


@app.command("view")
def run_view(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002
        "yaml", "--format", "-f", help="Output format: yaml, json or text."
    ),
) -> None:
    """Display the configuration in effect."""
    config = load_config_or_exit(ctx)
    if format == "json":
        typer.echo(json.dumps(config_to_dict(config), indent=2, ensure_ascii=False))
    elif format == "yaml":
        typer.echo(
            yaml.safe_dump(config_to_dict(config), sort_keys=False, allow_unicode=True), nl=False
        )
    elif format == "text":
        typer.echo("Task Categories:")
        for category_id, category in config.task_categories.items():
            rate = category.cost_per_time_unit
            typer.echo(f"  {category_id}: {category.label} ({rate:.2f} per time unit)")
        typer.echo(f"\nTime Unit: {config.time_unit.label} ({config.time_unit.acronym})")
        typer.echo(f"Currency: {config.currency}")
        typer.echo(f"Round Up Estimations: {config.round_up_estimations}")
        typer.echo(f"Auto-Estimation Multiplier: {config.get_auto_estimation_multiplier():.2f}")
    else:
        error(f"Unknown format: {format!r}. Use yaml, json or text.", 2)


@category_app.command("add")
def run_category_add(
    ctx: typer.Context,
    category_id: str = typer.Argument(..., help="Category ID."),
    label: str = typer.Argument(..., help="Category label."),
    cost: float = typer.Option(
        DEFAULT_COST_PER_TIME_UNIT, "--cost", "-c", min=0, help="Cost per time unit."
    ),
) -> None:
    """Add a task category."""
    config = load_config_or_exit(ctx)
    if category_id in config.task_categories:
        error(f"Category with id '{category_id}' already exists", 2)

    categories = dict(config.task_categories)
    categories[category_id] = TaskCategory(id=category_id, label=label, cost_per_time_unit=cost)
    _save(ctx, config.model_copy(update={"task_categories": categories}))
    typer.echo(f"Category '{category_id}' added successfully")


@category_app.command("remove")
def run_category_remove(
    ctx: typer.Context,
    category_id: str = typer.Argument(..., help="Category ID."),
) -> None:
    """Remove a task category."""
    config = load_config_or_exit(ctx)
    if category_id not in config.task_categories:
        error(f"Category with id '{category_id}' does not exist", 2)

    categories = {
        key: category for key, category in config.task_categories.items() if key != category_id
    }
    _save(ctx, config.model_copy(update={"task_categories": categories}))
    typer.echo(f"Category '{category_id}' removed successfully")


def _save(ctx: typer.Context, config: Config) -> None:
    try:
        save_config(config, config_target(ctx))
    except OSError as exc:
        error(f"Failed to save configuration: {exc}", 1)

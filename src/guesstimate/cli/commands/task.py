"""Task commands: add, update, remove, list, move."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from guesstimate.adapters.estimation_store import EstimationStore
from guesstimate.cli.commands._context import (
    error,
    load_config_or_exit,
    load_estimation_or_exit,
    save_estimation_or_exit,
)
from guesstimate.core.task import new_task

app = typer.Typer(no_args_is_help=True, help="Manage tasks within an estimation file.")


@app.command("add")
def run_add(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Estimation file (created when missing)."),
    label: str = typer.Argument(..., help="Task label."),
    category: Optional[str] = typer.Option(
        None, "--category", help="Task category (default: first configured category)."
    ),
    optimistic: float = typer.Option(0.0, "--optimistic", "-o", help="Optimistic estimate."),
    likely: float = typer.Option(0.0, "--likely", "-l", help="Likely estimate."),
    pessimistic: float = typer.Option(0.0, "--pessimistic", "-p", help="Pessimistic estimate."),
    description: str = typer.Option("", "--description", "-d", help="Task description."),
) -> None:
    """Add a task; missing estimates are filled in from the ones given."""
    store = EstimationStore()
    try:
        estimation, created = store.load_or_create(file, file.name)
    except (ValueError, OSError) as exc:
        error(f"Failed to load estimation: {exc}", 1)
    if created:
        typer.echo(f"Created new estimation file: {file}")

    config = estimation.effective_config(load_config_or_exit(ctx))
    task = new_task(label, category or config.get_first_category_id() or "")
    task.description = description
    task.set_estimations(optimistic, likely, pessimistic, config.get_auto_estimation_multiplier())
    estimation.add_task(task)

    save_estimation_or_exit(store, file, estimation)
    typer.echo(f"Task '{label}' added with ID {task.id}")


@app.command("update")
def run_update(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Estimation file."),
    task_id: str = typer.Argument(..., help="Task ID."),
    label: Optional[str] = typer.Option(None, "--label", help="New task label."),
    category: Optional[str] = typer.Option(None, "--category", help="New task category."),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New task description."
    ),
    optimistic: Optional[float] = typer.Option(
        None, "--optimistic", "-o", help="New optimistic estimate."
    ),
    likely: Optional[float] = typer.Option(None, "--likely", help="New likely estimate."),
    pessimistic: Optional[float] = typer.Option(
        None, "--pessimistic", "-p", help="New pessimistic estimate."
    ),
) -> None:
    """Update a task. Estimates not given keep their current value."""
    store = EstimationStore()
    estimation = load_estimation_or_exit(store, file)
    task = estimation.get_task(task_id)
    if task is None:
        error(f"Task with ID '{task_id}' not found", 1)

    if label:
        task.label = label
    if category:
        task.category = category
    if description is not None:
        task.description = description

    if optimistic is not None or likely is not None or pessimistic is not None:
        config = estimation.effective_config(load_config_or_exit(ctx))
        current = task.estimations
        task.set_estimations(
            current.optimistic if optimistic is None else optimistic,
            current.likely if likely is None else likely,
            current.pessimistic if pessimistic is None else pessimistic,
            config.get_auto_estimation_multiplier(),
        )

    estimation.update_task(task)
    save_estimation_or_exit(store, file, estimation)
    typer.echo(f"Task {task_id} updated")


@app.command("remove")
def run_remove(
    file: Path = typer.Argument(..., help="Estimation file."),
    task_id: str = typer.Argument(..., help="Task ID."),
) -> None:
    """Remove a task."""
    store = EstimationStore()
    estimation = load_estimation_or_exit(store, file)
    if not estimation.remove_task(task_id):
        error(f"Task with ID '{task_id}' not found", 1)
    save_estimation_or_exit(store, file, estimation)
    typer.echo(f"Task {task_id} removed")


@app.command("list")
def run_list(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Estimation file."),
    format: str = typer.Option(  # noqa: A002
        "table", "--format", "-f", help="Output format: table or json."
    ),
) -> None:
    """List tasks in display order."""
    if format not in {"table", "json"}:
        error(f"Unknown format: {format!r}. Use table or json.", 2)

    estimation = load_estimation_or_exit(EstimationStore(), file)
    tasks = estimation.ordered_tasks()

    if format == "json":
        payload = [
            {
                "id": task.id,
                "label": task.label,
                "description": task.description,
                "category": task.category,
                "estimations": {
                    "optimistic": task.estimations.optimistic,
                    "likely": task.estimations.likely,
                    "pessimistic": task.estimations.pessimistic,
                },
            }
            for task in tasks
        ]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not tasks:
        typer.echo("No tasks found.")
        return

    config = estimation.effective_config(load_config_or_exit(ctx))
    typer.echo("Tasks:")
    for task in tasks:
        est = task.estimations
        typer.echo(f"  [{task.id}] {task.label} ({config.get_task_category(task.category).label})")
        typer.echo(
            f"      O: {est.optimistic:.2f}, L: {est.likely:.2f}, P: {est.pessimistic:.2f}"
            f" => Mean: {task.weighted_mean():.2f}, SD: {task.standard_deviation():.2f}"
        )


@app.command("move", context_settings={"ignore_unknown_options": True})
def run_move(
    file: Path = typer.Argument(..., help="Estimation file."),
    task_id: str = typer.Argument(..., help="Task ID."),
    offset: int = typer.Argument(
        ..., help="Positions to move: negative moves up, positive moves down."
    ),
) -> None:
    """Move a task up or down in the ordering."""
    store = EstimationStore()
    estimation = load_estimation_or_exit(store, file)
    if not estimation.move_task(task_id, offset):
        error(f"Failed to move task {task_id} by {offset} positions", 1)
    save_estimation_or_exit(store, file, estimation)
    typer.echo(f"Task {task_id} moved by {offset} positions")

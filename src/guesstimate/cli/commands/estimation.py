"""Estimation file commands: new, view, summary, list, validate."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import yaml

from guesstimate.adapters.estimation_store import EstimationStore, default_estimation_filename
from guesstimate.cli.commands._context import (
    error,
    load_config_or_exit,
    load_estimation_or_exit,
)
from guesstimate.core.models import ConfidenceLevel
from guesstimate.core.stats import get_confidence_level
from guesstimate.render import (
    build_report,
    render_json_report,
    render_markdown_report,
    render_summary,
    render_yaml_report,
)

_RENDERERS = {
    "markdown": render_markdown_report,
    "md": render_markdown_report,
    "json": render_json_report,
    "yaml": render_yaml_report,
    "yml": render_yaml_report,
}

_CONFIDENCE_HELP = "Confidence level bounding the costs: 68, 90 or 99.7."


def _confidence_or_exit(name: str) -> ConfidenceLevel:
    try:
        return get_confidence_level(name)
    except ValueError as exc:
        error(str(exc), 2)


def run_new(
    name: str = typer.Argument(..., help="Project label."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file path (default: <name>.estimation.yml)."
    ),
    description: str = typer.Option("", "--description", "-d", help="Project description."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
) -> None:
    """Create a new estimation file."""
    path = output if output is not None else Path(default_estimation_filename(name))
    if path.exists() and not force:
        error(f"File '{path}' already exists, use --force to overwrite", 2)

    try:
        EstimationStore().create(path, name, description)
    except OSError as exc:
        error(f"Failed to create estimation: {exc}", 1)
    typer.echo(f"Created estimation '{name}' at {path}")


def run_view(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Estimation file."),
    format: str = typer.Option(  # noqa: A002
        "markdown", "--format", "-f", help="Output format: markdown, json or yaml."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout."
    ),
    confidence: str = typer.Option("99.7", "--confidence", help=_CONFIDENCE_HELP),
) -> None:
    """Render an estimation report."""
    renderer = _RENDERERS.get(format.lower())
    if renderer is None:
        error(f"Unknown format: {format!r}. Use markdown, json or yaml.", 2)
    level = _confidence_or_exit(confidence)

    estimation = load_estimation_or_exit(EstimationStore(), file)
    config = load_config_or_exit(ctx)
    result = renderer(build_report(estimation, config, level))

    if output is None:
        typer.echo(result, nl=False)
        return
    try:
        output.write_text(result, encoding="utf-8")
    except OSError as exc:
        error(f"Failed to write output: {exc}", 1)
    typer.echo(f"Output written to {output}")


def run_summary(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Estimation file."),
    confidence: str = typer.Option("99.7", "--confidence", help=_CONFIDENCE_HELP),
) -> None:
    """Show a quick summary with confidence intervals and costs."""
    level = _confidence_or_exit(confidence)
    estimation = load_estimation_or_exit(EstimationStore(), file)
    config = load_config_or_exit(ctx)
    typer.echo(render_summary(build_report(estimation, config, level)), nl=False)


def run_list(
    directory: Path = typer.Argument(Path("."), help="Directory to scan."),
    format: str = typer.Option(  # noqa: A002
        "text", "--format", "-f", help="Output format: text, json or yaml."
    ),
) -> None:
    """List estimation files in a directory."""
    if format not in {"text", "json", "yaml"}:
        error(f"Unknown format: {format!r}. Use text, json or yaml.", 2)

    store = EstimationStore()
    items: list[dict[str, object]] = []
    for name in store.list_estimations(directory):
        try:
            estimation = store.load(directory / name)
        except (ValueError, OSError):
            items.append({"file": name, "label": "(error loading)", "tasks": 0})
            continue
        items.append({"file": name, "label": estimation.label, "tasks": len(estimation)})

    if format == "json":
        typer.echo(json.dumps(items, indent=2, ensure_ascii=False))
    elif format == "yaml":
        typer.echo(yaml.safe_dump(items, sort_keys=False, allow_unicode=True), nl=False)
    elif not items:
        typer.echo("No estimation files found.")
    else:
        typer.echo("Estimation files:")
        for item in items:
            typer.echo(f"  {item['file']} - {item['label']} ({item['tasks']} tasks)")


def run_validate(
    file: Path = typer.Argument(..., help="Estimation file."),
) -> None:
    """Report tasks whose estimates are negative or out of order."""
    estimation = load_estimation_or_exit(EstimationStore(), file)
    problems = estimation.validate()
    if not problems:
        typer.echo(f"{file}: OK ({len(estimation)} tasks)")
        return
    for problem in problems:
        typer.echo(f"{file}: {problem}")
    raise typer.Exit(code=1)

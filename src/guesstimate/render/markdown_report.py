"""Markdown and plain-text report renderers."""

from __future__ import annotations

from guesstimate.render.report_models import EstimationReport


def render_markdown_report(report: EstimationReport) -> str:
    """Render an estimation report as GitHub-compatible Markdown."""
    lines: list[str] = [
        f"# {report.label}",
        "",
    ]
    if report.description:
        lines.extend([report.description, ""])
    lines.extend(_render_task_table(report))
    lines.extend([""])
    lines.extend(_render_statistics_table(report))
    lines.extend([""])
    lines.extend(_render_category_table(report))
    lines.extend([""])
    lines.extend(_render_cost_table(report))
    lines.append("")
    return "\n".join(lines)


def _render_task_table(report: EstimationReport) -> list[str]:
    unit = report.time_unit
    lines = [
        "## Tasks",
        "",
    ]
    if not report.tasks:
        lines.append("No tasks.")
        return lines
    lines.extend(
        [
            "| Task | Category | Optimistic | Likely | Pessimistic | Mean | Std. Dev. |",
            "| --- | --- | --- | --- | --- | --- | --- |",
        ]
    )
    for task in report.tasks:
        lines.append(
            f"| {_escape_cell(task.label)} | {_escape_cell(task.category_label)} | "
            f"{_format_time(task.optimistic, unit)} | {_format_time(task.likely, unit)} | "
            f"{_format_time(task.pessimistic, unit)} | {_format_time(task.weighted_mean, unit)} | "
            f"{_format_time(task.standard_deviation, unit)} |"
        )
    return lines


def _render_statistics_table(report: EstimationReport) -> list[str]:
    unit = report.time_unit
    stats = report.statistics
    lines = [
        "## Estimation",
        "",
        "| Confidence | Estimate | Min | Max |",
        "| --- | --- | --- | --- |",
    ]
    for interval in reversed(stats.confidence):
        lines.append(
            f"| {interval.level} | {_format_time(interval.mean, unit)} "
            f"± {_format_time(interval.deviation, unit)} | "
            f"{_format_time(interval.min, unit)} | {_format_time(interval.max, unit)} |"
        )
    return lines


def _render_category_table(report: EstimationReport) -> list[str]:
    unit = report.time_unit
    lines = ["## Category Repartition", ""]
    rows = [entry for entry in report.categories if entry.percentage > 0]
    if not rows:
        lines.append("No estimated effort yet.")
        return lines
    lines.extend(
        [
            "| Category | Time | Share |",
            "| --- | --- | --- |",
        ]
    )
    for entry in rows:
        lines.append(
            f"| {_escape_cell(entry.category_label)} | {_format_time(entry.time, unit)} | "
            f"{entry.percentage:.1f}% |"
        )
    return lines


def _render_cost_table(report: EstimationReport) -> list[str]:
    costs = report.costs
    unit = costs.time_unit
    return [
        f"## Costs ({costs.confidence} confidence)",
        "",
        "| Bound | Time | Cost |",
        "| --- | --- | --- |",
        f"| Maximum | {_format_time(costs.max.time, unit)} | "
        f"{_format_cost(costs.max.cost, costs.currency)} |",
        f"| Minimum | {_format_time(costs.min.time, unit)} | "
        f"{_format_cost(costs.min.cost, costs.currency)} |",
    ]


def render_summary(report: EstimationReport) -> str:
    """Render the short plain-text summary printed by ``guesstimate summary``."""
    unit = report.time_unit
    stats = report.statistics
    lines = [
        f"Project: {report.label}",
        f"Tasks: {stats.task_count}",
        "",
        "Time Estimation:",
    ]
    labels = [f"{interval.level} confidence:" for interval in stats.confidence]
    width = max((len(label) for label in labels), default=0)
    for label, interval in reversed(list(zip(labels, stats.confidence))):
        label = label.ljust(width)
        lines.append(f"  {label} {interval.mean:.2f} ± {interval.deviation:.2f} {unit}")
    lines.append("")

    rows = [entry for entry in report.categories if entry.percentage > 0]
    if rows:
        lines.append("Category Repartition:")
        for entry in rows:
            lines.append(
                f"  {entry.category_label}: {entry.percentage:.1f}% ({entry.time:.2f} {unit})"
            )
        lines.append("")

    costs = report.costs
    lines.extend(
        [
            f"Cost Estimation ({costs.confidence} confidence):",
            f"  Maximum: {costs.max.cost:.2f} {costs.currency} ({costs.max.time:.2f} {unit})",
            f"  Minimum: {costs.min.cost:.2f} {costs.currency} ({costs.min.time:.2f} {unit})",
        ]
    )
    return "\n".join(lines) + "\n"


def _format_time(value: float, unit: str) -> str:
    rounded = round(value, 2)
    if abs(rounded - int(rounded)) < 1e-9:
        return f"{int(rounded)} {unit}"
    return f"{rounded:.2f} {unit}"


def _format_cost(value: float, currency: str) -> str:
    return f"{value:,.2f} {currency}".rstrip()


def _escape_cell(value: str) -> str:
    normalized = value.replace("\r\n", "\n").replace("\r", "\n").replace("\n", "<br>")
    return normalized.replace("|", "\\|")

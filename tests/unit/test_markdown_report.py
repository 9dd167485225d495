"""Tests for the Markdown report and plain-text summary renderers."""

from __future__ import annotations

from guesstimate.core.estimation import Estimation, new_estimation
from guesstimate.core.models import Config
from guesstimate.core.task import Estimations, Task
from guesstimate.render.markdown_report import render_markdown_report, render_summary
from guesstimate.render.report_models import build_report


def _markdown(estimation: Estimation, config: Config) -> str:
    return render_markdown_report(build_report(estimation, config))


def _summary(estimation: Estimation, config: Config) -> str:
    return render_summary(build_report(estimation, config))


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


def test_markdown_has_title_and_sections(
    two_task_estimation: Estimation, dev_config: Config
) -> None:
    report = _markdown(two_task_estimation, dev_config)

    assert report.startswith("# Website\n")
    for heading in (
        "## Tasks",
        "## Estimation",
        "## Category Repartition",
        "## Costs (99.7% confidence)",
    ):
        assert heading in report


def test_markdown_task_rows(two_task_estimation: Estimation, dev_config: Config) -> None:
    report = _markdown(two_task_estimation, dev_config)

    assert "| Task A | Development | 2 md | 4 md | 6 md | 4 md | 0.67 md |" in report
    assert "| Task B | Development | 1 md | 2 md | 3 md | 2 md | 0.33 md |" in report
    assert report.index("Task A") < report.index("Task B")


def test_markdown_confidence_rows_widest_first(
    two_task_estimation: Estimation, dev_config: Config
) -> None:
    report = _markdown(two_task_estimation, dev_config)

    assert "| 99.7% | 6 md ± 2.24 md | 3.76 md | 8.24 md |" in report
    assert report.index("| 99.7% |") < report.index("| 90% |") < report.index("| 68% |")


def test_markdown_category_and_cost_tables(
    two_task_estimation: Estimation, dev_config: Config
) -> None:
    report = _markdown(two_task_estimation, dev_config)

    assert "| Development | 6 md | 100.0% |" in report
    assert "| Maximum | 8.24 md | 4,118.03 EUR |" in report
    assert "| Minimum | 3.76 md | 1,881.97 EUR |" in report


def test_markdown_hides_unused_categories(
    two_task_estimation: Estimation, multi_category_config: Config
) -> None:
    report = _markdown(two_task_estimation, multi_category_config)

    assert "| Development | 6 md | 100.0% |" in report
    assert "| Testing |" not in report


def test_markdown_includes_description(dev_config: Config) -> None:
    report = _markdown(new_estimation("Site", "Scope: landing pages"), dev_config)

    assert "# Site\n\nScope: landing pages\n" in report


def test_markdown_empty_estimation(dev_config: Config) -> None:
    report = _markdown(new_estimation("Empty"), dev_config)

    assert "No tasks." in report
    assert "No estimated effort yet." in report
    assert "| Maximum | 0 md | 0.00 EUR |" in report


def test_markdown_escapes_pipes_and_newlines(dev_config: Config) -> None:
    estimation = new_estimation("Escapes")
    estimation.add_task(
        Task(label="API | auth\nlayer", category="dev", estimations=Estimations(1, 1, 1))
    )

    assert "| API \\| auth<br>layer |" in _markdown(estimation, dev_config)


def test_markdown_rounded_times(two_task_estimation: Estimation, dev_config: Config) -> None:
    config = dev_config.model_copy(update={"round_up_estimations": True})
    report = _markdown(two_task_estimation, config)

    assert "| 99.7% | 6 md ± 3 md | 4 md | 9 md |" in report
    assert "| Maximum | 9 md | 4,118.03 EUR |" in report


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def test_summary_layout(two_task_estimation: Estimation, dev_config: Config) -> None:
    summary = _summary(two_task_estimation, dev_config)

    assert summary.splitlines() == [
        "Project: Website",
        "Tasks: 2",
        "",
        "Time Estimation:",
        "  99.7% confidence: 6.00 ± 2.24 md",
        "  90% confidence:   6.00 ± 1.23 md",
        "  68% confidence:   6.00 ± 0.75 md",
        "",
        "Category Repartition:",
        "  Development: 100.0% (6.00 md)",
        "",
        "Cost Estimation (99.7% confidence):",
        "  Maximum: 4118.03 EUR (8.24 md)",
        "  Minimum: 1881.97 EUR (3.76 md)",
    ]


def test_summary_without_effort_skips_repartition(dev_config: Config) -> None:
    summary = _summary(new_estimation("Empty"), dev_config)

    assert "Tasks: 0" in summary
    assert "Category Repartition:" not in summary
    assert "  Maximum: 0.00 EUR (0.00 md)" in summary

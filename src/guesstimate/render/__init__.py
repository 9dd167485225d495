"""Output rendering modules."""

from guesstimate.render.json_report import render_json_report, render_yaml_report
from guesstimate.render.markdown_report import render_markdown_report, render_summary
from guesstimate.render.report_models import (
    EstimationReport,
    ReportCategory,
    ReportConfidence,
    ReportCost,
    ReportCosts,
    ReportStatistics,
    ReportTask,
    build_report,
)

__all__ = [
    "EstimationReport",
    "ReportCategory",
    "ReportConfidence",
    "ReportCost",
    "ReportCosts",
    "ReportStatistics",
    "ReportTask",
    "build_report",
    "render_json_report",
    "render_markdown_report",
    "render_summary",
    "render_yaml_report",
]

"""JSON and YAML report renderers."""

from __future__ import annotations

import json
from typing import Any

import yaml

from guesstimate.render.report_models import EstimationReport, ReportCost, ReportTask


def render_json_report(report: EstimationReport) -> str:
    """Render an estimation report as indented JSON."""
    payload = _build_payload(report)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def render_yaml_report(report: EstimationReport) -> str:
    """Render the same payload as :func:`render_json_report`, as YAML."""
    return yaml.safe_dump(_build_payload(report), sort_keys=False, allow_unicode=True)


def _build_payload(report: EstimationReport) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": report.id,
        "label": report.label,
    }
    if report.description:
        payload["description"] = report.description
    payload.update(
        {
            "createdAt": report.created_at_text,
            "updatedAt": report.updated_at_text,
            "tasks": [_task_payload(task) for task in report.tasks],
            "statistics": {
                "taskCount": report.statistics.task_count,
                "weightedMean": report.statistics.weighted_mean,
                "standardDeviation": report.statistics.standard_deviation,
                **{
                    _confidence_key(interval.level): {
                        "level": interval.level,
                        "mean": interval.mean,
                        "deviation": interval.deviation,
                        "min": interval.min,
                        "max": interval.max,
                    }
                    for interval in report.statistics.confidence
                },
            },
            "categoryDistribution": [
                {
                    "categoryId": entry.category_id,
                    "categoryLabel": entry.category_label,
                    "time": entry.time,
                    "percentage": entry.percentage,
                }
                for entry in report.categories
            ],
            "costs": {
                "confidence": report.costs.confidence,
                "currency": report.costs.currency,
                "timeUnit": report.costs.time_unit,
                "max": _cost_payload(report.costs.max),
                "min": _cost_payload(report.costs.min),
                "byCategory": {
                    category_id: _cost_payload(cost)
                    for category_id, cost in report.costs.by_category.items()
                },
            },
        }
    )
    return payload


def _task_payload(task: ReportTask) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": task.id,
        "label": task.label,
    }
    if task.description:
        payload["description"] = task.description
    payload.update(
        {
            "category": task.category,
            "categoryLabel": task.category_label,
            "estimations": {
                "optimistic": task.optimistic,
                "likely": task.likely,
                "pessimistic": task.pessimistic,
            },
            "calculated": {
                "weightedMean": task.weighted_mean,
                "standardDeviation": task.standard_deviation,
            },
        }
    )
    return payload


def _cost_payload(cost: ReportCost) -> dict[str, float]:
    return {"time": cost.time, "cost": cost.cost}


def _confidence_key(level: str) -> str:
    """Map a level name to its payload key: ``"99.7%"`` -> ``"confidence997"``."""
    return "confidence" + level.rstrip("%").replace(".", "")

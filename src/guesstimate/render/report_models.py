"""Shared report data models for renderers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from guesstimate.core.estimation import Estimation
from guesstimate.core.models import ConfidenceLevel, Config
from guesstimate.core.stats import (
    CONFIDENCE_997,
    CONFIDENCE_LEVELS,
    compute_category_distribution,
    compute_confidence_interval,
    compute_min_max_costs,
    compute_project_estimation,
    format_estimation,
)
from guesstimate.core.task import Task

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class ReportTask:
    """Flattened per-task report row for renderers."""

    id: str
    label: str
    description: str
    category: str
    category_label: str
    optimistic: float
    likely: float
    pessimistic: float
    weighted_mean: float
    standard_deviation: float

    @classmethod
    def from_task(cls, task: Task, config: Config) -> "ReportTask":
        """Construct a report row from a Task, applying the rounding policy."""
        round_up = config.round_up_estimations
        est = task.estimations
        return cls(
            id=task.id,
            label=task.label,
            description=task.description,
            category=task.category,
            category_label=config.get_task_category(task.category).label,
            optimistic=est.optimistic,
            likely=est.likely,
            pessimistic=est.pessimistic,
            weighted_mean=format_estimation(task.weighted_mean(), round_up),
            standard_deviation=format_estimation(task.standard_deviation(), round_up),
        )


@dataclass(frozen=True)
class ReportConfidence:
    """One confidence interval, rounded for display."""

    level: str
    mean: float
    deviation: float
    min: float
    max: float


@dataclass(frozen=True)
class ReportStatistics:
    """Project-level PERT statistics."""

    task_count: int
    weighted_mean: float
    standard_deviation: float
    confidence: tuple[ReportConfidence, ...]


@dataclass(frozen=True)
class ReportCategory:
    """One row of the category repartition."""

    category_id: str
    category_label: str
    time: float
    percentage: float


@dataclass(frozen=True)
class ReportCost:
    """A time/cost pair. Costs are never rounded."""

    time: float
    cost: float


@dataclass(frozen=True)
class ReportCosts:
    """Cost bounds at the report's confidence level."""

    confidence: str
    currency: str
    time_unit: str
    min: ReportCost
    max: ReportCost
    by_category: Mapping[str, ReportCost]


@dataclass(frozen=True)
class EstimationReport:
    """Renderer input bundle for a full estimation report."""

    id: str
    label: str
    description: str
    created_at: datetime
    updated_at: datetime
    time_unit: str
    tasks: tuple[ReportTask, ...]
    statistics: ReportStatistics
    categories: tuple[ReportCategory, ...]
    costs: ReportCosts

    @property
    def created_at_text(self) -> str:
        return self.created_at.strftime(TIMESTAMP_FORMAT)

    @property
    def updated_at_text(self) -> str:
        return self.updated_at.strftime(TIMESTAMP_FORMAT)


def build_report(
    estimation: Estimation, config: Config, level: ConfidenceLevel = CONFIDENCE_997
) -> EstimationReport:
    """Compute everything a renderer needs from an estimation and the global config.

    The estimation's own parameters take precedence over ``config``. Costs
    are bounded by the confidence interval at ``level``.
    """
    effective = estimation.effective_config(config)
    round_up = effective.round_up_estimations

    project = compute_project_estimation(estimation)
    confidence = tuple(
        ReportConfidence(
            level=interval.level.name,
            mean=format_estimation(interval.mean, round_up),
            deviation=format_estimation(interval.deviation, round_up),
            min=format_estimation(interval.min, round_up),
            max=format_estimation(interval.max, round_up),
        )
        for interval in (
            compute_confidence_interval(project, interval_level)
            for interval_level in CONFIDENCE_LEVELS
        )
    )

    categories = tuple(
        ReportCategory(
            category_id=entry.category_id,
            category_label=entry.category_label,
            time=format_estimation(entry.time, round_up),
            percentage=entry.percentage,
        )
        for entry in compute_category_distribution(estimation, effective)
    )

    costs = compute_min_max_costs(estimation, effective, level)
    by_category = {
        category_id: ReportCost(time=format_estimation(detail.time, round_up), cost=detail.cost)
        for category_id, detail in costs.max.details.items()
    }

    return EstimationReport(
        id=estimation.id,
        label=estimation.label,
        description=estimation.description,
        created_at=estimation.created_at,
        updated_at=estimation.updated_at,
        time_unit=effective.time_unit.acronym,
        tasks=tuple(ReportTask.from_task(task, effective) for task in estimation.ordered_tasks()),
        statistics=ReportStatistics(
            task_count=len(estimation),
            weighted_mean=format_estimation(project.weighted_mean, round_up),
            standard_deviation=format_estimation(project.standard_deviation, round_up),
            confidence=confidence,
        ),
        categories=categories,
        costs=ReportCosts(
            confidence=level.name,
            currency=effective.currency,
            time_unit=effective.time_unit.acronym,
            min=ReportCost(
                time=format_estimation(costs.min.total_time, round_up),
                cost=costs.min.total_cost,
            ),
            max=ReportCost(
                time=format_estimation(costs.max.total_time, round_up),
                cost=costs.max.total_cost,
            ),
            by_category=by_category,
        ),
    )

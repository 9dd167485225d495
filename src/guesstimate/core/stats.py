"""PERT statistics and cost projections for estimations.

Tasks are treated as independent: project means add up and so do variances.
Aggregations walk tasks in display order, so a project total is exactly the
left-to-right sum of the per-task values.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from guesstimate.core.estimation import Estimation
from guesstimate.core.models import (
    CategoryCost,
    CategoryDistribution,
    ConfidenceInterval,
    ConfidenceLevel,
    Config,
    CostEstimation,
    EstimationResult,
    MinMaxCost,
)
from guesstimate.core.task import Task

logger = logging.getLogger("guesstimate")

CONFIDENCE_68 = ConfidenceLevel(name="68%", multiplier=1.0)
CONFIDENCE_90 = ConfidenceLevel(name="90%", multiplier=1.645)
CONFIDENCE_997 = ConfidenceLevel(name="99.7%", multiplier=3.0)

CONFIDENCE_LEVELS: tuple[ConfidenceLevel, ...] = (CONFIDENCE_68, CONFIDENCE_90, CONFIDENCE_997)

_CONFIDENCE_ALIASES: dict[str, ConfidenceLevel] = {
    "68": CONFIDENCE_68,
    "90": CONFIDENCE_90,
    "99.7": CONFIDENCE_997,
    "997": CONFIDENCE_997,
}


def get_confidence_level(name: str) -> ConfidenceLevel:
    """Resolve a confidence level from ``"68%"``, ``"90"``, ``"99.7"`` and similar."""
    key = name.strip().rstrip("%")
    try:
        return _CONFIDENCE_ALIASES[key]
    except KeyError:
        known = ", ".join(level.name for level in CONFIDENCE_LEVELS)
        raise ValueError(f"Unknown confidence level {name!r}; expected one of {known}") from None


def _aggregate(tasks: Iterable[Task]) -> EstimationResult:
    total_mean = 0.0
    total_variance = 0.0
    for task in tasks:
        total_mean += task.weighted_mean()
        total_variance += task.standard_deviation() ** 2
    return EstimationResult(
        weighted_mean=total_mean,
        standard_deviation=math.sqrt(total_variance),
    )


def compute_task_estimation(task: Task) -> EstimationResult:
    """Return the weighted mean and standard deviation of a single task."""
    return EstimationResult(
        weighted_mean=task.weighted_mean(),
        standard_deviation=task.standard_deviation(),
    )


def compute_project_estimation(estimation: Estimation) -> EstimationResult:
    """Sum task means and combine deviations as sqrt(sum of variances)."""
    return _aggregate(estimation.ordered_tasks())


def compute_category_estimation(estimation: Estimation, category_id: str) -> EstimationResult:
    """Same as :func:`compute_project_estimation`, restricted to one category."""
    return _aggregate(task for task in estimation.ordered_tasks() if task.category == category_id)


def compute_confidence_interval(
    result: EstimationResult,
    level: ConfidenceLevel,
    *,
    clamp: bool = False,
) -> ConfidenceInterval:
    """Return ``mean +/- multiplier * sd``; ``clamp`` floors the lower bound at 0."""
    deviation = result.standard_deviation * level.multiplier
    lower = result.weighted_mean - deviation
    if clamp:
        lower = max(0.0, lower)
    return ConfidenceInterval(
        level=level,
        mean=result.weighted_mean,
        deviation=deviation,
        min=lower,
        max=result.weighted_mean + deviation,
    )


def compute_category_distribution(
    estimation: Estimation, config: Config
) -> list[CategoryDistribution]:
    """Share of the project's weighted mean per category.

    Configured categories come first, in declaration order and even when no
    task uses them, followed by unknown categories referenced by tasks. An
    empty list is returned when the project's weighted mean is 0.
    """
    project = compute_project_estimation(estimation)
    if project.weighted_mean == 0:
        return []

    category_ids: list[str] = list(config.task_categories)
    for task in estimation.ordered_tasks():
        if task.category not in category_ids:
            category_ids.append(task.category)

    distributions: list[CategoryDistribution] = []
    for category_id in category_ids:
        category = config.get_task_category(category_id)
        category_result = compute_category_estimation(estimation, category_id)
        distributions.append(
            CategoryDistribution(
                category_id=category_id,
                category_label=category.label,
                time=category_result.weighted_mean,
                percentage=category_result.weighted_mean / project.weighted_mean * 100,
            )
        )
    return distributions


def _allocate(
    total_time: float,
    distribution: list[CategoryDistribution],
    config: Config,
) -> CostEstimation:
    details: dict[str, CategoryCost] = {}
    time_sum = 0.0
    cost_sum = 0.0
    for entry in distribution:
        category = config.get_task_category(entry.category_id)
        time = entry.percentage / 100 * total_time
        cost = time * category.cost_per_time_unit
        details[entry.category_id] = CategoryCost(
            time=time,
            cost=cost,
            cost_per_unit=category.cost_per_time_unit,
        )
        time_sum += time
        cost_sum += cost
    return CostEstimation(total_time=time_sum, total_cost=cost_sum, details=details)


def compute_min_max_costs(
    estimation: Estimation,
    config: Config,
    level: ConfidenceLevel = CONFIDENCE_997,
) -> MinMaxCost:
    """Cost bounds at ``level``, allocated across categories by their share of effort.

    Minimum time is ``max(0, mean - multiplier * sd)``, maximum time is
    ``mean + multiplier * sd``.
    """
    interval = compute_confidence_interval(
        compute_project_estimation(estimation), level, clamp=True
    )
    distribution = compute_category_distribution(estimation, config)
    logger.debug(
        "Cost bounds at %s: time %.3f..%.3f across %d categories",
        level.name,
        interval.min,
        interval.max,
        len(distribution),
    )
    return MinMaxCost(
        min=_allocate(interval.min, distribution, config),
        max=_allocate(interval.max, distribution, config),
    )


def format_estimation(value: float, round_up: bool) -> float:
    """Round ``value`` up to the next integer when ``round_up`` is set."""
    if round_up:
        return float(math.ceil(value))
    return value

"""Core estimation models and algorithms."""

from guesstimate.core.estimation import Estimation, new_estimation
from guesstimate.core.models import (
    DEFAULT_AUTO_ESTIMATION_MULTIPLIER,
    DEFAULT_COST_PER_TIME_UNIT,
    CategoryCost,
    CategoryDistribution,
    ConfidenceInterval,
    ConfidenceLevel,
    Config,
    CostEstimation,
    EstimationParams,
    EstimationResult,
    MinMaxCost,
    TaskCategory,
    TimeUnit,
)
from guesstimate.core.stats import (
    CONFIDENCE_68,
    CONFIDENCE_90,
    CONFIDENCE_997,
    CONFIDENCE_LEVELS,
    compute_category_distribution,
    compute_category_estimation,
    compute_confidence_interval,
    compute_min_max_costs,
    compute_project_estimation,
    compute_task_estimation,
    format_estimation,
    get_confidence_level,
)
from guesstimate.core.task import (
    Estimations,
    Task,
    TaskID,
    auto_fill_estimations,
    generate_id,
    new_task,
)

__all__ = [
    "CONFIDENCE_68",
    "CONFIDENCE_90",
    "CONFIDENCE_997",
    "CONFIDENCE_LEVELS",
    "DEFAULT_AUTO_ESTIMATION_MULTIPLIER",
    "DEFAULT_COST_PER_TIME_UNIT",
    "CategoryCost",
    "CategoryDistribution",
    "ConfidenceInterval",
    "ConfidenceLevel",
    "Config",
    "CostEstimation",
    "Estimation",
    "EstimationParams",
    "EstimationResult",
    "Estimations",
    "MinMaxCost",
    "Task",
    "TaskCategory",
    "TaskID",
    "TimeUnit",
    "auto_fill_estimations",
    "compute_category_distribution",
    "compute_category_estimation",
    "compute_confidence_interval",
    "compute_min_max_costs",
    "compute_project_estimation",
    "compute_task_estimation",
    "format_estimation",
    "generate_id",
    "get_confidence_level",
    "new_estimation",
    "new_task",
]

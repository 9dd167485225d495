"""Pydantic models for estimation configuration and result dataclasses."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_AUTO_ESTIMATION_MULTIPLIER = 0.33
DEFAULT_COST_PER_TIME_UNIT = 500.0

logger = logging.getLogger("guesstimate")


# ---------------------------------------------------------------------------
# Pydantic config models (input validation)
# ---------------------------------------------------------------------------


class TaskCategory(BaseModel):
    """A cost-rate classification applied to tasks.

    ``id`` is not part of the YAML shape: it is the key of the category in the
    ``taskCategories`` mapping and is filled in by :class:`Config`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    id: str = Field(default="", exclude=True)
    label: str
    cost_per_time_unit: Annotated[float, Field(ge=0)] = Field(
        default=DEFAULT_COST_PER_TIME_UNIT, alias="costPerTimeUnit"
    )


class TimeUnit(BaseModel):
    """Unit in which estimates are expressed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    acronym: str


def _bind_category_ids(
    categories: Mapping[str, TaskCategory] | None,
) -> dict[str, TaskCategory] | None:
    if categories is None:
        return None
    return {
        category_id: category.model_copy(update={"id": category_id})
        for category_id, category in categories.items()
    }


class Config(BaseModel):
    """Global configuration: categories, time unit, currency and auto-fill policy."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    task_categories: dict[str, TaskCategory] = Field(
        default_factory=dict, alias="taskCategories"
    )
    time_unit: TimeUnit = Field(
        default_factory=lambda: TimeUnit(label="man-day", acronym="md"), alias="timeUnit"
    )
    currency: str = ""
    round_up_estimations: bool = Field(default=False, alias="roundUpEstimations")
    auto_estimation_multiplier: Optional[float] = Field(
        default=None, alias="autoEstimationMultiplier"
    )

    @field_validator("task_categories")
    @classmethod
    def bind_category_ids(cls, value: dict[str, TaskCategory]) -> dict[str, TaskCategory]:
        """Fill each category id from its mapping key."""
        return _bind_category_ids(value) or {}

    def get_task_category(self, category_id: str) -> TaskCategory:
        """Return the configured category, or a synthesized one for unknown ids."""
        category = self.task_categories.get(category_id)
        if category is not None:
            return category
        logger.debug("Unknown category %r; using synthesized default", category_id)
        return TaskCategory(
            id=category_id,
            label=category_id,
            cost_per_time_unit=DEFAULT_COST_PER_TIME_UNIT,
        )

    def get_first_category_id(self) -> str | None:
        """Return the first declared category id, or None when none is declared."""
        return next(iter(self.task_categories), None)

    def get_auto_estimation_multiplier(self) -> float:
        """Return the auto-fill multiplier, falling back to the default when unset or <= 0."""
        multiplier = self.auto_estimation_multiplier
        if multiplier is None or multiplier <= 0:
            logger.debug(
                "Auto-estimation multiplier %r not usable; using default %.2f",
                multiplier,
                DEFAULT_AUTO_ESTIMATION_MULTIPLIER,
            )
            return DEFAULT_AUTO_ESTIMATION_MULTIPLIER
        return multiplier

    def with_params(self, params: "EstimationParams | None") -> "Config":
        """Return a copy where the project-level parameters shadow global values."""
        if params is None:
            return self
        update: dict[str, object] = {}
        if params.task_categories:
            update["task_categories"] = dict(params.task_categories)
        if params.time_unit is not None:
            update["time_unit"] = params.time_unit
        if params.currency:
            update["currency"] = params.currency
        if params.round_up_estimations is not None:
            update["round_up_estimations"] = params.round_up_estimations
        if not update:
            return self
        return self.model_copy(update=update)


class EstimationParams(BaseModel):
    """Project-specific parameters that override the global configuration."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    task_categories: Optional[dict[str, TaskCategory]] = Field(
        default=None, alias="taskCategories"
    )
    time_unit: Optional[TimeUnit] = Field(default=None, alias="timeUnit")
    currency: Optional[str] = None
    round_up_estimations: Optional[bool] = Field(default=None, alias="roundUpEstimations")

    @field_validator("task_categories")
    @classmethod
    def bind_category_ids(
        cls, value: dict[str, TaskCategory] | None
    ) -> dict[str, TaskCategory] | None:
        return _bind_category_ids(value)


# ---------------------------------------------------------------------------
# Result dataclasses (frozen, output-only)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EstimationResult:
    """Aggregated PERT output for a task, a category or a whole project."""

    weighted_mean: float
    standard_deviation: float


@dataclass(frozen=True)
class ConfidenceLevel:
    """A confidence level expressed as a standard-deviation multiplier."""

    name: str
    multiplier: float


@dataclass(frozen=True)
class ConfidenceInterval:
    """Time bounds around the weighted mean at one confidence level."""

    level: ConfidenceLevel
    mean: float
    deviation: float
    min: float
    max: float


@dataclass(frozen=True)
class CategoryDistribution:
    """Share of the project's weighted mean that falls in one category."""

    category_id: str
    category_label: str
    time: float
    percentage: float


@dataclass(frozen=True)
class CategoryCost:
    """Time and cost allocated to one category."""

    time: float
    cost: float
    cost_per_unit: float


@dataclass(frozen=True)
class CostEstimation:
    """Total time and cost with the per-category breakdown."""

    total_time: float
    total_cost: float
    details: Mapping[str, CategoryCost]


@dataclass(frozen=True)
class MinMaxCost:
    """Cost bounds at one confidence level."""

    min: CostEstimation
    max: CostEstimation

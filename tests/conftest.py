"""Shared fixtures for guesstimate test suite."""

from __future__ import annotations

import pytest

from guesstimate.core.estimation import Estimation, new_estimation
from guesstimate.core.models import Config, TaskCategory, TimeUnit
from guesstimate.core.task import Estimations, Task


@pytest.fixture
def dev_config() -> Config:
    """A config with a single 'dev' category at 500 per unit, no rounding."""
    return Config(
        task_categories={"dev": TaskCategory(label="Development", cost_per_time_unit=500)},
        time_unit=TimeUnit(label="man-day", acronym="md"),
        currency="EUR",
        round_up_estimations=False,
        auto_estimation_multiplier=0.33,
    )


@pytest.fixture
def multi_category_config() -> Config:
    """Three categories with distinct rates."""
    return Config(
        task_categories={
            "dev": TaskCategory(label="Development", cost_per_time_unit=500),
            "qa": TaskCategory(label="Testing", cost_per_time_unit=400),
            "pm": TaskCategory(label="Project Management", cost_per_time_unit=600),
        },
        time_unit=TimeUnit(label="man-day", acronym="md"),
        currency="EUR",
    )


def make_task(
    label: str,
    category: str,
    optimistic: float,
    likely: float,
    pessimistic: float,
) -> Task:
    """Build a task with explicit estimates, bypassing auto-fill."""
    return Task(
        label=label,
        category=category,
        estimations=Estimations(optimistic=optimistic, likely=likely, pessimistic=pessimistic),
    )


@pytest.fixture
def two_task_estimation() -> Estimation:
    """Task A (2/4/6) and task B (1/2/3), both in 'dev'."""
    estimation = new_estimation("Website")
    estimation.add_task(make_task("Task A", "dev", 2, 4, 6))
    estimation.add_task(make_task("Task B", "dev", 1, 2, 3))
    return estimation

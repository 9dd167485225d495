"""YAML file persistence for estimations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from guesstimate.adapters.config_loader import format_validation_errors
from guesstimate.core.estimation import Estimation, new_estimation
from guesstimate.core.models import EstimationParams
from guesstimate.core.task import Estimations, Task

ESTIMATION_SUFFIX = ".estimation.yml"

logger = logging.getLogger("guesstimate")


# ---------------------------------------------------------------------------
# Document models (file shape)
# ---------------------------------------------------------------------------


class EstimationsDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    optimistic: float = 0.0
    likely: float = 0.0
    pessimistic: float = 0.0


class TaskDocument(BaseModel):
    """One task as stored under ``tasks:``."""

    model_config = ConfigDict(extra="forbid")

    id: str = ""
    label: str
    description: str = ""
    category: str = ""
    estimations: EstimationsDocument = Field(default_factory=EstimationsDocument)

    @classmethod
    def from_task(cls, task: Task) -> "TaskDocument":
        est = task.estimations
        return cls(
            id=task.id,
            label=task.label,
            description=task.description,
            category=task.category,
            estimations=EstimationsDocument(
                optimistic=est.optimistic,
                likely=est.likely,
                pessimistic=est.pessimistic,
            ),
        )

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            label=self.label,
            description=self.description,
            category=self.category,
            estimations=Estimations(
                optimistic=self.estimations.optimistic,
                likely=self.estimations.likely,
                pessimistic=self.estimations.pessimistic,
            ),
        )


class EstimationDocument(BaseModel):
    """A whole estimation file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str
    label: str
    description: str = ""
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    ordering: Optional[list[str]] = None
    tasks: Optional[dict[str, TaskDocument]] = None
    params: Optional[EstimationParams] = None

    @classmethod
    def from_estimation(cls, estimation: Estimation) -> "EstimationDocument":
        return cls(
            id=estimation.id,
            label=estimation.label,
            description=estimation.description,
            created_at=estimation.created_at,
            updated_at=estimation.updated_at,
            ordering=list(estimation.task_ids),
            tasks={task.id: TaskDocument.from_task(task) for task in estimation.ordered_tasks()},
            params=estimation.params,
        )

    def to_estimation(self) -> Estimation:
        tasks: dict[str, Task] = {}
        for key, document in (self.tasks or {}).items():
            if document.id != key:
                if document.id:
                    logger.warning(
                        "Estimation %s: task stored under %r has id %r; using the key",
                        self.id,
                        key,
                        document.id,
                    )
                document = document.model_copy(update={"id": key})
            tasks[key] = document.to_task()
        return Estimation.restore(
            id=self.id,
            label=self.label,
            description=self.description,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
            tasks=tasks,
            ordering=self.ordering or [],
            params=self.params,
        )

    def to_yaml_dict(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for task in payload.get("tasks", {}).values():
            if not task.get("description"):
                task.pop("description", None)
        return payload


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def default_estimation_filename(label: str) -> str:
    """Derive ``<label>.estimation.yml`` from a project label."""
    return label.strip().lower().replace(" ", "-") + ESTIMATION_SUFFIX


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class EstimationStore:
    """Reads and writes ``*.estimation.yml`` files. Last write wins."""

    def load(self, path: str | Path) -> Estimation:
        """Load and validate an estimation file."""
        estimation_path = Path(path)
        if not estimation_path.exists():
            raise FileNotFoundError(f"Estimation file not found: {estimation_path}")

        try:
            raw_data = yaml.safe_load(estimation_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(
                f"Failed to parse YAML estimation at {estimation_path}: {exc}"
            ) from exc

        if not isinstance(raw_data, dict):
            raise ValueError(
                f"Invalid estimation file at {estimation_path}: root must be a YAML mapping"
            )

        try:
            document = EstimationDocument.model_validate(raw_data)
        except ValidationError as exc:
            detail_text = format_validation_errors(exc)
            raise ValueError(
                f"Invalid estimation file at {estimation_path}:\n{detail_text}"
            ) from exc
        return document.to_estimation()

    def save(self, path: str | Path, estimation: Estimation) -> Path:
        """Write ``estimation`` to ``path`` as YAML."""
        estimation_path = Path(path)
        payload = EstimationDocument.from_estimation(estimation).to_yaml_dict()
        text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
        try:
            estimation_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Failed to write estimation file {estimation_path}: {exc}") from exc
        logger.debug("Saved estimation %s to %s", estimation.id, estimation_path)
        return estimation_path

    def create(self, path: str | Path, label: str, description: str = "") -> Estimation:
        """Create a new, empty estimation file."""
        estimation = new_estimation(label, description)
        self.save(path, estimation)
        return estimation

    def load_or_create(self, path: str | Path, label: str) -> tuple[Estimation, bool]:
        """Load ``path``, creating an empty estimation there when it does not exist.

        Returns the estimation and whether it was created.
        """
        if Path(path).exists():
            return self.load(path), False
        return self.create(path, label), True

    def list_estimations(self, directory: str | Path = ".") -> list[str]:
        """Return the names of estimation files in ``directory``, sorted."""
        root = Path(directory)
        if not root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in root.iterdir()
            if entry.is_file() and entry.name.endswith(ESTIMATION_SUFFIX)
        )

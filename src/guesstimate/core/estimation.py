"""Estimation aggregate: a project owning its tasks and their display order."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Optional

from guesstimate.core.models import Config, EstimationParams
from guesstimate.core.task import Task, TaskID, generate_id

logger = logging.getLogger("guesstimate")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Estimation:
    """A project estimation: tasks keyed by id plus an explicit ordering.

    The task mapping and the ordering always hold the same set of ids. Both
    are private; every mutation goes through the methods below, which update
    the two structures together and touch ``updated_at``.

    Lookups that miss (remove, move, update of an unknown id) return ``False``
    and leave the estimation untouched.
    """

    def __init__(
        self,
        label: str,
        *,
        description: str = "",
        id: Optional[str] = None,  # noqa: A002
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        params: Optional[EstimationParams] = None,
    ) -> None:
        now = _now()
        self.id = id or generate_id()
        self.label = label
        self.description = description
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at
        self.params = params
        self._tasks: dict[TaskID, Task] = {}
        self._ordering: list[TaskID] = []

    @classmethod
    def restore(
        cls,
        *,
        id: str,  # noqa: A002
        label: str,
        description: str,
        created_at: datetime,
        updated_at: datetime,
        tasks: Mapping[TaskID, Task],
        ordering: Iterable[TaskID],
        params: Optional[EstimationParams] = None,
    ) -> "Estimation":
        """Rebuild a persisted estimation, repairing a divergent ordering.

        Ids in the ordering without a task are dropped, duplicates keep their
        first position, and tasks missing from the ordering are appended in
        mapping order.
        """
        estimation = cls(
            label,
            description=description,
            id=id,
            created_at=created_at,
            updated_at=updated_at,
            params=params,
        )
        estimation._tasks = dict(tasks)
        seen: set[TaskID] = set()
        for task_id in ordering:
            if task_id not in estimation._tasks:
                logger.warning(
                    "Estimation %s: ordering references unknown task %r; dropped", id, task_id
                )
                continue
            if task_id in seen:
                logger.warning(
                    "Estimation %s: task %r listed twice in ordering; kept first", id, task_id
                )
                continue
            seen.add(task_id)
            estimation._ordering.append(task_id)
        for task_id in estimation._tasks:
            if task_id not in seen:
                logger.warning(
                    "Estimation %s: task %r missing from ordering; appended", id, task_id
                )
                estimation._ordering.append(task_id)
        return estimation

    # -- read-only views -----------------------------------------------------

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    @property
    def task_ids(self) -> tuple[TaskID, ...]:
        """Task ids in display order."""
        return tuple(self._ordering)

    def get_task(self, task_id: TaskID) -> Task | None:
        return self._tasks.get(task_id)

    def ordered_tasks(self) -> list[Task]:
        """Return tasks in display order, skipping ids that have no task."""
        tasks: list[Task] = []
        for task_id in self._ordering:
            task = self._tasks.get(task_id)
            if task is None:
                logger.warning("Estimation %s: no task for ordered id %r", self.id, task_id)
                continue
            tasks.append(task)
        return tasks

    # -- mutations -----------------------------------------------------------

    def touch(self) -> None:
        self.updated_at = _now()

    def add_task(self, task: Task) -> None:
        """Append ``task`` to the estimation.

        Raises:
            ValueError: if a task with the same id is already present.
        """
        if task.id in self._tasks:
            raise ValueError(f"Task {task.id!r} already exists in estimation {self.id}")
        self._tasks[task.id] = task
        self._ordering.append(task.id)
        self.touch()
        logger.debug("Estimation %s: added task %s", self.id, task.id)

    def remove_task(self, task_id: TaskID) -> bool:
        """Remove a task. Returns False when the id is unknown."""
        if self._tasks.pop(task_id, None) is None:
            return False
        if task_id in self._ordering:
            self._ordering.remove(task_id)
        self.touch()
        logger.debug("Estimation %s: removed task %s", self.id, task_id)
        return True

    def move_task(self, task_id: TaskID, offset: int) -> bool:
        """Move a task ``offset`` positions in the ordering (negative = earlier).

        Returns False, without changing anything, when the id is unknown or
        the destination falls outside the ordering.
        """
        try:
            current = self._ordering.index(task_id)
        except ValueError:
            return False
        target = current + offset
        if target < 0 or target >= len(self._ordering):
            return False
        if offset == 0:
            return True
        self._ordering.insert(target, self._ordering.pop(current))
        self.touch()
        logger.debug(
            "Estimation %s: moved task %s from %d to %d", self.id, task_id, current, target
        )
        return True

    def update_task(self, task: Task) -> bool:
        """Replace the stored task with the same id. Returns False when absent."""
        if task.id not in self._tasks:
            return False
        self._tasks[task.id] = task
        self.touch()
        return True

    # -- policy --------------------------------------------------------------

    def validate(self) -> list[str]:
        """Collect advisory task messages, each prefixed with its task id."""
        errors: list[str] = []
        for task in self.ordered_tasks():
            errors.extend(f"task {task.id}: {message}" for message in task.validate())
        return errors

    def effective_config(self, config: Config) -> Config:
        """Return ``config`` with this estimation's parameter overrides applied."""
        return config.with_params(self.params)


def new_estimation(label: str, description: str = "") -> Estimation:
    """Create an empty estimation with a fresh id and timestamps."""
    return Estimation(label, description=description)

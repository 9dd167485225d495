"""Task entity with three-point estimates and the auto-fill algorithm."""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field

logger = logging.getLogger("guesstimate")

TaskID = str


def generate_id() -> str:
    """Return a short random identifier (first 8 hex chars of a UUID4)."""
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class Estimations:
    """Optimistic / likely / pessimistic estimates, in configured time units."""

    optimistic: float = 0.0
    likely: float = 0.0
    pessimistic: float = 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.optimistic, self.likely, self.pessimistic)


# Products are snapped to 9 decimals before ceil/floor: 300 * (1 - 0.33)
# evaluates just below 201.
def _up(value: float, multiplier: float) -> float:
    return float(math.ceil(round(value * (1 + multiplier), 9)))


def _down(value: float, multiplier: float) -> float:
    return max(0.0, float(math.floor(round(value * (1 - multiplier), 9))))


def auto_fill_estimations(
    optimistic: float,
    likely: float,
    pessimistic: float,
    multiplier: float,
) -> Estimations:
    """Infer missing estimates and enforce O <= L <= P.

    A value <= 0 counts as "not provided". Values synthesized upward
    (towards P) are rounded up, values synthesized downward (towards O) are
    rounded down and never go below 0. Explicit values are kept unless they
    break the ordering, in which case the later value is pushed up from the
    earlier one.
    """
    opt = max(0.0, float(optimistic))
    lik = max(0.0, float(likely))
    pes = max(0.0, float(pessimistic))
    provided = (opt > 0, lik > 0, pes > 0)

    if provided == (True, False, False):
        lik = _up(opt, multiplier)
        pes = _up(lik, multiplier)
    elif provided == (False, True, False):
        opt = _down(lik, multiplier)
        pes = _up(lik, multiplier)
    elif provided == (False, False, True):
        lik = _down(pes, multiplier)
        opt = _down(lik, multiplier)
    elif provided == (True, True, False):
        pes = _up(lik, multiplier)
    elif provided == (True, False, True):
        lik = min(max(float(math.ceil((opt + pes) / 2)), opt), pes)
    elif provided == (False, True, True):
        opt = _down(lik, multiplier)

    # Forward repair: only strict violations move a value, so ties survive.
    if lik < opt:
        lik = _up(opt, multiplier)
    if pes < lik:
        pes = _up(lik, multiplier)

    logger.debug(
        "Auto-filled estimations (%s, %s, %s) -> (%s, %s, %s) with multiplier %.2f",
        optimistic,
        likely,
        pessimistic,
        opt,
        lik,
        pes,
        multiplier,
    )
    return Estimations(optimistic=opt, likely=lik, pessimistic=pes)


@dataclass
class Task:
    """A single estimated unit of work.

    ``id`` is fixed at creation; assigning it again raises ``AttributeError``.
    ``estimations`` is normally written through :meth:`set_estimations`, which
    keeps the triple ordered. Direct assignment is accepted (e.g. when loading
    a file) and any resulting inconsistency is reported by :meth:`validate`.
    """

    label: str
    category: str
    description: str = ""
    estimations: Estimations = field(default_factory=Estimations)
    id: TaskID = field(default_factory=generate_id)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Task.id cannot be changed once set")
        super().__setattr__(name, value)

    def weighted_mean(self) -> float:
        """PERT expected value: (O + 4L + P) / 6."""
        est = self.estimations
        return (est.optimistic + 4 * est.likely + est.pessimistic) / 6

    def standard_deviation(self) -> float:
        """PERT standard deviation: (P - O) / 6."""
        est = self.estimations
        return (est.pessimistic - est.optimistic) / 6

    def set_estimations(
        self,
        optimistic: float,
        likely: float,
        pessimistic: float,
        multiplier: float,
    ) -> None:
        """Set all three estimates, auto-filling missing ones (0) with ``multiplier``."""
        self.estimations = auto_fill_estimations(optimistic, likely, pessimistic, multiplier)

    def validate(self) -> list[str]:
        """Return advisory messages for negative or misordered estimates."""
        est = self.estimations
        errors: list[str] = []
        if est.optimistic < 0:
            errors.append("optimistic estimate must be >= 0")
        if est.likely < 0:
            errors.append("likely estimate must be >= 0")
        if est.pessimistic < 0:
            errors.append("pessimistic estimate must be >= 0")
        if est.likely < est.optimistic:
            errors.append("likely estimate should be >= optimistic estimate")
        if est.pessimistic < est.likely:
            errors.append("pessimistic estimate should be >= likely estimate")
        return errors


def new_task(label: str, category: str) -> Task:
    """Create a task with a fresh id and zeroed estimates."""
    return Task(label=label, category=category)

# model.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple


class RepeatStatus(str, Enum):
    """What a step action (tasklet) hands back to the executor."""
    FINISHED = "FINISHED"
    FAILED = "FAILED"


class StepStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class JobStatus(str, Enum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


# A tasklet takes nothing and returns FINISHED / FAILED (None counts as FINISHED).
Action = Callable[[], Optional[RepeatStatus]]


@dataclass
class StepFailure(Exception):
    """Raised by ExecutionResult.raise_for_status for a FAILED run."""
    job: str
    step: str
    reason: str

    def __str__(self) -> str:
        return f"[{self.job}] step '{self.step}' failed: {self.reason}"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Step:
    """A single named unit of work inside a job."""
    name: str
    action: Action

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Step name must be a non-empty string")
        if not callable(self.action):
            raise TypeError(f"Step '{self.name}' action must be callable, got {type(self.action).__name__}")


@dataclass(frozen=True)
class Job:
    """
    A batch job: a name plus steps that run strictly in the given order.

    The steps are frozen into a tuple at construction, so the order can't
    change once the job exists.
    """
    name: str
    steps: Tuple[Step, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Job name must be a non-empty string")

        steps = tuple(self.steps)
        if not steps:
            raise ValueError(f"Job '{self.name}' must have at least one step")
        for s in steps:
            if not isinstance(s, Step):
                raise TypeError(f"Job '{self.name}' got a non-Step entry: {s!r}")

        names = [s.name for s in steps]
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Job '{self.name}' has duplicate step names: {dupes}")

        # frozen dataclass: bypass __setattr__ to store the normalised tuple
        object.__setattr__(self, "steps", steps)

    @property
    def step_names(self) -> List[str]:
        return [s.name for s in self.steps]


@dataclass
class StepExecution:
    """Outcome of one attempted step."""
    step_name: str
    status: StepStatus
    started_at: datetime
    ended_at: datetime
    error: Optional[str] = None

    @property
    def duration(self) -> float:
        return (self.ended_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_name": self.step_name,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat(),
            "error": self.error,
        }


@dataclass
class ExecutionResult:
    """
    Outcome of one job run.

    Only attempted steps appear in `steps`; anything after the first
    failure has no record at all.
    """
    job_name: str
    status: JobStatus
    steps: List[StepExecution]
    started_at: datetime
    ended_at: datetime
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    failure: Optional[str] = None

    @property
    def completed_steps(self) -> List[str]:
        return [s.step_name for s in self.steps if s.status is StepStatus.SUCCESS]

    @property
    def failed_step(self) -> Optional[str]:
        for s in self.steps:
            if s.status is StepStatus.FAILURE:
                return s.step_name
        return None

    @property
    def duration(self) -> float:
        return (self.ended_at - self.started_at).total_seconds()

    @property
    def exit_code(self) -> int:
        return 0 if self.status is JobStatus.COMPLETED else 1

    def raise_for_status(self) -> None:
        """Raise StepFailure if the run FAILED."""
        if self.status is JobStatus.COMPLETED:
            return
        raise StepFailure(
            job=self.job_name,
            step=self.failed_step or "<unknown>",
            reason=self.failure or "unknown failure",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary (used by `run --json`)."""
        return {
            "run_id": self.run_id,
            "job_name": self.job_name,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat(),
            "failure": self.failure,
            "steps": [s.to_dict() for s in self.steps],
        }

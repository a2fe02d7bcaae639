"""Execution recorders: where the runner reports job and step lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, runtime_checkable

from .model import ExecutionResult, Job, Step, StepExecution


@runtime_checkable
class ExecutionRecorder(Protocol):
    """
    Bookkeeping hooks called by the runner.

    Recorders only observe. Nothing here is transactional and nothing a
    recorder does can change the outcome of a run.
    """

    def job_started(self, job: Job, run_id: str) -> None: ...

    def step_started(self, job: Job, step: Step) -> None: ...

    def step_completed(self, job: Job, execution: StepExecution) -> None: ...

    def job_completed(self, job: Job, result: ExecutionResult) -> None: ...


class NoOpRecorder:
    """Default recorder. Discards everything."""

    def job_started(self, job: Job, run_id: str) -> None:
        pass

    def step_started(self, job: Job, step: Step) -> None:
        pass

    def step_completed(self, job: Job, execution: StepExecution) -> None:
        pass

    def job_completed(self, job: Job, result: ExecutionResult) -> None:
        pass


@dataclass(frozen=True)
class RecordedEvent:
    kind: str  # job_started | step_started | step_completed | job_completed
    job_name: str
    step_name: Optional[str] = None
    status: Optional[str] = None


@dataclass
class InMemoryRecorder:
    """Keeps every event in a list, in the order the runner emitted them."""
    events: List[RecordedEvent] = field(default_factory=list)

    def job_started(self, job: Job, run_id: str) -> None:
        self.events.append(RecordedEvent("job_started", job.name))

    def step_started(self, job: Job, step: Step) -> None:
        self.events.append(RecordedEvent("step_started", job.name, step.name))

    def step_completed(self, job: Job, execution: StepExecution) -> None:
        self.events.append(
            RecordedEvent("step_completed", job.name, execution.step_name, execution.status.value)
        )

    def job_completed(self, job: Job, result: ExecutionResult) -> None:
        self.events.append(RecordedEvent("job_completed", job.name, None, result.status.value))

    def kinds(self) -> List[str]:
        return [e.kind for e in self.events]

    def clear(self) -> None:
        self.events.clear()

from __future__ import annotations

import runpy
import uuid
from pathlib import Path
from typing import Callable, List, Optional

from .logs import get_logger
from .model import (
    ExecutionResult,
    Job,
    JobStatus,
    RepeatStatus,
    Step,
    StepExecution,
    StepFailure,
    StepStatus,
    now_utc,
)
from .recorder import ExecutionRecorder, NoOpRecorder

logger = get_logger(__name__)

__all__ = ["JobRunner", "StepExecutor", "StepFailure", "load_workflow", "run_job"]


# ----------------------------------------------------------------------
# Workflow loading (local file)
# ----------------------------------------------------------------------

def _collect_jobs(wf_path: Path, defined: object) -> List[Job]:
    if isinstance(defined, Job):
        defined = [defined]
    if not isinstance(defined, (list, tuple)):
        raise TypeError(
            f"{wf_path.name}: expected a list of Job, got {type(defined).__name__}. "
            "Define workflow() -> List[Job] or JOBS = [Job, ...]."
        )

    bad = [type(j).__name__ for j in defined if not isinstance(j, Job)]
    if bad:
        raise TypeError(f"{wf_path.name}: only Job entries are allowed, got {', '.join(bad)}")
    if not defined:
        raise ValueError(f"{wf_path.name}: workflow defines no jobs")

    names = [j.name for j in defined]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ValueError(f"{wf_path.name}: duplicate job names {dupes}")

    return list(defined)


def load_workflow(path: str | Path) -> List[Job]:
    """
    Load batch jobs from a python file.

    The file defines either a `workflow()` callable or a `JOBS` value; both
    may hold a single Job or a list of them. Job names must be unique and
    at least one job is required.

    Raises:
      FileNotFoundError: no such file
      ValueError: not a .py file, no jobs, duplicate job names
      TypeError: neither hook defined, or something other than Jobs
    """
    wf_path = Path(path).expanduser().resolve()
    if not wf_path.exists():
        raise FileNotFoundError(f"Workflow file not found: {wf_path}")
    if wf_path.suffix != ".py":
        raise ValueError(f"Workflow must be a .py file, got: {wf_path.name}")

    globals_dict = runpy.run_path(str(wf_path), run_name=f"minibatch_workflow_{wf_path.stem}")

    hook = globals_dict.get("workflow")
    if callable(hook):
        defined = hook()
    elif "JOBS" in globals_dict:
        defined = globals_dict["JOBS"]
    else:
        raise TypeError(f"{wf_path.name}: define workflow() -> List[Job] or JOBS = [Job, ...]")

    jobs = _collect_jobs(wf_path, defined)
    logger.debug("Loaded %d job(s) from %s: %s", len(jobs), wf_path.name, [j.name for j in jobs])
    return jobs


# ----------------------------------------------------------------------
# Recorder notifications
# ----------------------------------------------------------------------

def _notify(hook: Callable[..., None], *args) -> None:
    """Call one recorder hook; a failing recorder is logged and otherwise ignored."""
    try:
        hook(*args)
    except Exception:
        logger.exception("Execution recorder hook %s failed", getattr(hook, "__name__", hook))


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _classify(step: Step, returned: object) -> tuple[StepStatus, Optional[str]]:
    if returned is None or returned is RepeatStatus.FINISHED:
        return StepStatus.SUCCESS, None
    if returned is RepeatStatus.FAILED:
        return StepStatus.FAILURE, f"step '{step.name}' returned FAILED"
    return StepStatus.FAILURE, f"step '{step.name}' returned unexpected value {returned!r}"


class StepExecutor:
    """Runs one step's action and turns whatever happens into a StepExecution."""

    def __init__(self, recorder: Optional[ExecutionRecorder] = None):
        self.recorder = recorder or NoOpRecorder()

    def execute(self, job: Job, step: Step) -> StepExecution:
        """
        Run `step.action` once.

        Exceptions raised by the action are caught, logged and reported as
        FAILURE; they never escape this method.
        """
        _notify(self.recorder.step_started, job, step)
        started = now_utc()

        try:
            returned = step.action()
        except Exception as e:
            logger.exception("Encountered an error executing step %s in job %s", step.name, job.name)
            status, error = StepStatus.FAILURE, f"{type(e).__name__}: {e}"
        else:
            status, error = _classify(step, returned)

        execution = StepExecution(
            step_name=step.name,
            status=status,
            started_at=started,
            ended_at=now_utc(),
            error=error,
        )
        _notify(self.recorder.step_completed, job, execution)
        return execution


def _format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.3f}s"


class JobRunner:
    """
    Runs a job's steps one after another in the calling thread.

    The first FAILURE stops the job; later steps are never attempted and
    get no StepExecution record. No state survives between runs, so running
    the same job twice gives the same statuses in the same order.
    """

    def __init__(
        self,
        recorder: Optional[ExecutionRecorder] = None,
        step_executor: Optional[StepExecutor] = None,
    ):
        self.recorder = recorder or NoOpRecorder()
        self.step_executor = step_executor or StepExecutor(self.recorder)

    def run(self, job: Job) -> ExecutionResult:
        if not isinstance(job, Job):
            raise TypeError(f"JobRunner.run expects a Job, got {type(job).__name__}")

        run_id = uuid.uuid4().hex
        started = now_utc()
        _notify(self.recorder.job_started, job, run_id)
        logger.info("Job: [%s] launched", job.name)

        executions: List[StepExecution] = []
        failure: Optional[str] = None

        for step in job.steps:
            logger.info("Executing step: [%s]", step.name)
            execution = self.step_executor.execute(job, step)
            executions.append(execution)
            logger.debug(
                "Step: [%s] finished with %s in %s",
                step.name,
                execution.status.value,
                _format_duration(execution.duration),
            )

            if execution.status is StepStatus.FAILURE:
                failure = execution.error
                logger.error("Step '%s' failed: %s", step.name, failure)
                break

        result = ExecutionResult(
            job_name=job.name,
            status=JobStatus.FAILED if failure is not None else JobStatus.COMPLETED,
            steps=executions,
            started_at=started,
            ended_at=now_utc(),
            run_id=run_id,
            failure=failure,
        )
        _notify(self.recorder.job_completed, job, result)
        logger.info(
            "Job: [%s] completed with status: [%s] in %s",
            job.name,
            result.status.value,
            _format_duration(result.duration),
        )
        return result


def run_job(job: Job, recorder: Optional[ExecutionRecorder] = None) -> ExecutionResult:
    """Functional shortcut: JobRunner(recorder).run(job)."""
    return JobRunner(recorder=recorder).run(job)

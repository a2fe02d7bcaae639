from .dsl import job, step, wf, JobBuilder, build
from .model import Job, Step, ExecutionResult, StepExecution, RepeatStatus, StepStatus, JobStatus
from .recorder import ExecutionRecorder, NoOpRecorder, InMemoryRecorder
from .runner import JobRunner, StepExecutor, StepFailure, run_job, load_workflow
from .jobs import hello_job

__all__ = [
    "job", "step", "wf", "JobBuilder", "build",
    "Job", "Step", "ExecutionResult", "StepExecution", "RepeatStatus", "StepStatus", "JobStatus",
    "ExecutionRecorder", "NoOpRecorder", "InMemoryRecorder",
    "JobRunner", "StepExecutor", "StepFailure", "run_job", "load_workflow",
    "hello_job",
]

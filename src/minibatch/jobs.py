# jobs.py
# Built-in job definitions. Everything is wired by hand here at start-up.
from __future__ import annotations

from typing import Callable, Dict

from .dsl import build, step
from .logs import get_logger
from .model import Job, Step
from .tasklets import hello_tasklet

logger = get_logger(__name__)


def hello_step_1() -> Step:
    return step("helloStep1", hello_tasklet("Hello, Spring Batch 1!", logger))


def hello_step_2() -> Step:
    return step("helloStep2", hello_tasklet("Hello, Spring Batch 2!", logger))


def hello_job() -> Job:
    """myJob: helloStep1, then helloStep2."""
    return (
        build("myJob")
        .start(hello_step_1())
        .next(hello_step_2())
        .build()
    )


JOBS: Dict[str, Callable[[], Job]] = {
    "myJob": hello_job,
}

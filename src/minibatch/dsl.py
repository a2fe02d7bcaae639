# src/minibatch/dsl.py
from __future__ import annotations

from typing import List, Optional

from .model import Action, Job, Step


# ---------------------------------------------------------------------
# Step helper
# ---------------------------------------------------------------------

def step(name: str, action: Action) -> Step:
    """Create a step that runs `action` once."""
    return Step(name=name, action=action)


# ---------------------------------------------------------------------
# Functional Job helper
# ---------------------------------------------------------------------

def job(name: str, *steps: Step) -> Job:
    """job("x", step(...), step(...)): steps run in the order given."""
    if not steps:
        raise ValueError(f"job({name!r}) must have at least one step")
    return Job(name=name, steps=tuple(steps))


# ---------------------------------------------------------------------
# Builder API: build("myJob").start(a).next(b).build()
# ---------------------------------------------------------------------

class JobBuilder:
    def __init__(self, name: str):
        self.name = name
        self._steps: list[Step] = []

    def start(self, first: Step):
        if self._steps:
            raise ValueError(f"Job '{self.name}' already has a first step ({self._steps[0].name})")
        self._steps.append(first)
        return self

    def next(self, following: Step):
        if not self._steps:
            raise ValueError(f"Job '{self.name}': call start() before next()")
        self._steps.append(following)
        return self

    def build(self) -> Job:
        if not self._steps:
            raise ValueError(f"Job '{self.name}' has no steps")
        return Job(name=self.name, steps=tuple(self._steps))


def build(name: str) -> JobBuilder:
    """Convenience: build('myJob').start(...).next(...).build()"""
    return JobBuilder(name)


# ---------------------------------------------------------------------
# Workflow helper (single-file story)
# ---------------------------------------------------------------------

def wf(*jobs: Job) -> List[Job]:
    """
    Workflow definition helper for files passed to `minibatch run --workflow`.

        from minibatch import wf, job, step

        def workflow():
            return wf(job("nightly", step("a", do_a), step("b", do_b)))

    Or use JOBS directly:
        JOBS = wf(job(...), job(...))
    """
    return list(jobs)


def find_job(jobs: List[Job], name: str) -> Optional[Job]:
    for j in jobs:
        if j.name == name:
            return j
    return None

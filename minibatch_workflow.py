# minibatch_workflow.py
# Example workflow file: `minibatch run --workflow minibatch_workflow.py`
from __future__ import annotations

from minibatch.dsl import wf, job, step
from minibatch.jobs import hello_step_1, hello_step_2
from minibatch.tasklets import hello_tasklet


def workflow():
    return wf(
        # Same wiring as the built-in myJob
        job("myJob", hello_step_1(), hello_step_2()),

        # Single greeting, handy for checking log configuration
        job(
            "greet",
            step("greetStep", hello_tasklet("Hello from a workflow file!")),
        ),
    )

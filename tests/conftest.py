from __future__ import annotations

import logging

import pytest

from minibatch.dsl import step
from minibatch.logs import ROOT_LOGGER
from minibatch.model import RepeatStatus
from minibatch.recorder import InMemoryRecorder
from minibatch.runner import JobRunner


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """CLI tests attach handlers bound to CliRunner streams; drop them afterwards."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("MINIBATCH_LOG_LEVEL", "MINIBATCH_LOG_FORMAT", "MINIBATCH_JOB"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def recorder() -> InMemoryRecorder:
    return InMemoryRecorder()


@pytest.fixture
def runner(recorder) -> JobRunner:
    return JobRunner(recorder=recorder)


@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def make_step(calls):
    """Step factory whose action appends its name to `calls` and returns `outcome`."""

    def _make(name: str, outcome=RepeatStatus.FINISHED, exc: Exception | None = None):
        def action():
            calls.append(name)
            if exc is not None:
                raise exc
            return outcome

        return step(name, action)

    return _make

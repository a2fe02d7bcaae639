from __future__ import annotations

from pathlib import Path

import pytest

from minibatch.runner import load_workflow

ROOT = Path(__file__).resolve().parents[1]

FAILING_WORKFLOW = """
from minibatch import wf, job, step, RepeatStatus

def workflow():
    return wf(job("broken", step("fails", lambda: RepeatStatus.FAILED), step("never", lambda: None)))
"""


def test_load_workflow_function(tmp_path):
    path = tmp_path / "my_workflow.py"
    path.write_text(FAILING_WORKFLOW)

    jobs = load_workflow(path)

    assert [j.name for j in jobs] == ["broken"]
    assert jobs[0].step_names == ["fails", "never"]


def test_load_workflow_jobs_constant(tmp_path):
    path = tmp_path / "const_workflow.py"
    path.write_text(
        "from minibatch import wf, job, step\n"
        "JOBS = wf(job('a', step('s', lambda: None)))\n"
    )

    assert [j.name for j in load_workflow(path)] == ["a"]


def test_load_workflow_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_workflow(tmp_path / "nope.py")


def test_load_workflow_wrong_suffix(tmp_path):
    path = tmp_path / "jobs.txt"
    path.write_text("JOBS = []")
    with pytest.raises(ValueError):
        load_workflow(path)


def test_load_workflow_wrong_shape(tmp_path):
    path = tmp_path / "bad_workflow.py"
    path.write_text("JOBS = ['myJob']\n")
    with pytest.raises(TypeError):
        load_workflow(path)


def test_bundled_example_workflow():
    jobs = load_workflow(ROOT / "minibatch_workflow.py")

    assert [j.name for j in jobs] == ["myJob", "greet"]
    assert jobs[0].step_names == ["helloStep1", "helloStep2"]


def test_load_workflow_rejects_empty_job_list(tmp_path):
    path = tmp_path / "empty_workflow.py"
    path.write_text("JOBS = []\n")

    with pytest.raises(ValueError, match="defines no jobs"):
        load_workflow(path)


def test_load_workflow_rejects_duplicate_job_names(tmp_path):
    path = tmp_path / "dupes_workflow.py"
    path.write_text(
        "from minibatch import wf, job, step\n"
        "JOBS = wf(job('a', step('s', lambda: None)), job('a', step('t', lambda: None)))\n"
    )

    with pytest.raises(ValueError, match="duplicate job names"):
        load_workflow(path)


def test_load_workflow_accepts_single_job(tmp_path):
    path = tmp_path / "single_workflow.py"
    path.write_text(
        "from minibatch import job, step\n"
        "def workflow():\n"
        "    return job('solo', step('s', lambda: None))\n"
    )

    assert [j.name for j in load_workflow(path)] == ["solo"]


def test_load_workflow_without_hook(tmp_path):
    path = tmp_path / "nothing_workflow.py"
    path.write_text("x = 1\n")

    with pytest.raises(TypeError, match="define workflow"):
        load_workflow(path)

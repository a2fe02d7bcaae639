# cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List

import click

from minibatch.dsl import find_job
from minibatch.jobs import JOBS
from minibatch.logs import configure_logging
from minibatch.model import Job
from minibatch.recorder import InMemoryRecorder
from minibatch.runner import JobRunner, load_workflow
from minibatch.settings import Settings
from minibatch.ui.console import Console, get_console, set_console


def _resolve_jobs(workflow: str | None) -> tuple[List[Job], str]:
    """
    Jobs come from a workflow file when one is given, else from the built-in registry.

    Returns:
        (jobs, source label for the run header)
    """
    if workflow is None:
        return [factory() for factory in JOBS.values()], "built-in"

    workflow_path = Path(workflow)
    if not workflow_path.exists() and workflow_path.suffix != ".py":
        workflow_path = Path(str(workflow_path) + ".py")
    return load_workflow(workflow_path), workflow_path.name


def _load_or_exit(ctx: click.Context, workflow: str | None) -> tuple[List[Job], str]:
    console = get_console()
    try:
        return _resolve_jobs(workflow)
    except (FileNotFoundError, ValueError, TypeError) as e:
        console.print_error(
            "Failed to load workflow",
            f"Could not load jobs from {workflow}",
            details=[str(e)],
            suggestion="A workflow file defines workflow() -> List[Job] or JOBS = [Job, ...].",
        )
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level")
@click.option("--quiet", is_flag=True, default=False, help="Only log warnings and errors")
@click.pass_context
def cli(ctx, debug, verbose, quiet):
    """minibatch: run small sequential batch jobs."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings


@cli.command()
@click.option("--job", "job_name", default=None, help="Job to launch (defaults to $MINIBATCH_JOB or myJob)")
@click.option("--workflow", default=None, help="Python file defining workflow() or JOBS")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the execution result as JSON")
@click.pass_context
def run(ctx, job_name, workflow, as_json):
    """Run one job once. Exit code 0 when COMPLETED, 1 when FAILED."""
    console = get_console()
    settings: Settings = ctx.obj["settings"]

    # JSON goes to stdout on its own, so step logs move to stderr
    configure_logging(
        level=settings.log_level,
        fmt=settings.log_format,
        verbose=ctx.obj["verbose"],
        quiet=ctx.obj["quiet"],
        stream=sys.stderr if as_json else sys.stdout,
    )

    jobs, source = _load_or_exit(ctx, workflow)
    name = job_name or (jobs[0].name if workflow and len(jobs) == 1 else settings.default_job)
    selected = find_job(jobs, name)
    if selected is None:
        console.print_error(
            "Unknown job",
            f"No job named {name!r}.",
            details=[f"Available: {', '.join(j.name for j in jobs) or '(none)'}"],
            suggestion="List jobs with:\n  minibatch list",
        )
        sys.exit(2)

    recorder = InMemoryRecorder()
    try:
        if not as_json:
            console.print_run_started(job=selected.name, source=source, step_count=len(selected.steps))

        result = JobRunner(recorder=recorder).run(selected)

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            console.print_results(result)
        console.print_debug(f"recorded events: {', '.join(recorder.kinds())}")
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    sys.exit(result.exit_code)


@cli.command("list")
@click.option("--workflow", default=None, help="Python file defining workflow() or JOBS")
@click.pass_context
def list_jobs(ctx, workflow):
    """List jobs and their steps in execution order."""
    jobs, _source = _load_or_exit(ctx, workflow)
    get_console().print_job_list(jobs)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

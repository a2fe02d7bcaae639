"""Console output formatting utilities for minibatch."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from minibatch.model import ExecutionResult, Job, StepStatus


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_run_started(self, job: str, source: str, step_count: int) -> None:
        """Print run start information."""
        print("\nRUN STARTED")
        print(f"Job: {job}")
        print(f"Source: {source}")
        print(f"Steps: {step_count}")
        print()

    def print_results(self, result: ExecutionResult) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for s in result.steps:
            status_display = "SUCCESS" if s.status is StepStatus.SUCCESS else "FAILED"
            print(f"  {s.step_name}: {status_display}")
        print(f"JOB {result.job_name}: {result.status.value}")
        if result.failure:
            print(f"Error: {result.failure}")

    def print_job_list(self, jobs: Iterable[Job]) -> None:
        for j in jobs:
            print(j.name)
            for idx, s in enumerate(j.steps, start=1):
                print(f"  {idx}. {s.name}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console

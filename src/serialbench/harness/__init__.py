"""Benchmark harness for sequential asynchronous runners.

Provides the runner registry, suites with timing and validation, synthetic
tasks, scenarios, and a Typer CLI.
"""

from .core import RunnerSpec, Suite, discover_runners, runner  # re-export for convenience

__all__ = ["RunnerSpec", "Suite", "discover_runners", "runner"]

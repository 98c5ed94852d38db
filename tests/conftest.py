"""
Shared pytest fixtures for the serialbench test suite.

Run with: pytest -q
"""
import asyncio

import pytest

from serialbench.harness import discover_runners
from serialbench.harness.measure import run_once


RUNNER_NAMES = ["baseline", "flow", "future", "future_next", "promise"]


@pytest.fixture(params=RUNNER_NAMES)
def spec(request):
    """Each registered runner in turn."""
    return discover_runners()[request.param]


@pytest.fixture
def execute():
    """Run plain tasks through a runner spec and return the Outcome."""

    async def _execute(spec, tasks, expected=0):
        return await run_once(spec.fn, [spec.adapt(t) for t in tasks], expected)

    return _execute


@pytest.fixture
def params(tmp_path):
    """Small, fast config writing runs under tmp_path."""
    return {
        "project": {"runs_dir": str(tmp_path / "runs"), "seed": 7},
        "bench": {"iterations": 3, "warmup": 1},
        "scenarios": {
            "light": {"tasks": 5},
            "light_mixed": {"async_tasks": 4, "sync_tasks": 6},
            "sync": {"tasks": 300},
        },
    }


@pytest.fixture
def drain():
    """Let pending loop callbacks run."""

    async def _drain(turns=5):
        for _ in range(turns):
            await asyncio.sleep(0)

    return _drain

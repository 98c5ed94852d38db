"""Uniform wrapper around runner invocations.

A runner is ``runner(tasks, done)`` with ``done(error, results)``. The wrapper
awaits that single completion and turns it into an `Outcome`, checking the
summed results against the value the scenario expects.
"""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from .errors import CompletionError, ValidationError
from .outcome import Failure, Outcome, Success


Runner = Callable[[Sequence[Any], Callable[[Optional[BaseException], Any], None]], None]
Entry = Callable[[], Awaitable[Outcome]]


async def run_once(runner: Runner, tasks: Sequence[Any], expected: int) -> Outcome:
    settled = asyncio.get_running_loop().create_future()

    def complete(error: Optional[BaseException], data: Optional[List[int]] = None) -> None:
        if settled.done():
            raise CompletionError("completion callback invoked more than once")
        if error is not None:
            settled.set_result(Failure(error))
            return
        actual = sum(data)
        if actual != expected:
            settled.set_result(Failure(ValidationError(actual, expected)))
        else:
            settled.set_result(Success(data))

    runner(tasks, complete)
    return await settled


def entry(runner: Runner, tasks: Sequence[Any], expected: int) -> Entry:
    """Lazy, re-runnable measurement of `runner` over `tasks`."""
    return functools.partial(run_once, runner, tasks, expected)

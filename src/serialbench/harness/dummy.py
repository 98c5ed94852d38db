"""Synthetic byte-producing tasks.

Every task is a callable taking a node-style ``callback(error, value)``.
Light tasks complete on the next event loop turn, sync tasks complete before
the call returns. Both can be invoked any number of times.
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from .errors import TaskError


Callback = Callable[[Optional[BaseException], Any], None]
Task = Callable[[Callback], None]

T = TypeVar("T")


def random_byte(rng: random.Random | None = None) -> int:
    return (rng or random).randint(0, 255)


def random_bytes(count: int, rng: random.Random | None = None) -> List[int]:
    return [random_byte(rng) for _ in range(count)]


def light_task(value: int) -> Task:
    def task(callback: Callback) -> None:
        asyncio.get_running_loop().call_soon(callback, None, value)

    return task


def sync_task(value: int) -> Task:
    def task(callback: Callback) -> None:
        callback(None, value)

    return task


def failing_task(
    error: BaseException | None = None, asynchronous: bool = True
) -> Task:
    error = error or TaskError("task failed")

    def task(callback: Callback) -> None:
        if asynchronous:
            asyncio.get_running_loop().call_soon(callback, error, None)
        else:
            callback(error, None)

    return task


def shuffled(items: Sequence[T], rng: random.Random | None = None) -> List[T]:
    out = list(items)
    (rng or random).shuffle(out)
    return out

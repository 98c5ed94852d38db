"""Sequencing with eager promises (`asyncio.Future`).

A promise starts its work as soon as it is created, so tasks are wrapped in
thunks and each thunk is only called once the previous promise settled.
Done callbacks always go through the event loop, even for tasks that
completed synchronously.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from ..harness import runner
from ..harness.errors import CompletionError


def to_promise(task) -> Callable[[], "asyncio.Future[Any]"]:
    def thunk() -> "asyncio.Future[Any]":
        promise = asyncio.get_running_loop().create_future()

        def settle(error: Optional[BaseException], value: Any = None) -> None:
            if promise.done():
                raise CompletionError("promise already settled")
            if error is not None:
                promise.set_exception(error)
            else:
                promise.set_result(value)

        try:
            task(settle)
        except CompletionError:
            raise
        except Exception as e:  # noqa: BLE001
            if promise.done():
                raise
            promise.set_exception(e)
        return promise

    return thunk


@runner(name="promise", label="Promises (asyncio.Future)", adapt=to_promise, order=4)
def run_promises(thunks, done):
    results = []

    def step(index):
        if index == len(thunks):
            done(None, results)
            return
        thunks[index]().add_done_callback(lambda promise: settled(index, promise))

    def settled(index, promise):
        error = promise.exception()
        if error is not None:
            done(error, None)
            return
        results.append(promise.result())
        step(index + 1)

    step(0)

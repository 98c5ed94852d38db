"""Lazy asynchronous values backed by coroutines.

Second take on `primitives.future.Future`: the value is described by a
coroutine factory instead of a callback computation. Awaiting a `Future` (or
calling `run`/`fork`) starts a fresh execution each time.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from ..harness.errors import CompletionError


class Future:
    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Awaitable[Any]]):
        self._factory = factory

    @classmethod
    def create(
        cls, computation: Callable[[Callable, Callable], None]
    ) -> "Future":
        """Build from a ``computation(reject, resolve)``; settling twice raises."""

        async def factory() -> Any:
            settled = asyncio.get_running_loop().create_future()

            def reject(error: BaseException) -> None:
                if settled.done():
                    raise CompletionError("future already settled")
                settled.set_exception(error)

            def resolve(value: Any) -> None:
                if settled.done():
                    raise CompletionError("future already settled")
                settled.set_result(value)

            computation(reject, resolve)
            return await settled

        return cls(factory)

    @classmethod
    def of(cls, value: Any) -> "Future":
        async def factory() -> Any:
            return value

        return cls(factory)

    @classmethod
    def rejected(cls, error: BaseException) -> "Future":
        async def factory() -> Any:
            raise error

        return cls(factory)

    @classmethod
    def from_callback(cls, task: Callable[[Callable], None]) -> "Future":
        def computation(reject: Callable, resolve: Callable) -> None:
            def callback(error: Optional[BaseException], value: Any = None) -> None:
                if error is not None:
                    reject(error)
                else:
                    resolve(value)

            task(callback)

        return cls.create(computation)

    def map(self, fn: Callable[[Any], Any]) -> "Future":
        async def factory() -> Any:
            return fn(await self)

        return Future(factory)

    def chain(self, fn: Callable[[Any], "Future"]) -> "Future":
        async def factory() -> Any:
            return await fn(await self)

        return Future(factory)

    def run(self) -> "asyncio.Future[Any]":
        """Schedule one execution on the running loop."""
        return asyncio.ensure_future(self._factory())

    def fork(
        self, reject: Callable[[BaseException], None], resolve: Callable[[Any], None]
    ) -> "asyncio.Future[Any]":
        def settle(done: "asyncio.Future[Any]") -> None:
            error = done.exception()
            if error is not None:
                reject(error)
            else:
                resolve(done.result())

        execution = self.run()
        execution.add_done_callback(settle)
        return execution

    def __await__(self):
        return self._factory().__await__()

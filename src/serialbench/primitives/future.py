"""Lazy asynchronous values driven by plain callbacks.

A `Future` wraps a computation ``computation(reject, resolve)``. Nothing runs
until `fork` is called, and every `fork` runs the computation again, so a
single `Future` can be measured repeatedly.
"""

from __future__ import annotations

from typing import Any, Callable, Optional


Reject = Callable[[BaseException], None]
Resolve = Callable[[Any], None]
Computation = Callable[[Reject, Resolve], None]


class Future:
    __slots__ = ("_computation",)

    def __init__(self, computation: Computation):
        self._computation = computation

    @classmethod
    def of(cls, value: Any) -> "Future":
        return cls(lambda reject, resolve: resolve(value))

    @classmethod
    def rejected(cls, error: BaseException) -> "Future":
        return cls(lambda reject, resolve: reject(error))

    @classmethod
    def from_callback(cls, task: Callable[[Callable], None]) -> "Future":
        """Lift a node-style task ``task(callback(error, value))``."""

        def computation(reject: Reject, resolve: Resolve) -> None:
            def callback(error: Optional[BaseException], value: Any = None) -> None:
                if error is not None:
                    reject(error)
                else:
                    resolve(value)

            task(callback)

        return cls(computation)

    def fork(self, reject: Reject, resolve: Resolve) -> None:
        self._computation(reject, resolve)

    def map(self, fn: Callable[[Any], Any]) -> "Future":
        return Future(
            lambda reject, resolve: self.fork(reject, lambda value: resolve(fn(value)))
        )

    def chain(self, fn: Callable[[Any], "Future"]) -> "Future":
        return Future(
            lambda reject, resolve: self.fork(
                reject, lambda value: fn(value).fork(reject, resolve)
            )
        )

    def or_else(self, fn: Callable[[BaseException], "Future"]) -> "Future":
        return Future(
            lambda reject, resolve: self.fork(
                lambda error: fn(error).fork(reject, resolve), resolve
            )
        )

    def fold(
        self,
        on_error: Callable[[BaseException], Any],
        on_value: Callable[[Any], Any],
    ) -> "Future":
        """Collapse both branches into a value; the result never rejects."""
        return Future(
            lambda reject, resolve: self.fork(
                lambda error: resolve(on_error(error)),
                lambda value: resolve(on_value(value)),
            )
        )

    def __repr__(self) -> str:
        return f"Future({self._computation!r})"

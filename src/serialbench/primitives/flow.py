"""Callback-flow helpers for node-style asynchronous functions.

``iterator(item, callback)`` and the final ``callback(error, results)`` follow
the ``(error, value)`` convention. Items are processed one at a time.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional

from ..harness.errors import CompletionError


Callback = Callable[[Optional[BaseException], Any], None]
Iterator = Callable[[Any, Callback], None]


def map_series(items: Iterable[Any], iterator: Iterator, callback: Callback) -> None:
    """Apply `iterator` to each item in order, collecting values.

    The first error is passed to `callback` and no later item is visited; an
    exception raised by `iterator` counts as that item's error.
    Items that complete synchronously are advanced by the loop below instead
    of by recursion, so the stack stays flat for long synchronous runs.
    """
    items = list(items)
    results: List[Any] = []
    index = 0
    finished = False
    in_loop = False
    advanced = False

    def finish(error: Optional[BaseException], values: Optional[List[Any]]) -> None:
        nonlocal finished
        finished = True
        callback(error, values)

    def item_callback(position: int) -> Callback:
        called = False

        def done(error: Optional[BaseException], value: Any = None) -> None:
            nonlocal called, index, advanced
            if called:
                raise CompletionError(f"callback for item {position} was already called")
            called = True
            if finished:
                return
            if error is not None:
                finish(error, None)
                return
            results.append(value)
            index += 1
            if in_loop:
                advanced = True
            else:
                run()

        return done

    def run() -> None:
        nonlocal in_loop, advanced
        while not finished:
            if index >= len(items):
                finish(None, results)
                return
            advanced = False
            in_loop = True
            try:
                iterator(items[index], item_callback(index))
            except CompletionError:
                raise
            except Exception as e:  # noqa: BLE001
                if finished:
                    raise
                finish(e, None)
                return
            finally:
                in_loop = False
            if not advanced:
                return

    run()


def series(tasks: Iterable[Callable[[Callback], None]], callback: Callback) -> None:
    """Run thunk tasks one after another; see `map_series`."""
    map_series(tasks, lambda task, cb: task(cb), callback)

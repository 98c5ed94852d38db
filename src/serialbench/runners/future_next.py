"""Sequencing with the coroutine-backed lazy `Future`."""

from ..harness import runner
from ..primitives.future_next import Future


async def _collect(futures):
    results = []
    for future in futures:
        results.append(await future)
    return results


@runner(name="future_next", label="Tasks (new Future)", adapt=Future.from_callback, order=3)
def run_futures(futures, done):
    Future(lambda: _collect(futures)).fork(
        lambda error: done(error, None),
        lambda results: done(None, results),
    )

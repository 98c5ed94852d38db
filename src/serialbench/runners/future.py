"""Sequencing with the callback-driven lazy `Future`.

The next future is forked only once the previous one resolved. Futures that
resolve during `fork` are advanced by the loop, not by nesting forks.
"""

from ..harness import runner
from ..harness.errors import CompletionError
from ..primitives.future import Future


@runner(name="future", label="Tasks (Future)", adapt=Future.from_callback, order=2)
def run_futures(futures, done):
    results = []
    index = 0
    finished = False
    forking = False
    advanced = False

    def finish(error, data):
        nonlocal finished
        finished = True
        done(error, data)

    def reject(error):
        if not finished:
            finish(error, None)

    def resolve(value):
        nonlocal index, advanced
        if finished:
            return
        results.append(value)
        index += 1
        if forking:
            advanced = True
        else:
            fork_next()

    def fork_next():
        nonlocal forking, advanced
        while not finished:
            if index == len(futures):
                finish(None, results)
                return
            advanced = False
            forking = True
            try:
                futures[index].fork(reject, resolve)
            except CompletionError:
                raise
            except Exception as e:  # noqa: BLE001
                if finished:
                    raise
                finish(e, None)
                return
            finally:
                forking = False
            if not advanced:
                return

    fork_next()

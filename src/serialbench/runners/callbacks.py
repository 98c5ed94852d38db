"""Plain callback chaining, the reference every other runner is compared to."""

from ..harness import runner
from ..harness.errors import CompletionError


@runner(name="baseline", label="Callbacks (baseline)", order=0)
def run_callbacks(tasks, done):
    results = []
    index = 0
    finished = False
    in_loop = False
    advanced = False

    def finish(error, data):
        nonlocal finished
        finished = True
        done(error, data)

    def next_value(error, value=None):
        nonlocal index, advanced
        if finished:
            return
        if error is not None:
            finish(error, None)
            return
        results.append(value)
        index += 1
        # synchronous completions are picked up by the loop in step()
        if in_loop:
            advanced = True
        else:
            step()

    def step():
        nonlocal in_loop, advanced
        while not finished:
            if index == len(tasks):
                finish(None, results)
                return
            advanced = False
            in_loop = True
            try:
                tasks[index](next_value)
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

    step()

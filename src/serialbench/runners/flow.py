from ..harness import runner
from ..primitives.flow import series


@runner(name="flow", label="Callbacks (flow)", order=1)
def run_series(tasks, done):
    series(tasks, done)

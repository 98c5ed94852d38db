"""Runner modules live here.

Each module implements the same contract with a different sequencing primitive
and registers it with ``@harness.runner(name=..., label=..., adapt=...)``:
run the tasks strictly in order, then call ``done(error, results)`` once.

Keep one primitive per file; shared helpers belong in `serialbench.primitives`.
"""

"""Serial task scenarios.

Every task in a scenario depends on the previous one having finished, so the
tasks must run strictly in order. This is the worst case for concurrency: it
only measures how much overhead each sequencing primitive adds on top of plain
callbacks.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from . import dummy
from .core import Benchmark, RunnerSpec, Suite, discover_runners
from .measure import entry
from .utils import scenario_size, seed


@dataclass(frozen=True)
class Workload:
    tasks: List[dummy.Task]
    expected: int


@dataclass(frozen=True)
class ScenarioSpec:
    name: str
    title: str
    build: Callable[[dict, random.Random], Workload]


SCENARIOS: Dict[str, ScenarioSpec] = {}


def scenario(name: str, title: str):
    def deco(fn: Callable[[dict, random.Random], Workload]):
        SCENARIOS[name] = ScenarioSpec(name=name, title=title, build=fn)
        return fn

    return deco


@scenario("light", "Serial (light tasks)")
def light(params: dict, rng: random.Random) -> Workload:
    """All tasks asynchronous: the worst case for sequencing overhead."""
    data = dummy.random_bytes(scenario_size(params, "light", "tasks", 10), rng)
    return Workload(tasks=[dummy.light_task(b) for b in data], expected=sum(data))


@scenario("light_mixed", "Serial (mixed sync/light tasks)")
def light_mixed(params: dict, rng: random.Random) -> Workload:
    """Asynchronous tasks interleaved with cached, synchronous ones."""
    bytes_a = dummy.random_bytes(scenario_size(params, "light_mixed", "async_tasks", 10), rng)
    bytes_b = dummy.random_bytes(scenario_size(params, "light_mixed", "sync_tasks", 30), rng)
    actions = [dummy.light_task(b) for b in bytes_a]
    noise = [dummy.sync_task(b) for b in bytes_b]
    return Workload(
        tasks=dummy.shuffled(actions + noise, rng), expected=sum(bytes_a) + sum(bytes_b)
    )


@scenario("sync", "Serial (all synchronous)")
def sync(params: dict, rng: random.Random) -> Workload:
    """Values lifted into the asynchronous world without real work."""
    data = dummy.random_bytes(scenario_size(params, "sync", "tasks", 100), rng)
    return Workload(tasks=[dummy.sync_task(b) for b in data], expected=sum(data))


def build_suite(
    name: str, params: dict, runners: Iterable[RunnerSpec] | None = None
) -> Suite:
    if name not in SCENARIOS:
        raise KeyError(f"Unknown scenario: {name}")
    spec = SCENARIOS[name]
    workload = spec.build(params, random.Random(seed(params)))
    specs = list(runners) if runners is not None else list(discover_runners().values())
    benchmarks = [
        Benchmark(
            name=r.name,
            label=r.label,
            entry=entry(r.fn, [r.adapt(t) for t in workload.tasks], workload.expected),
        )
        for r in specs
    ]
    return Suite(title=spec.title, benchmarks=benchmarks, name=name)

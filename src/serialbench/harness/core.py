from __future__ import annotations

import asyncio
import importlib
import json
import os
import pkgutil
import statistics
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List

from .errors import error_kind
from .logging import get_logger, release_file_handlers
from .measure import Entry
from .utils import iterations as iterations_of
from .utils import runs_dir, slugify
from .utils import warmup as warmup_of


RUNNERS_PACKAGE = "serialbench.runners"


def _identity(task: Any) -> Any:
    return task


@dataclass
class RunnerSpec:
    name: str
    label: str
    fn: Callable[..., None]
    adapt: Callable[[Any], Any] = _identity
    order: int = 0


def runner(
    name: str,
    label: str,
    adapt: Callable[[Any], Any] | None = None,
    order: int = 0,
):
    """Decorator to declare a sequential runner on a function.

    The wrapped function is called as ``fn(tasks, done)`` where `tasks` went
    through `adapt` and ``done(error, results)`` must be invoked exactly once.
    """

    def deco(fn: Callable[..., None]):
        spec = RunnerSpec(
            name=name, label=label, fn=fn, adapt=adapt or _identity, order=order
        )
        setattr(fn, "_runner_spec", spec)
        return fn

    return deco


def discover_runners(package: str = RUNNERS_PACKAGE) -> Dict[str, RunnerSpec]:
    """Import all modules in `package` and collect decorated runners, in order."""
    log = get_logger("serialbench.discovery")
    specs: Dict[str, RunnerSpec] = {}
    pkg = importlib.import_module(package)
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{package}."):
        mod = importlib.import_module(m.name)
        for attr_name in dir(mod):
            spec = getattr(getattr(mod, attr_name), "_runner_spec", None)
            if isinstance(spec, RunnerSpec):
                specs[spec.name] = spec
    log.debug("Discovered runners: %s", ", ".join(specs))
    return dict(sorted(specs.items(), key=lambda kv: (kv[1].order, kv[0])))


@dataclass
class Benchmark:
    name: str
    label: str
    entry: Entry


@dataclass
class EntryReport:
    name: str
    label: str
    status: str
    iterations: int = 0
    mean_ms: float | None = None
    min_ms: float | None = None
    max_ms: float | None = None
    stdev_ms: float | None = None
    ops_per_sec: float | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def from_samples(cls, bench: Benchmark, samples: List[float]) -> "EntryReport":
        ms = [s * 1000.0 for s in samples]
        if not ms:
            return cls(name=bench.name, label=bench.label, status="ok")
        mean = statistics.fmean(ms)
        return cls(
            name=bench.name,
            label=bench.label,
            status="ok",
            iterations=len(ms),
            mean_ms=mean,
            min_ms=min(ms),
            max_ms=max(ms),
            stdev_ms=statistics.pstdev(ms),
            ops_per_sec=1000.0 / mean if mean > 0 else None,
        )

    @classmethod
    def failed(
        cls, bench: Benchmark, error: BaseException, completed: int
    ) -> "EntryReport":
        return cls(
            name=bench.name,
            label=bench.label,
            status="error",
            iterations=completed,
            error=f"{type(error).__name__}: {error}",
            error_kind=error_kind(error),
        )


@dataclass
class SuiteReport:
    suite: str
    title: str
    run_id: str
    run_dir: Path
    entries: List[EntryReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(e.ok for e in self.entries)


class Suite:
    def __init__(self, title: str, benchmarks: Iterable[Benchmark], name: str | None = None):
        self.title = title
        self.name = name or slugify(title)
        self.benchmarks = list(benchmarks)
        self.logger = get_logger(f"serialbench.{self.name}")

    def select(self, only: Iterable[str] | None = None) -> List[Benchmark]:
        """Filter by runner name or label, keeping suite order."""
        if not only:
            return list(self.benchmarks)
        wanted = set(only)
        known = {b.name for b in self.benchmarks} | {b.label for b in self.benchmarks}
        unknown = sorted(wanted - known)
        if unknown:
            raise KeyError(f"Unknown runner(s): {', '.join(unknown)}")
        return [b for b in self.benchmarks if b.name in wanted or b.label in wanted]

    async def measure(
        self,
        iterations: int,
        warmup: int = 0,
        selected: Iterable[Benchmark] | None = None,
        on_entry: Callable[[EntryReport], None] | None = None,
    ) -> List[EntryReport]:
        if iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {iterations}")
        reports: List[EntryReport] = []
        for bench in self.benchmarks if selected is None else selected:
            report = await self._measure_one(bench, iterations, warmup)
            reports.append(report)
            if on_entry is not None:
                on_entry(report)
        return reports

    async def _measure_one(
        self, bench: Benchmark, iterations: int, warmup: int
    ) -> EntryReport:
        entry_logger = get_logger(f"serialbench.{self.name}.{bench.name}")
        entry_logger.info("Run: %s", bench.label)
        samples: List[float] = []
        try:
            for _ in range(warmup):
                outcome = await bench.entry()
                if not outcome.ok:
                    return self._failure(entry_logger, bench, outcome.error, 0)
            for _ in range(iterations):
                started = time.perf_counter()
                outcome = await bench.entry()
                elapsed = time.perf_counter() - started
                if not outcome.ok:
                    return self._failure(entry_logger, bench, outcome.error, len(samples))
                samples.append(elapsed)
        except Exception as e:  # noqa: BLE001
            entry_logger.exception("Entry raised (%s)", bench.label)
            return EntryReport.failed(bench, e, len(samples))
        report = EntryReport.from_samples(bench, samples)
        entry_logger.info(
            "Done: %s | %.4f ms/op over %d runs", bench.label, report.mean_ms, report.iterations
        )
        return report

    @staticmethod
    def _failure(logger, bench: Benchmark, error: BaseException, completed: int) -> EntryReport:
        report = EntryReport.failed(bench, error, completed)
        logger.error("Failed (%s, %s): %s", bench.label, report.error_kind, report.error)
        return report

    def run(self, params: dict, only: Iterable[str] | None = None) -> SuiteReport:
        selected = self.select(only)
        run_id = time.strftime("%Y%m%d-%H%M%S")
        run_dir = Path(runs_dir(params)) / self.name / run_id
        os.makedirs(run_dir, exist_ok=True)
        get_logger(f"serialbench.{self.name}", log_file=run_dir / "bench.log")

        n_iter, n_warm = iterations_of(params), warmup_of(params)
        self.logger.info("Selected entries: %s", " → ".join(b.label for b in selected))

        state: Dict[str, Any] = {
            "suite": self.name,
            "title": self.title,
            "run_id": run_id,
            "iterations": n_iter,
            "warmup": n_warm,
            "entries": [],
            "python": sys.version,
        }

        def record(report: EntryReport) -> None:
            state["entries"].append(asdict(report))
            _write_state(run_dir, state)

        try:
            reports = asyncio.run(self.measure(n_iter, n_warm, selected, on_entry=record))
        finally:
            release_file_handlers(self.logger)
        _write_state(run_dir, state)
        return SuiteReport(
            suite=self.name, title=self.title, run_id=run_id, run_dir=run_dir, entries=reports
        )


def _write_state(run_dir: Path, state: dict) -> None:
    with open(run_dir / "state.json", "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)

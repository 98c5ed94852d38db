"""
Tests for runner registration and suite reporting.
"""
import json

import pytest

from serialbench.harness.core import (
    Benchmark,
    EntryReport,
    RunnerSpec,
    Suite,
    discover_runners,
    runner,
)
from serialbench.harness import utils
from serialbench.harness.errors import TaskError, ValidationError
from serialbench.harness.outcome import Failure, Success


def bench(name, outcome=None, raises=None):
    calls = []

    async def run():
        calls.append(1)
        if raises is not None:
            raise raises
        return outcome or Success([1])

    b = Benchmark(name=name, label=name.title(), entry=run)
    b.calls = calls
    return b


class TestRegistry:

    def test_decorator_attaches_spec(self):
        @runner(name="demo", label="Demo", order=9)
        def demo(tasks, done):
            done(None, [])

        spec = demo._runner_spec
        assert isinstance(spec, RunnerSpec)
        assert spec.name == "demo"
        assert spec.fn is demo
        assert spec.adapt("task") == "task"

    def test_discovers_all_runners_in_order(self):
        specs = discover_runners()

        assert list(specs) == ["baseline", "flow", "future", "future_next", "promise"]
        assert specs["baseline"].label == "Callbacks (baseline)"


class TestSuite:

    def test_run_reports_and_writes_state(self, params):
        suite = Suite("Demo suite", [bench("alpha"), bench("beta")])

        report = suite.run(params)

        assert report.ok
        assert report.suite == "demo_suite"
        assert [e.name for e in report.entries] == ["alpha", "beta"]
        assert all(e.iterations == 3 for e in report.entries)
        assert suite.benchmarks[0].calls == [1] * 4  # warmup + iterations

        state = json.loads((report.run_dir / "state.json").read_text(encoding="utf-8"))
        assert state["suite"] == "demo_suite"
        assert [e["status"] for e in state["entries"]] == ["ok", "ok"]
        assert (report.run_dir / "bench.log").exists()

    def test_failure_terminates_only_that_entry(self, params):
        """Test a failing entry stops immediately and the next entry still runs."""
        failing = bench("bad", outcome=Failure(TaskError("E")))
        invalid = bench("wrong", outcome=Failure(ValidationError(1, 2)))
        good = bench("good")

        report = Suite("mixed", [failing, invalid, good]).run(params)

        assert not report.ok
        bad, wrong, ok = report.entries
        assert (bad.status, bad.error_kind, bad.iterations) == ("error", "task", 0)
        assert failing.calls == [1]
        assert wrong.error_kind == "validation"
        assert "Invalid result: 1, expected: 2" in wrong.error
        assert ok.ok

    def test_raised_exception_is_recorded(self, params):
        report = Suite("raises", [bench("boom", raises=RuntimeError("kaput"))]).run(params)

        entry = report.entries[0]
        assert entry.status == "error"
        assert entry.error == "RuntimeError: kaput"

    def test_select_by_name_or_label(self):
        suite = Suite("s", [bench("alpha"), bench("beta"), bench("gamma")])

        assert [b.name for b in suite.select(["gamma", "Alpha"])] == ["alpha", "gamma"]
        assert len(suite.select(None)) == 3
        with pytest.raises(KeyError):
            suite.select(["delta"])

    def test_run_only_selected(self, params):
        suite = Suite("s", [bench("alpha"), bench("beta")])

        report = suite.run(params, only=["beta"])

        assert [e.name for e in report.entries] == ["beta"]
        assert suite.benchmarks[0].calls == []

    @pytest.mark.asyncio
    async def test_measure_rejects_zero_iterations(self):
        suite = Suite("s", [bench("alpha")])

        with pytest.raises(ValueError):
            await suite.measure(iterations=0)
        assert suite.benchmarks[0].calls == []


class TestEntryReport:

    def test_from_samples(self):
        report = EntryReport.from_samples(bench("x"), [0.001, 0.003])

        assert report.ok
        assert report.mean_ms == pytest.approx(2.0)
        assert report.min_ms == pytest.approx(1.0)
        assert report.max_ms == pytest.approx(3.0)
        assert report.stdev_ms == pytest.approx(1.0)
        assert report.ops_per_sec == pytest.approx(500.0)


class TestUtils:

    def test_module_docstring(self):
        assert utils.__doc__.startswith("Small helpers")

    def test_iterations_floor(self):
        assert utils.iterations({"bench": {"iterations": 0}}) == 1
        assert utils.warmup({}) == 10

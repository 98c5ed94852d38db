from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
import yaml
from dotenv import load_dotenv

from .core import discover_runners
from .logging import get_logger
from .scenarios import SCENARIOS, build_suite
from .utils import with_overrides


app = typer.Typer(add_completion=False, help="Serial sequencing benchmarks")
log = get_logger("serialbench.cli")


def load_config(path: str | Path) -> dict:
    p = Path(path)
    if not p.exists():
        log.warning("Config %s not found, using defaults", p)
        return {}
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _split(csv: str) -> List[str]:
    return [x.strip() for x in csv.split(",") if x.strip()]


def _format_row(entry) -> str:
    if entry.ok:
        return (
            f"  {entry.label:<28} {entry.mean_ms:>10.4f} ms/op "
            f"±{entry.stdev_ms:.4f}  {entry.ops_per_sec:>12,.0f} ops/s  ({entry.iterations} runs)"
        )
    return f"  {entry.label:<28} FAILED [{entry.error_kind}] {entry.error}"


def _run_scenarios(
    names: List[str],
    config: str,
    runners: str,
    iterations: Optional[int],
    warmup: Optional[int],
) -> bool:
    params = with_overrides(load_config(config), iterations=iterations, warmup=warmup)
    only = _split(runners)
    ok = True
    for name in names:
        suite = build_suite(name, params)
        try:
            report = suite.run(params, only=only or None)
        except KeyError as e:
            typer.echo(e.args[0])
            raise typer.Exit(code=1)
        typer.echo(f"{report.title}  [{report.run_dir}]")
        for entry in report.entries:
            typer.echo(_format_row(entry))
        ok = ok and report.ok
    return ok


@app.command("list")
def list_all():
    """List discovered runners and registered scenarios."""
    typer.echo("Runners:")
    for name, spec in discover_runners().items():
        typer.echo(f"- {name}: {spec.label}")
    typer.echo("Scenarios:")
    for name, spec in SCENARIOS.items():
        typer.echo(f"- {name}: {spec.title}")


@app.command()
def run(
    name: str = typer.Argument(..., help="Scenario name to run"),
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
    runners: str = typer.Option("", help="Comma-separated runner names or labels"),
    iterations: Optional[int] = typer.Option(None, help="Timed runs per entry"),
    warmup: Optional[int] = typer.Option(None, help="Untimed runs per entry"),
):
    """Run a single scenario by name."""
    if name not in SCENARIOS:
        typer.echo(f"Scenario not found: {name}")
        raise typer.Exit(code=1)
    if not _run_scenarios([name], config, runners, iterations, warmup):
        raise typer.Exit(code=1)


@app.command()
def full_run(
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
    runners: str = typer.Option("", help="Comma-separated runner names or labels"),
    iterations: Optional[int] = typer.Option(None, help="Timed runs per entry"),
    warmup: Optional[int] = typer.Option(None, help="Untimed runs per entry"),
):
    """Run every registered scenario."""
    if not _run_scenarios(list(SCENARIOS), config, runners, iterations, warmup):
        raise typer.Exit(code=1)


def main():  # pragma: no cover
    load_dotenv()
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

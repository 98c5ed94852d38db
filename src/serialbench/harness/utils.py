"""Small helpers for reading benchmark settings from config params."""

from __future__ import annotations

from typing import Dict


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def slugify(s: str) -> str:
    return (
        (s or "").strip().lower().replace(" ", "_").replace("/", "-").replace("\\", "-")
    )


def runs_dir(p: Dict) -> str:
    return _get(p, "project", "runs_dir", default="runs")


def seed(p: Dict) -> int:
    return int(_get(p, "project", "seed", default=42))


def iterations(p: Dict) -> int:
    return max(1, int(_get(p, "bench", "iterations", default=200)))


def warmup(p: Dict) -> int:
    return max(0, int(_get(p, "bench", "warmup", default=10)))


def scenario_size(p: Dict, scenario: str, key: str, default: int) -> int:
    return int(_get(p, "scenarios", scenario, key, default=default))


def with_overrides(p: Dict, **bench) -> Dict:
    """Return a copy of `p` with non-None `bench` values merged in."""
    out = dict(p)
    section = dict(out.get("bench") or {})
    section.update({k: v for k, v in bench.items() if v is not None})
    out["bench"] = section
    return out

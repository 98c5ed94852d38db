"""Terminal result of one runner invocation.

A completion callback ``(error, data)`` is turned into exactly one of these,
so the rest of the harness never has to inspect callback arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: BaseException

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success, Failure]

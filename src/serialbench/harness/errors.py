"""Error kinds surfaced by the harness."""

from __future__ import annotations


class BenchError(Exception):
    """Base class for harness errors."""


class TaskError(BenchError):
    """A task reported failure; aborts the rest of the sequence."""


class ValidationError(BenchError):
    """A runner succeeded but its summed output is not the expected one."""

    def __init__(self, actual: int, expected: int):
        super().__init__(f"Invalid result: {actual}, expected: {expected}")
        self.actual = actual
        self.expected = expected


class CompletionError(BenchError):
    """A completion callback was invoked more than once."""


def error_kind(error: BaseException) -> str:
    return "validation" if isinstance(error, ValidationError) else "task"

"""Measuring how long operations take."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Optional, TypeVar

T = TypeVar("T")


class Stopwatch:
    """Context manager that measures the wall-clock time of its block."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Stopwatch":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    @property
    def elapsed_secs(self) -> float:
        """Seconds elapsed so far, or in total once the block has ended."""
        if self._start is None:
            raise RuntimeError("Stopwatch has not been started")
        end = self._end if self._end is not None else time.perf_counter()
        return end - self._start

    @property
    def elapsed(self) -> timedelta:
        return timedelta(seconds=self.elapsed_secs)


def timed(operation: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, timedelta]:
    """Call ``operation`` and return its result with the time it took."""
    with Stopwatch() as stopwatch:
        result = operation(*args, **kwargs)
    return result, stopwatch.elapsed


def timed_secs(operation: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, float]:
    """Call ``operation`` and return its result with the time it took in seconds."""
    with Stopwatch() as stopwatch:
        result = operation(*args, **kwargs)
    return result, stopwatch.elapsed_secs
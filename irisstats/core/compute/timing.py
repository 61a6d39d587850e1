"""
Wall-clock timing of backend steps.

A backend wraps each step of its algorithm in a named section; the
collected seconds end up in Result.timing. Sections entered more than
once (per-pair loops) add up.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch plus named section totals.

        timer = Timer()
        timer.start()
        with timer.section('listwise'):
            data = listwise_complete(design.data)
        with timer.section('significance'):
            ...
        timer.stop()
        timer.result()   # {'total_seconds': ..., 'listwise': ..., 'significance': ...}
    """

    def __init__(self):
        self._began: float | None = None
        self._elapsed: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> None:
        self._began = time.perf_counter()
        self._elapsed = None

    def stop(self) -> None:
        if self._began is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._began

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + (time.perf_counter() - t0)

    def result(self) -> dict[str, float]:
        """Total and per-section seconds. Only valid after stop()."""
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._sections}

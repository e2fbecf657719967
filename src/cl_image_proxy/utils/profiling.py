"""Stage timing utilities for the resize pipeline."""

import time
from types import TracebackType


class StageTimer:
    """Context manager recording elapsed wall time in milliseconds.

    Usage:
        with StageTimer() as t:
            decode(...)
        metrics.decode_ms = t.elapsed_ms
    """

    def __init__(self) -> None:
        self._start: float | None = None
        self._end: float | None = None

    def __enter__(self) -> "StageTimer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return (end - self._start) * 1000.0

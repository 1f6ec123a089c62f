"""
Performance Monitor

PerformanceInterceptor times each call and reports a PerformanceSample when
the elapsed time exceeds its threshold.

By default one Stopwatch belongs to the interceptor and is reset after every
call (success or failure), so sequential calls never share elapsed time. That
shared stopwatch is not safe for overlapping calls; pass per_call=True to give
each call its own.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from starter.core.aspects.interceptor import Interceptor
from starter.core.aspects.invocation import Invocation

logger = logging.getLogger("starter.aspects.performance")


class Stopwatch:
    """Accumulating wall-clock timer (start/stop/reset)."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._elapsed = 0.0
        self._started_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return self._elapsed
        return self._elapsed + (self._clock() - self._started_at)

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is not None:
            self._elapsed += self._clock() - self._started_at
            self._started_at = None

    def reset(self) -> None:
        self._elapsed = 0.0
        self._started_at = None


@dataclass(frozen=True)
class PerformanceSample:
    target: str
    method_name: str
    elapsed: float
    threshold: float

    def describe(self) -> str:
        return f"Performance: {self.target}.{self.method_name}-->{self.elapsed}"


def log_sample(sample: PerformanceSample) -> None:
    logger.warning(sample.describe())


class PerformanceInterceptor(Interceptor):

    def __init__(
        self,
        threshold: float,
        stopwatch: Optional[Stopwatch] = None,
        reporter: Optional[Callable[[PerformanceSample], None]] = None,
        per_call: bool = False,
        clock: Callable[[], float] = time.perf_counter,
    ):
        if threshold < 0:
            raise ValueError("threshold must be >= 0")
        if per_call and stopwatch is not None:
            raise ValueError("per_call allocates its own stopwatches; do not pass one")
        self.threshold = threshold
        self.reporter = reporter or log_sample
        self.per_call = per_call
        self._clock = clock
        self.stopwatch = stopwatch or Stopwatch(clock)

    def _report(self, invocation: Invocation, stopwatch: Stopwatch) -> None:
        if stopwatch.elapsed > self.threshold:
            self.reporter(PerformanceSample(
                target=invocation.target,
                method_name=invocation.method_name,
                elapsed=stopwatch.elapsed,
                threshold=self.threshold,
            ))

    async def intercept(self, invocation: Invocation) -> Any:
        if not self.per_call:
            return await super().intercept(invocation)
        stopwatch = Stopwatch(self._clock)
        stopwatch.start()
        result = await invocation.proceed()
        stopwatch.stop()
        self._report(invocation, stopwatch)
        return result

    async def on_before(self, invocation: Invocation) -> None:
        self.stopwatch.start()

    async def on_after(self, invocation: Invocation) -> None:
        self.stopwatch.stop()
        try:
            self._report(invocation, self.stopwatch)
        finally:
            self.stopwatch.reset()

    async def on_exception(self, invocation: Invocation, error: BaseException) -> None:
        self.stopwatch.reset()

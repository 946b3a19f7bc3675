import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle")


class StageTimer:
    """Millisecond timings for the named steps of one game action."""

    def __init__(self, clock=time.perf_counter):
        self._clock = clock
        self.timings: dict[str, float] = {}

    @contextmanager
    def stage(self, name: str):
        t0 = self._clock()
        try:
            yield
        finally:
            elapsed_ms = round((self._clock() - t0) * 1000, 1)
            # Repeated stages accumulate
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed_ms, 1)
            logger.info("stage=%s elapsed=%.1fms", name, elapsed_ms)

    def summary(self) -> dict[str, float]:
        return {**self.timings, "total": round(sum(self.timings.values()), 1)}

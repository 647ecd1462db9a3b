import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle")


class StageTimer:
    """Collects per-stage timing for a single solve."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = round((time.perf_counter() - t0) * 1000, 1)  # ms
            # A stage entered twice accumulates
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed, 1)
            logger.info("stage=%s elapsed=%.1fms", name, elapsed)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}

    def format(self) -> str:
        return " ".join(f"{name}={ms:.1f}ms" for name, ms in self.summary().items())

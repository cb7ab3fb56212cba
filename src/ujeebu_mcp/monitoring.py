from __future__ import annotations

import time
from typing import Any

from .utils import logger


class PerformanceTimer:
    """Context manager logging how long a block took."""

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self.elapsed_ms: float | None = None
        self._start = 0.0

    def __enter__(self) -> "PerformanceTimer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000
        outcome = "failed" if exc_type else "ok"
        tags = " ".join(f"{k}={v}" for k, v in self.fields.items())
        logger.debug("timing %s %s elapsed_ms=%.1f", outcome, tags, self.elapsed_ms)

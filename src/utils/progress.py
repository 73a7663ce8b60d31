"""Progress tracking for batch keyword analysis."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from src.utils.logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass
class ProgressTracker:
    """Track completed (document, configuration) units of work.

    Safe to update from worker threads. The optional callback receives the
    completed fraction in [0, 1] after recorded units and is invoked outside the
    counting lock. Reported values never decrease; a value overtaken by a newer
    one from another thread is dropped. A callback that raises is logged and
    does not interrupt the batch.
    """

    total: int
    callback: ProgressCallback | None = None
    processed: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.monotonic)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _notify_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _last_reported: float = field(default=-1.0, repr=False)

    def record_success(self) -> None:
        """Record a unit that completed normally."""
        with self._lock:
            self.processed += 1
            self.successful += 1
            fraction = self.fraction
        self._notify(fraction)

    def record_failure(self, error: str) -> None:
        """Record a unit that raised during locate/validate."""
        with self._lock:
            self.processed += 1
            self.failed += 1
            self.errors.append(error)
            fraction = self.fraction
        self._notify(fraction)

    def record_skip(self) -> None:
        """Record a unit that was not evaluated."""
        with self._lock:
            self.processed += 1
            self.skipped += 1
            fraction = self.fraction
        self._notify(fraction)

    def _notify(self, fraction: float) -> None:
        if self.callback is None:
            return
        with self._notify_lock:
            if fraction <= self._last_reported:
                return
            self._last_reported = fraction
            try:
                self.callback(fraction)
            except Exception as exc:
                logger.error("progress_callback_failed", fraction=fraction, error=str(exc))

    @property
    def fraction(self) -> float:
        """Completed fraction in [0, 1]."""
        if self.total == 0:
            return 1.0
        return min(1.0, self.processed / self.total)

    @property
    def elapsed_seconds(self) -> float:
        """Time elapsed since start."""
        return time.monotonic() - self.start_time

    @property
    def progress_percentage(self) -> float:
        """Percentage of total units processed."""
        return self.fraction * 100.0

    def log_progress(self, every_n: int = 10) -> None:
        """Log progress every N units."""
        if every_n <= 0:
            return
        if self.processed % every_n == 0 or self.processed == self.total:
            logger.info(
                "analysis_progress",
                processed=self.processed,
                total=self.total,
                successful=self.successful,
                failed=self.failed,
                skipped=self.skipped,
                percentage=f"{self.progress_percentage:.1f}%",
                elapsed=f"{self.elapsed_seconds:.1f}s",
            )

    def summary(self) -> dict[str, int | float | list[str]]:
        """Return summary statistics."""
        return {
            "processed": self.processed,
            "successful": self.successful,
            "failed": self.failed,
            "skipped": self.skipped,
            "duration_seconds": round(self.elapsed_seconds, 2),
            "errors": list(self.errors),
        }

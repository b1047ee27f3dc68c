"""Pipeline-wide rate limiting."""

from __future__ import annotations

import time

from heritage.config import settings


class Pacer:
    """Fixed-interval pacing: every :meth:`wait` suspends for ``interval`` seconds.

    The pipeline calls :meth:`wait` once before each record's network work, so
    consecutive searches and fetches are never closer than ``interval`` apart.
    """

    def __init__(self, interval: float | None = None) -> None:
        self.interval = settings.pacing_delay if interval is None else interval
        if self.interval < 0:
            raise ValueError(f"Pacing interval must be >= 0, got {self.interval}")

    def wait(self) -> None:
        if self.interval:
            time.sleep(self.interval)

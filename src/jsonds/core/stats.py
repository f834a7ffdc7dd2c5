"""In-memory crawler statistics recorder.

Tracks each record between begin() and done(), counts the phases it went
through and logs a one-line timing summary per record at DEBUG level.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field

from jsonds.contracts import StatsAction, StatsKey

logger = logging.getLogger(__name__)


@dataclass
class StatsEntry:
    """Phases observed for one record, with the begin timestamp."""

    key_id: str
    started: float
    url: str | None = None
    actions: list[StatsAction] = field(default_factory=list)
    elapsed_ms: float | None = None


class CrawlerStats:
    """Record per-line processing phases.

    Example:
        stats = CrawlerStats()
        stats.begin(key)
        stats.record(key, StatsAction.PREPARED)
        stats.done(key)
        stats.counts[StatsAction.PREPARED]  # 1
    """

    def __init__(self, keep_history: bool = False) -> None:
        self._open: dict[str, StatsEntry] = {}
        self._keep_history = keep_history
        self.counts: Counter[StatsAction] = Counter()
        self.history: list[StatsEntry] = []

    def begin(self, key: StatsKey) -> None:
        self._open[key.id] = StatsEntry(key_id=key.id, started=time.monotonic())
        self.counts[StatsAction.BEGIN] += 1

    def record(self, key: StatsKey, action: StatsAction) -> None:
        entry = self._open.get(key.id)
        if entry is None:
            logger.warning("Stats action %s for unknown key %s", action.value, key.id)
            return
        entry.actions.append(action)
        self.counts[action] += 1

    def done(self, key: StatsKey) -> None:
        entry = self._open.pop(key.id, None)
        if entry is None:
            logger.warning("Stats done for unknown key %s", key.id)
            return
        entry.url = key.url
        entry.elapsed_ms = (time.monotonic() - entry.started) * 1000
        self.counts[StatsAction.DONE] += 1
        logger.debug(
            "%s (url=%s) finished in %.2fms: %s",
            key.id,
            key.url,
            entry.elapsed_ms,
            ",".join(a.value for a in entry.actions),
        )
        if self._keep_history:
            self.history.append(entry)

    @property
    def in_progress(self) -> int:
        """Keys begun but not yet done."""
        return len(self._open)

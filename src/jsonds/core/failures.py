"""Failure recorder.

Keeps a record of every per-line failure so a run can be inspected after
it finishes. Each failure is also logged at WARNING.
"""

import logging
import traceback
from dataclasses import dataclass

from jsonds.contracts import DataConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailureRecord:
    """One stored failure."""

    config_id: str
    classification: str
    url: str
    message: str
    stack_trace: str


class FailureRecorder:
    """Collect per-record failures in memory.

    Args:
        max_stack_trace: Truncate stored stack traces to this many characters.
    """

    def __init__(self, max_stack_trace: int = 10000) -> None:
        self._max_stack_trace = max_stack_trace
        self.failures: list[FailureRecord] = []

    def record(
        self,
        data_config: DataConfig,
        classification: str,
        url: str,
        error: BaseException,
    ) -> None:
        stack = "".join(traceback.format_exception(error))
        failure = FailureRecord(
            config_id=data_config.id,
            classification=classification,
            url=url,
            message=str(error),
            stack_trace=stack[: self._max_stack_trace],
        )
        self.failures.append(failure)
        logger.warning("Failure recorded for %s: %s (%s)", url, classification, error)

    def for_url(self, url: str) -> list[FailureRecord]:
        return [f for f in self.failures if f.url == url]

    def __len__(self) -> int:
        return len(self.failures)

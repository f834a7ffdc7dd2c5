# tests/conftest.py
"""Shared test fixtures and helpers.

Provides recording doubles for the collaborators of the ingestion loop
(sink, failure recorder, stats recorder) so tests can assert exactly
which calls were made and in which order.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from jsonds.contracts import DataConfig, DataStoreParams, StatsAction, StatsKey

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


class CallLog:
    """Ordered log of collaborator calls shared by the recording doubles."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


class RecordingSink:
    """Sink double that keeps stored records and can be told to fail."""

    name = "recording"

    def __init__(self, log: CallLog | None = None, fail_on: set[int] | None = None) -> None:
        self.log = log or CallLog()
        self.fail_on = fail_on or set()
        self.records: list[dict[str, Any]] = []
        self.params: list[DataStoreParams] = []
        self.closed = False
        self._calls = 0

    def store(self, params: DataStoreParams, record: dict[str, Any]) -> None:
        self._calls += 1
        self.log.calls.append(("store", str(record.get("id"))))
        if self._calls in self.fail_on:
            raise RuntimeError(f"sink rejected call {self._calls}")
        self.params.append(params)
        self.records.append(record)

    def close(self) -> None:
        self.closed = True


class RecordingFailures:
    """Failure recorder double."""

    def __init__(self, log: CallLog | None = None) -> None:
        self.log = log or CallLog()
        self.failures: list[tuple[DataConfig, str, str, BaseException]] = []

    def record(
        self,
        data_config: DataConfig,
        classification: str,
        url: str,
        error: BaseException,
    ) -> None:
        self.log.calls.append(("failure", url))
        self.failures.append((data_config, classification, url, error))


class RecordingStats:
    """Stats recorder double that can fail the first report of an action."""

    def __init__(
        self, log: CallLog | None = None, fail_once: set[StatsAction] | None = None
    ) -> None:
        self.log = log or CallLog()
        self.fail_once = set(fail_once or ())

    def _maybe_fail(self, action: StatsAction) -> None:
        if action in self.fail_once:
            self.fail_once.discard(action)
            raise RuntimeError(f"stats rejected {action.value}")

    def begin(self, key: StatsKey) -> None:
        self.log.calls.append(("begin", key.id))
        self._maybe_fail(StatsAction.BEGIN)

    def record(self, key: StatsKey, action: StatsAction) -> None:
        self.log.calls.append((action.value, key.id))
        self._maybe_fail(action)

    def done(self, key: StatsKey) -> None:
        self.log.calls.append(("done", key.id))


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()


@pytest.fixture
def sink(call_log: CallLog) -> RecordingSink:
    return RecordingSink(call_log)


@pytest.fixture
def failures(call_log: CallLog) -> RecordingFailures:
    return RecordingFailures(call_log)


@pytest.fixture
def stats(call_log: CallLog) -> RecordingStats:
    return RecordingStats(call_log)


@pytest.fixture
def data_config() -> DataConfig:
    return DataConfig(id="cfg-1", name="test")


@pytest.fixture
def make_sink(call_log: CallLog) -> Callable[..., RecordingSink]:
    """Factory for sinks that reject selected store calls (1-based)."""

    def _make(fail_on: set[int] | None = None) -> RecordingSink:
        return RecordingSink(call_log, fail_on=fail_on)

    return _make


@pytest.fixture
def make_stats(call_log: CallLog) -> Callable[..., RecordingStats]:
    """Factory for stats recorders that fail the first report of some actions."""

    def _make(fail_once: set[StatsAction] | None = None) -> RecordingStats:
        return RecordingStats(call_log, fail_once=fail_once)

    return _make


@pytest.fixture
def write_lines() -> Callable[..., Path]:
    """Write each argument as one line of a file."""

    def _write(path: Path, *lines: str, encoding: str = "utf-8") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes("".join(f"{line}\n" for line in lines).encode(encoding))
        return path

    return _write


@pytest.fixture
def set_mtime() -> Callable[[Path, float], Path]:
    def _set(path: Path, mtime: float) -> Path:
        os.utime(path, (mtime, mtime))
        return path

    return _set

# src/jsonds/plugins/protocols.py
"""Protocols for the collaborators the ingestion loop talks to.

These protocols define what methods collaborators must implement.
They're used for type checking and for isinstance() checks at the
plugin boundary, not for behaviour.

Collaborators:
- Sink: durably stores emitted records
- FailureRecorder: persists per-record failures for later inspection
- StatsRecorder: tracks per-record processing phases
- Evaluator: computes derived field values from script expressions
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from jsonds.contracts import DataConfig, DataStoreParams, StatsAction, StatsKey


@runtime_checkable
class SinkProtocol(Protocol):
    """Protocol for sink plugins.

    store() is called once per successfully decoded and merged line,
    synchronously, in file-then-line order. Raising from store() makes
    that line a per-line fault; it does not stop the run.

    Example:
        class PrintSink:
            name = "print"

            def store(self, params, record):
                print(record)
    """

    name: str

    def store(self, params: "DataStoreParams", record: dict[str, Any]) -> None:
        """Store one record."""
        ...

    def close(self) -> None:
        """Release resources after the run."""
        ...


@runtime_checkable
class FailureRecorderProtocol(Protocol):
    """Protocol for per-record failure persistence."""

    def record(
        self,
        data_config: "DataConfig",
        classification: str,
        url: str,
        error: BaseException,
    ) -> None:
        """Record one failure.

        Args:
            data_config: Config of the run the failure belongs to
            classification: Qualified class name of the failure
            url: Correlation key id (``<path>@<line>``)
            error: The failure itself
        """
        ...


@runtime_checkable
class StatsRecorderProtocol(Protocol):
    """Protocol for per-record execution statistics.

    Lifecycle per line: begin(key), record(key, action)*, done(key).
    done() is always called, even when the line failed.
    """

    def begin(self, key: "StatsKey") -> None:
        ...

    def record(self, key: "StatsKey", action: "StatsAction") -> None:
        ...

    def done(self, key: "StatsKey") -> None:
        ...


@runtime_checkable
class EvaluatorProtocol(Protocol):
    """Protocol for script expression evaluators."""

    name: str

    def evaluate(
        self,
        script_type: str,
        expression: str,
        context: dict[str, Any],
    ) -> Any:
        """Evaluate an expression against the merge context.

        Returns:
            The computed value. None means "leave the field unset".
        """
        ...

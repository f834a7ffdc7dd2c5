"""Per-line and per-run outcomes.

The decode, merge and emit sequence for one line produces exactly one
LineResult. The ingestion loop branches on its status instead of letting
exceptions escape.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from jsonds.contracts.enums import FaultKind, LineStatus


def classify(error: BaseException) -> str:
    """Return the qualified class name of the error a wrapper was raised from.

    Wrapper errors (DecodeError, EvaluationError, EmitError) are chained
    with ``raise ... from``; the failure record names the direct cause, or
    the error itself when it has none.
    """
    root = error.__cause__ if error.__cause__ is not None else error
    cls = type(root)
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True)
class Fault:
    """A per-line failure with its classification tag."""

    kind: FaultKind
    error: BaseException
    classification: str

    @classmethod
    def from_error(cls, kind: FaultKind, error: BaseException) -> "Fault":
        return cls(kind=kind, error=error, classification=classify(error))

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class LineResult:
    """Result of processing one line.

    Use the factory methods to create instances. ``record`` holds the field
    state at the time of the outcome: the emitted record on success, or
    whatever had been built so far on failure.
    """

    status: Literal["stored", "failed"]
    record: dict[str, Any]
    fault: Fault | None = None

    @classmethod
    def stored(cls, record: dict[str, Any]) -> "LineResult":
        """Create a successful result for a record accepted by the sink."""
        return cls(status="stored", record=record)

    @classmethod
    def failed(cls, fault: Fault, record: dict[str, Any]) -> "LineResult":
        """Create a failed result carrying the fault."""
        return cls(status="failed", record=record, fault=fault)

    @property
    def outcome(self) -> LineStatus:
        return LineStatus.STORED if self.status == "stored" else LineStatus.FAILED


@dataclass
class FileOutcome:
    """Counts for one processed file."""

    path: str
    opened: bool = True
    lines: int = 0
    stored: int = 0
    failed: int = 0


@dataclass
class IngestionResult:
    """Summary of a whole run."""

    files: list[FileOutcome] = field(default_factory=list)

    @property
    def files_processed(self) -> int:
        return sum(1 for f in self.files if f.opened)

    @property
    def files_skipped(self) -> int:
        return sum(1 for f in self.files if not f.opened)

    @property
    def records_stored(self) -> int:
        return sum(f.stored for f in self.files)

    @property
    def records_failed(self) -> int:
        return sum(f.failed for f in self.files)

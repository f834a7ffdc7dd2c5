"""Error taxonomy for the data store connector.

Only ConfigurationError ever reaches the caller of a run. Everything else
is absorbed by the ingestion loop: per file (OpenError) or per line
(DecodeError, EvaluationError, EmitError, StatsError).
"""

from typing import Any


class DataStoreError(Exception):
    """Base class for all connector errors."""


class ConfigurationError(DataStoreError):
    """Raised when the run cannot locate any input (files and directories blank)."""


class FileAccessWarning(UserWarning):
    """Classification for a named path that is missing or filtered out.

    Never raised. Used as the category of the logged warning only.
    """


class OpenError(DataStoreError):
    """Raised when a selected file cannot be opened or read as text."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class DecodeError(DataStoreError):
    """Raised when a line is not a JSON object."""

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message)
        self.line = line


class EvaluationError(DataStoreError):
    """Raised when a script expression fails against the merge context."""

    def __init__(self, field: str, expression: str, message: str) -> None:
        super().__init__(f"Failed to evaluate '{field}' ({expression!r}): {message}")
        self.field = field
        self.expression = expression


class EmitError(DataStoreError):
    """Raised when the sink rejects a record."""

    def __init__(self, message: str, record: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.record = record


class StatsError(DataStoreError):
    """Raised when the stats recorder fails while a line is in progress."""

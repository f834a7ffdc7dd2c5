# src/jsonds/plugins/base.py
"""Base classes for plugin implementations.

These provide common functionality and ensure proper interface compliance.
Plugins can subclass these for convenience, or implement protocols directly.
"""

from abc import ABC, abstractmethod
from typing import Any

from jsonds.contracts import DataStoreParams


class BaseSink(ABC):
    """Base class for sink plugins.

    Subclass and implement store() and close().

    Example:
        class ListSink(BaseSink):
            name = "list"

            def store(self, params, record):
                self.records.append(record)

            def close(self):
                pass
    """

    name: str
    plugin_version: str = "0.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with configuration."""
        self.config = config

    @abstractmethod
    def store(self, params: DataStoreParams, record: dict[str, Any]) -> None:
        """Store one record.

        Args:
            params: Parameters of the current run
            record: Merged record for one input line

        Raises:
            Any exception. The ingestion loop records it as a per-line fault.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close and release resources."""
        ...


class BaseEvaluator(ABC):
    """Base class for script evaluator plugins.

    script_types lists the script type hints this evaluator understands.
    """

    name: str
    script_types: tuple[str, ...] = ()
    plugin_version: str = "0.0.0"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        """Initialize with configuration."""
        self.config = config or {}

    def supports(self, script_type: str) -> bool:
        return script_type.lower() in self.script_types

    @abstractmethod
    def evaluate(
        self,
        script_type: str,
        expression: str,
        context: dict[str, Any],
    ) -> Any:
        """Evaluate an expression against the merge context."""
        ...

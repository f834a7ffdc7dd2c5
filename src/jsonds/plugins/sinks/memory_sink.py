"""In-memory sink plugin.

Collects records in a list. Useful for previews and for tests that want
to inspect exactly what the ingestion loop emitted.
"""

from typing import Any

from pydantic import Field

from jsonds.contracts import DataStoreParams
from jsonds.plugins.base import BaseSink
from jsonds.plugins.config_base import PluginConfig


class MemorySinkConfig(PluginConfig):
    """Configuration for memory sink plugin."""

    limit: int | None = Field(default=None, gt=0)


class MemorySink(BaseSink):
    """Keep stored records in memory.

    Config options:
        limit: Maximum number of records to accept. Storing past the limit
            raises OverflowError (recorded as a per-line fault).
    """

    name = "memory"
    plugin_version = "1.0.0"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config or {})
        cfg = MemorySinkConfig.from_dict(self.config)
        self._limit = cfg.limit
        self.records: list[dict[str, Any]] = []

    def store(self, params: DataStoreParams, record: dict[str, Any]) -> None:
        if self._limit is not None and len(self.records) >= self._limit:
            raise OverflowError(f"memory sink limit of {self._limit} records reached")
        self.records.append(record)

    def close(self) -> None:
        """Nothing to release; records stay available for inspection."""
        pass

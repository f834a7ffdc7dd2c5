"""JSON-Lines sink plugin.

Writes each stored record as one JSON object per line.
"""

import json
from typing import IO, Any, Literal

from jsonds.contracts import DataStoreParams
from jsonds.plugins.base import BaseSink
from jsonds.plugins.config_base import PathConfig


class JSONLSinkConfig(PathConfig):
    """Configuration for JSONL sink plugin."""

    mode: Literal["write", "append"] = "write"
    encoding: str = "utf-8"
    ensure_ascii: bool = False


class JSONLSink(BaseSink):
    """Write records to a JSON-Lines file.

    Config options:
        path: Path to output file (required)
        mode: "write" truncates on first store, "append" keeps existing lines
        encoding: File encoding (default: "utf-8")
        ensure_ascii: Escape non-ASCII characters (default: False)

    A record that cannot be serialized raises TypeError from store(), which
    the ingestion loop records as a per-line fault. Nothing is written for
    that record.
    """

    name = "jsonl"
    plugin_version = "1.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        cfg = JSONLSinkConfig.from_dict(config)
        self._path = cfg.resolved_path()
        self._encoding = cfg.encoding
        self._mode = "a" if cfg.mode == "append" else "w"
        self._ensure_ascii = cfg.ensure_ascii
        self._file: IO[str] | None = None
        self.records_written = 0

    @property
    def path(self) -> str:
        return str(self._path)

    def store(self, params: DataStoreParams, record: dict[str, Any]) -> None:
        # Serialize before touching the file so a bad record leaves no partial line
        line = json.dumps(record, ensure_ascii=self._ensure_ascii)
        if self._file is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self._path, self._mode, encoding=self._encoding)  # noqa: SIM115 - lifecycle managed by class
        self._file.write(line)
        self._file.write("\n")
        self.records_written += 1

    def flush(self) -> None:
        """Flush buffered data to disk."""
        if self._file is not None:
            self._file.flush()

    def close(self) -> None:
        """Close the file handle."""
        if self._file is not None:
            self._file.close()
            self._file = None

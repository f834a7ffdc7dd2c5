# src/jsonds/engine/datastore.py
"""JsonDataStore: the entry point the surrounding crawler calls.

Validates that the run has somewhere to read from, selects files and hands
them to the ingestion loop. Per-line faults never leave store_data();
only ConfigurationError does.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from jsonds.contracts import (
    DEFAULT_FILE_SUFFIXES,
    DataConfig,
    DataStoreParams,
    IngestionResult,
)
from jsonds.engine.merger import resolve_script_type
from jsonds.engine.processor import IngestionProcessor
from jsonds.engine.selector import resolve_file_encoding, select_files
from jsonds.plugins.protocols import (
    EvaluatorProtocol,
    FailureRecorderProtocol,
    SinkProtocol,
    StatsRecorderProtocol,
)

logger = structlog.get_logger(__name__)


class JsonDataStore:
    """Data store reading JSON / JSON-Lines files.

    Collaborators are injected. When omitted, the built-in failure
    recorder, stats recorder and python expression evaluator are used.

    Example:
        store = JsonDataStore()
        store.set_file_suffixes([".ndjson"])
        store.store_data(DataConfig(), sink, {"directories": "/data"}, {}, {})
    """

    def __init__(
        self,
        failure_recorder: FailureRecorderProtocol | None = None,
        stats: StatsRecorderProtocol | None = None,
        evaluator: EvaluatorProtocol | None = None,
    ) -> None:
        if failure_recorder is None:
            from jsonds.core.failures import FailureRecorder

            failure_recorder = FailureRecorder()
        if stats is None:
            from jsonds.core.stats import CrawlerStats

            stats = CrawlerStats()
        if evaluator is None:
            from jsonds.plugins.evaluators.python_evaluator import (
                PythonExpressionEvaluator,
            )

            evaluator = PythonExpressionEvaluator()

        self.failure_recorder = failure_recorder
        self.stats = stats
        self.evaluator = evaluator
        self._file_suffixes: tuple[str, ...] = DEFAULT_FILE_SUFFIXES

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def file_suffixes(self) -> tuple[str, ...]:
        return self._file_suffixes

    def set_file_suffixes(self, suffixes: Sequence[str]) -> None:
        """Replace the accepted file name suffixes for subsequent runs."""
        self._file_suffixes = tuple(suffixes)

    def store_data(
        self,
        data_config: DataConfig,
        sink: SinkProtocol,
        params: DataStoreParams | Mapping[str, Any],
        script_map: Mapping[str, str],
        default_data: Mapping[str, Any],
    ) -> IngestionResult:
        """Ingest every selected file into the sink.

        Raises:
            ConfigurationError: If both files and directories are blank.
        """
        if not isinstance(params, DataStoreParams):
            params = DataStoreParams.from_dict(params)

        encoding = resolve_file_encoding(params)
        files = select_files(params, self._file_suffixes)
        if not files:
            logger.warning("No files to process")
            return IngestionResult()

        processor = IngestionProcessor(
            sink, self.failure_recorder, self.stats, self.evaluator
        )
        return processor.run(
            data_config,
            params,
            script_map,
            default_data,
            files,
            encoding,
            resolve_script_type(params),
        )

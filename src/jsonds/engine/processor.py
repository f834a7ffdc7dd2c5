# src/jsonds/engine/processor.py
"""Ingestion loop: per-file, per-line decode -> merge -> emit.

Per file:
    OPENING -> READING -> (DECODING -> MERGING -> EMITTING -> RECORDING)* -> CLOSED

Any fault while decoding, merging, emitting or reporting stats for a line
is recorded with the failure recorder and the loop moves on to the next
line. A file that cannot be opened is logged and skipped; the remaining
files are still processed.

There is no cancellation: a sink, evaluator or stats report that raises
only fails the current line. Errors from the failure recorder itself, and
from the EXCEPTION and DONE reports made while handling a fault, propagate.
"""

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import structlog

from jsonds.contracts import (
    DataConfig,
    DataStoreParams,
    DecodeError,
    EmitError,
    EvaluationError,
    Fault,
    FaultKind,
    FileOutcome,
    IngestionResult,
    LineResult,
    LineStatus,
    OpenError,
    StatsAction,
    StatsError,
    StatsKey,
)
from jsonds.engine.decoder import decode_line
from jsonds.engine.merger import merge_fields, record_url
from jsonds.plugins.protocols import (
    EvaluatorProtocol,
    FailureRecorderProtocol,
    SinkProtocol,
    StatsRecorderProtocol,
)

logger = structlog.get_logger(__name__)


class IngestionProcessor:
    """Feeds every line of the selected files through to the sink.

    All collaborators are passed in; nothing is looked up globally.

    Example:
        processor = IngestionProcessor(sink, FailureRecorder(), CrawlerStats(), evaluator)
        result = processor.run(data_config, params, script_map, defaults, files, "utf-8", "python")
        result.records_stored
    """

    def __init__(
        self,
        sink: SinkProtocol,
        failure_recorder: FailureRecorderProtocol,
        stats: StatsRecorderProtocol,
        evaluator: EvaluatorProtocol,
    ) -> None:
        self._sink = sink
        self._failure_recorder = failure_recorder
        self._stats = stats
        self._evaluator = evaluator

    def run(
        self,
        data_config: DataConfig,
        params: DataStoreParams,
        script_map: Mapping[str, str],
        default_data: Mapping[str, Any],
        files: Sequence[Path],
        encoding: str,
        script_type: str,
    ) -> IngestionResult:
        """Process files in order, one fully before the next."""
        result = IngestionResult()
        for path in files:
            result.files.append(
                self.process_file(
                    data_config, params, script_map, default_data, path, encoding, script_type
                )
            )
        logger.info(
            "Ingestion finished",
            files=result.files_processed,
            skipped=result.files_skipped,
            stored=result.records_stored,
            failed=result.records_failed,
        )
        return result

    def process_file(
        self,
        data_config: DataConfig,
        params: DataStoreParams,
        script_map: Mapping[str, str],
        default_data: Mapping[str, Any],
        path: Path,
        encoding: str,
        script_type: str,
    ) -> FileOutcome:
        """Process every line of one file.

        Bytes that are invalid in the file encoding are replaced with
        U+FFFD, so a damaged line fails on its own as a decode fault and
        reading continues with the next line. Never raises for I/O problems
        with this file; they end the file and are reported on the returned
        FileOutcome.
        """
        abs_path = str(path.absolute())
        outcome = FileOutcome(path=abs_path)
        logger.info("Loading file", file=abs_path)

        try:
            f = open(path, encoding=encoding, errors="replace")  # noqa: SIM115 - closed by the with block below
        except (OSError, LookupError) as e:
            error = OpenError(abs_path, str(e))
            logger.warning("Source file could not be opened", file=abs_path, error=str(error))
            outcome.opened = False
            return outcome

        with f:
            try:
                for line in f:
                    outcome.lines += 1
                    key = StatsKey.for_line(abs_path, outcome.lines)
                    if self._process_keyed_line(
                        key, line, data_config, params, script_map, default_data, script_type
                    ):
                        outcome.stored += 1
                    else:
                        outcome.failed += 1
            except OSError as e:
                logger.warning(
                    "IO error occurred while reading source file",
                    file=abs_path,
                    line=outcome.lines + 1,
                    error=str(e),
                )
        return outcome

    def _process_keyed_line(
        self,
        key: StatsKey,
        line: str,
        data_config: DataConfig,
        params: DataStoreParams,
        script_map: Mapping[str, str],
        default_data: Mapping[str, Any],
        script_type: str,
    ) -> bool:
        """Run one line between stats begin/done. Returns True if stored."""
        try:
            result = self._track_line(
                key, line, params, script_map, default_data, script_type
            )
            match result.outcome:
                case LineStatus.STORED:
                    return True
                case LineStatus.FAILED if result.fault is not None:
                    self._handle_fault(data_config, key, result.record, result.fault)
                    return False
            raise AssertionError(f"Unexpected line result: {result!r}")
        finally:
            self._stats.done(key)

    def _track_line(
        self,
        key: StatsKey,
        line: str,
        params: DataStoreParams,
        script_map: Mapping[str, str],
        default_data: Mapping[str, Any],
        script_type: str,
    ) -> LineResult:
        """process_line bracketed by BEGIN and FINISHED.

        A stats recorder failure at either end fails the line like any
        other fault.
        """
        try:
            self._report(self._stats.begin, key)
        except StatsError as e:
            return LineResult.failed(Fault.from_error(FaultKind.STATS, e), dict(default_data))

        result = self.process_line(key, line, params, script_map, default_data, script_type)
        if result.outcome is LineStatus.STORED:
            try:
                self._report(self._stats.record, key, StatsAction.FINISHED)
            except StatsError as e:
                return LineResult.failed(Fault.from_error(FaultKind.STATS, e), result.record)
        return result

    def process_line(
        self,
        key: StatsKey,
        line: str,
        params: DataStoreParams,
        script_map: Mapping[str, str],
        default_data: Mapping[str, Any],
        script_type: str,
    ) -> LineResult:
        """Decode, merge and emit one line.

        Reports PREPARED and EVALUATED to the stats recorder and attaches
        the record's url to the key. Returns a failed LineResult instead
        of raising for decode, evaluation, stats and sink errors.
        """
        data: dict[str, Any] = dict(default_data)

        try:
            source = decode_line(line)
        except DecodeError as e:
            return LineResult.failed(Fault.from_error(FaultKind.DECODE, e), data)

        try:
            merge_fields(
                source,
                params,
                script_map,
                default_data,
                self._evaluator,
                script_type,
                on_prepared=lambda: self._report(self._stats.record, key, StatsAction.PREPARED),
                data=data,
            )
            self._report(self._stats.record, key, StatsAction.EVALUATED)
        except EvaluationError as e:
            return LineResult.failed(Fault.from_error(FaultKind.EVALUATE, e), data)
        except StatsError as e:
            return LineResult.failed(Fault.from_error(FaultKind.STATS, e), data)

        url = record_url(data)
        if url is not None:
            key.url = url

        try:
            self._emit(params, data)
        except EmitError as e:
            return LineResult.failed(Fault.from_error(FaultKind.EMIT, e), data)
        return LineResult.stored(data)

    def _report(self, method: Callable[..., None], *args: Any) -> None:
        try:
            method(*args)
        except Exception as e:
            raise StatsError(f"Stats recorder failed: {e}") from e

    def _emit(self, params: DataStoreParams, record: dict[str, Any]) -> None:
        try:
            self._sink.store(params, record)
        except Exception as e:
            raise EmitError(f"Sink rejected record: {e}", record=record) from e

    def _handle_fault(
        self,
        data_config: DataConfig,
        key: StatsKey,
        record: dict[str, Any],
        fault: Fault,
    ) -> None:
        logger.warning(
            "Crawling access exception",
            key=key.id,
            kind=fault.kind.value,
            classification=fault.classification,
            record=record,
            error=fault.message,
        )
        self._failure_recorder.record(data_config, fault.classification, key.id, fault.error)
        self._stats.record(key, StatsAction.EXCEPTION)

"""Shared contracts for cross-boundary data types.

All dataclasses, enums and exceptions that cross subsystem boundaries
are defined here.

Import pattern:
    from jsonds.contracts import DataStoreParams, LineResult, StatsAction
"""

from jsonds.contracts.data import (
    DEFAULT_FILE_ENCODING,
    DEFAULT_FILE_SUFFIXES,
    DEFAULT_SCRIPT_TYPE,
    DIRS_PARAM,
    FILE_ENCODING_PARAM,
    FILES_PARAM,
    RECOGNIZED_PARAMS,
    SCRIPT_TYPE_PARAM,
    DataConfig,
    DataStoreParams,
    JsonValue,
    Record,
    StatsKey,
)
from jsonds.contracts.enums import FaultKind, LineStatus, StatsAction
from jsonds.contracts.errors import (
    ConfigurationError,
    DataStoreError,
    DecodeError,
    EmitError,
    EvaluationError,
    FileAccessWarning,
    OpenError,
    StatsError,
)
from jsonds.contracts.results import (
    Fault,
    FileOutcome,
    IngestionResult,
    LineResult,
    classify,
)

__all__ = [
    "DEFAULT_FILE_ENCODING",
    "DEFAULT_FILE_SUFFIXES",
    "DEFAULT_SCRIPT_TYPE",
    "DIRS_PARAM",
    "FILES_PARAM",
    "FILE_ENCODING_PARAM",
    "RECOGNIZED_PARAMS",
    "SCRIPT_TYPE_PARAM",
    "ConfigurationError",
    "DataConfig",
    "DataStoreError",
    "DataStoreParams",
    "DecodeError",
    "EmitError",
    "EvaluationError",
    "Fault",
    "FaultKind",
    "FileAccessWarning",
    "FileOutcome",
    "IngestionResult",
    "JsonValue",
    "LineResult",
    "LineStatus",
    "OpenError",
    "Record",
    "StatsAction",
    "StatsError",
    "StatsKey",
    "classify",
]

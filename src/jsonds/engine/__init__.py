"""Ingestion engine: file selection, decoding, merging and the per-line loop.

Exports:
- JsonDataStore: entry point for a run
- IngestionProcessor: the per-file, per-line loop
- select_files / is_desired_file / resolve_file_encoding: file selection
- decode_line: record decoder
- merge_fields: field merger

Example:
    from jsonds.engine import JsonDataStore

    store = JsonDataStore()
    result = store.store_data(data_config, sink, params, script_map, defaults)
"""

from jsonds.engine.datastore import JsonDataStore
from jsonds.engine.decoder import decode_line
from jsonds.engine.expression_parser import (
    ExpressionEvaluationError,
    ExpressionParser,
    ExpressionSecurityError,
    ExpressionSyntaxError,
)
from jsonds.engine.merger import build_context, merge_fields, resolve_script_type
from jsonds.engine.processor import IngestionProcessor
from jsonds.engine.selector import (
    is_desired_file,
    list_directory,
    resolve_file_encoding,
    select_files,
)

__all__ = [
    "ExpressionEvaluationError",
    "ExpressionParser",
    "ExpressionSecurityError",
    "ExpressionSyntaxError",
    "IngestionProcessor",
    "JsonDataStore",
    "build_context",
    "decode_line",
    "is_desired_file",
    "list_directory",
    "merge_fields",
    "resolve_file_encoding",
    "resolve_script_type",
    "select_files",
]

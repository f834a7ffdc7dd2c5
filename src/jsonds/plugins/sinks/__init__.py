"""Built-in sink plugins.

Sinks store the records produced by the ingestion loop.
"""

from jsonds.plugins.sinks.jsonl_sink import JSONLSink
from jsonds.plugins.sinks.memory_sink import MemorySink

__all__ = ["JSONLSink", "MemorySink"]

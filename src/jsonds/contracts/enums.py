"""Status codes and kinds used across subsystem boundaries."""

from enum import Enum


class StatsAction(str, Enum):
    """Phase of a single record's processing, reported to the stats recorder.

    Uses (str, Enum) so the value can be logged and serialized directly.
    """

    BEGIN = "begin"
    PREPARED = "prepared"
    EVALUATED = "evaluated"
    FINISHED = "finished"
    EXCEPTION = "exception"
    DONE = "done"


class FaultKind(str, Enum):
    """Which step of the per-line sequence produced a fault.

    The ingestion loop handles every kind identically. The kind only
    travels with the failure record for later inspection.
    """

    DECODE = "decode"
    EVALUATE = "evaluate"
    EMIT = "emit"
    STATS = "stats"


class LineStatus(Enum):
    """Outcome of processing one physical line.

    Derived from the LineResult, never stored. Plain Enum, not (str, Enum).
    """

    STORED = "stored"
    FAILED = "failed"

"""Core infrastructure: settings loading, stats and failure recording."""

from jsonds.core.config import (
    DataStoreSettings,
    EvaluatorSettings,
    JsondsSettings,
    SinkSettings,
    StatsSettings,
    load_settings,
    resolve_config,
)
from jsonds.core.failures import FailureRecord, FailureRecorder
from jsonds.core.stats import CrawlerStats, StatsEntry

__all__ = [
    "CrawlerStats",
    "DataStoreSettings",
    "EvaluatorSettings",
    "FailureRecord",
    "FailureRecorder",
    "JsondsSettings",
    "SinkSettings",
    "StatsEntry",
    "StatsSettings",
    "load_settings",
    "resolve_config",
]

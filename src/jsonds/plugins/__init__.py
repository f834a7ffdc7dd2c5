# src/jsonds/plugins/__init__.py
"""Plugin system: sinks and script evaluators via pluggy.

- Protocols: Type contracts for collaborators of the ingestion loop
- Base classes: Convenient base classes for sinks and evaluators
- Config: Pydantic-based typed plugin configuration
- Manager: Plugin discovery and registration
- Hookspecs: pluggy hook definitions
"""

from jsonds.plugins.base import BaseEvaluator, BaseSink
from jsonds.plugins.config_base import PathConfig, PluginConfig, PluginConfigError
from jsonds.plugins.hookspecs import hookimpl, hookspec
from jsonds.plugins.manager import PluginManager, PluginSpec
from jsonds.plugins.protocols import (
    EvaluatorProtocol,
    FailureRecorderProtocol,
    SinkProtocol,
    StatsRecorderProtocol,
)

__all__ = [
    "BaseEvaluator",
    "BaseSink",
    "EvaluatorProtocol",
    "FailureRecorderProtocol",
    "PathConfig",
    "PluginConfig",
    "PluginConfigError",
    "PluginManager",
    "PluginSpec",
    "SinkProtocol",
    "StatsRecorderProtocol",
    "hookimpl",
    "hookspec",
]

"""Plugin manager for discovery, registration, and lookup.

Uses pluggy for hook-based plugin registration.
"""

from dataclasses import dataclass
from typing import Any, Literal

import pluggy

from jsonds.plugins.hookspecs import (
    PROJECT_NAME,
    JsondsEvaluatorSpec,
    JsondsSinkSpec,
)
from jsonds.plugins.protocols import EvaluatorProtocol, SinkProtocol


@dataclass(frozen=True)
class PluginSpec:
    """Registration record for a plugin."""

    name: str
    kind: Literal["sink", "evaluator"]
    version: str

    @classmethod
    def from_plugin(
        cls, plugin_cls: type, kind: Literal["sink", "evaluator"]
    ) -> "PluginSpec":
        """Create spec from plugin class.

        Raises:
            ValueError: If plugin is missing required 'name' or 'plugin_version' attributes
        """
        try:
            name = plugin_cls.name  # type: ignore[attr-defined]
        except AttributeError:
            raise ValueError(
                f"Plugin {plugin_cls.__name__} must define 'name' attribute. "
                f"Add: name = 'your_plugin_name' to the class."
            ) from None

        try:
            version = plugin_cls.plugin_version  # type: ignore[attr-defined]
        except AttributeError:
            raise ValueError(
                f"Plugin {plugin_cls.__name__} must define 'plugin_version' attribute. "
                f"Add: plugin_version = '1.0.0' to the class."
            ) from None

        return cls(name=name, kind=kind, version=version)


class PluginManager:
    """Manages plugin discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        sink_cls = manager.get_sink_by_name("jsonl")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(JsondsSinkSpec)
        self._pm.add_hookspecs(JsondsEvaluatorSpec)

        self._sinks: dict[str, type[SinkProtocol]] = {}
        self._evaluators: dict[str, type[EvaluatorProtocol]] = {}

    def register_builtin_plugins(self) -> None:
        """Register all built-in plugin hook implementers."""
        from jsonds.plugins.evaluators.hookimpl import builtin_evaluators
        from jsonds.plugins.sinks.hookimpl import builtin_sinks

        self.register(builtin_sinks)
        self.register(builtin_evaluators)

    def register(self, plugin: Any) -> None:
        """Register a hook implementer and refresh the caches."""
        self._pm.register(plugin)
        self._refresh_caches()

    @staticmethod
    def _collect(results: list[list[type[Any]]], kind: str) -> dict[str, type[Any]]:
        collected: dict[str, type[Any]] = {}
        for classes in results:
            for cls in classes:
                name = cls.name
                if name in collected:
                    raise ValueError(
                        f"Duplicate {kind} plugin name: '{name}'. "
                        f"Already registered by {collected[name].__name__}"
                    )
                collected[name] = cls
        return collected

    def _refresh_caches(self) -> None:
        """Refresh plugin caches from hooks.

        Raises:
            ValueError: If a plugin with the same name and type is already registered
        """
        sinks = self._collect(self._pm.hook.jsonds_get_sinks(), "sink")
        evaluators = self._collect(self._pm.hook.jsonds_get_evaluators(), "evaluator")

        # All validated, update caches
        self._sinks = sinks
        self._evaluators = evaluators

    def get_sinks(self) -> list[type[SinkProtocol]]:
        """Get all registered sink plugins."""
        return list(self._sinks.values())

    def get_evaluators(self) -> list[type[EvaluatorProtocol]]:
        """Get all registered evaluator plugins."""
        return list(self._evaluators.values())

    def get_sink_by_name(self, name: str) -> type[SinkProtocol] | None:
        return self._sinks.get(name)

    def get_evaluator_by_name(self, name: str) -> type[EvaluatorProtocol] | None:
        return self._evaluators.get(name)

    def specs(self) -> list[PluginSpec]:
        """Registration records for every known plugin, sinks first."""
        return [PluginSpec.from_plugin(c, "sink") for c in self._sinks.values()] + [
            PluginSpec.from_plugin(c, "evaluator") for c in self._evaluators.values()
        ]

# src/jsonds/plugins/hookspecs.py
"""pluggy hook specifications for jsonds plugins.

Plugins implement these hooks to register themselves with the framework.
The plugin manager calls these hooks during discovery.

Usage (implementing a plugin):
    from jsonds.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def jsonds_get_sinks(self):
            return [MySink]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from jsonds.plugins.protocols import EvaluatorProtocol, SinkProtocol

# Project name for pluggy
PROJECT_NAME = "jsonds"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class JsondsSinkSpec:
    """Hook specifications for sink plugins."""

    @hookspec
    def jsonds_get_sinks(self) -> list[type["SinkProtocol"]]:  # type: ignore[empty-body]
        """Return sink plugin classes.

        Returns:
            List of Sink plugin classes (not instances)
        """


class JsondsEvaluatorSpec:
    """Hook specifications for script evaluator plugins."""

    @hookspec
    def jsonds_get_evaluators(self) -> list[type["EvaluatorProtocol"]]:  # type: ignore[empty-body]
        """Return evaluator plugin classes.

        Returns:
            List of Evaluator plugin classes
        """

"""Hook implementation for built-in evaluator plugins."""

from typing import Any

from jsonds.plugins.hookspecs import hookimpl


class JsondsBuiltinEvaluators:
    """Hook implementer for built-in evaluator plugins."""

    @hookimpl
    def jsonds_get_evaluators(self) -> list[type[Any]]:
        """Return built-in evaluator plugin classes."""
        from jsonds.plugins.evaluators.python_evaluator import (
            PythonExpressionEvaluator,
        )

        return [PythonExpressionEvaluator]


builtin_evaluators = JsondsBuiltinEvaluators()

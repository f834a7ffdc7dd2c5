"""Built-in script evaluator plugins."""

from jsonds.plugins.evaluators.python_evaluator import (
    PythonExpressionEvaluator,
    UnsupportedScriptTypeError,
)

__all__ = ["PythonExpressionEvaluator", "UnsupportedScriptTypeError"]

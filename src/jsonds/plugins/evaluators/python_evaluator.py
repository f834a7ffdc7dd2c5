"""Expression evaluator plugin backed by the safe expression parser."""

from typing import Any

from jsonds.engine.expression_parser import ExpressionParser
from jsonds.plugins.base import BaseEvaluator


class UnsupportedScriptTypeError(ValueError):
    """Raised when a script type hint names a language this evaluator lacks."""


class PythonExpressionEvaluator(BaseEvaluator):
    """Evaluate script expressions with ExpressionParser.

    Parsed expressions are cached per expression string, so each script
    entry is parsed once per evaluator rather than once per record.
    """

    name = "python"
    script_types = ("python", "expression")
    plugin_version = "1.0.0"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._parsers: dict[str, ExpressionParser] = {}

    def evaluate(
        self,
        script_type: str,
        expression: str,
        context: dict[str, Any],
    ) -> Any:
        if not self.supports(script_type):
            raise UnsupportedScriptTypeError(
                f"Unsupported script type '{script_type}'. "
                f"Supported: {', '.join(self.script_types)}"
            )
        parser = self._parsers.get(expression)
        if parser is None:
            parser = ExpressionParser(expression)
            self._parsers[expression] = parser
        return parser.evaluate(context)

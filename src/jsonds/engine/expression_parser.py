# src/jsonds/engine/expression_parser.py
"""Safe expression parser for script field mappings.

Script mappings assign an expression to each output field. Expressions are
evaluated against the merge context (parameters overlaid with the decoded
line). Only a small subset of Python expression syntax is accepted:

- literals: strings, numbers, booleans, None, lists, tuples, sets, dicts
- field references: bare names (``title``), ``record['title']``,
  ``record.get('title', default)``
- operators: arithmetic, comparison, boolean, membership, identity
- conditional expressions: ``a if cond else b``
- calls to a fixed set of pure helpers (``str``, ``int``, ``len``, ...)

Everything else is rejected when the expression is parsed, before any
record is seen.
"""

import ast
import operator
from collections.abc import Callable, Mapping
from typing import Any

RECORD_NAME = "record"

_SAFE_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "len": len,
    "abs": abs,
    "min": min,
    "max": max,
    "round": round,
}

_FORBIDDEN_NAMES = frozenset(
    {
        "eval",
        "exec",
        "compile",
        "open",
        "globals",
        "locals",
        "vars",
        "getattr",
        "setattr",
        "delattr",
        "input",
        "breakpoint",
    }
)

_BINARY_OPS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

_UNARY_OPS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
}

_COMPARE_OPS: dict[type[ast.cmpop], Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}

_REJECTED_NODES: dict[type[ast.AST], str] = {
    ast.Lambda: "Lambda expressions are not allowed",
    ast.ListComp: "List comprehensions are not allowed",
    ast.DictComp: "Dict comprehensions are not allowed",
    ast.SetComp: "Set comprehensions are not allowed",
    ast.GeneratorExp: "Generator expressions are not allowed",
    ast.NamedExpr: "Assignment expressions (:=) are not allowed",
    ast.JoinedStr: "F-string expressions are not allowed",
    ast.Starred: "Starred expressions are not allowed",
    ast.Await: "Await expressions are not allowed",
    ast.Yield: "Yield expressions are not allowed",
    ast.YieldFrom: "Yield expressions are not allowed",
    ast.Slice: "Slices are not allowed",
}


class ExpressionSyntaxError(Exception):
    """Expression is not valid Python expression syntax."""


class ExpressionSecurityError(Exception):
    """Expression uses a construct outside the allowed subset."""


class ExpressionEvaluationError(Exception):
    """Expression failed while being evaluated against a context."""


class _Validator(ast.NodeVisitor):
    """Walks the AST once at parse time and rejects forbidden constructs."""

    def generic_visit(self, node: ast.AST) -> None:
        message = _REJECTED_NODES.get(type(node))
        if message is not None:
            raise ExpressionSecurityError(message)
        super().generic_visit(node)

    def visit_Name(self, node: ast.Name) -> None:
        if node.id.startswith("_") or node.id in _FORBIDDEN_NAMES:
            raise ExpressionSecurityError(f"Forbidden name: {node.id}")

    def visit_Attribute(self, node: ast.Attribute) -> None:
        # Only record.get is reachable, and only as a call (see visit_Call)
        raise ExpressionSecurityError(f"Forbidden record attribute: {node.attr}")

    def visit_BinOp(self, node: ast.BinOp) -> None:
        if type(node.op) not in _BINARY_OPS:
            raise ExpressionSecurityError(f"Forbidden operator: {type(node.op).__name__}")
        self.generic_visit(node)

    def visit_UnaryOp(self, node: ast.UnaryOp) -> None:
        if type(node.op) not in _UNARY_OPS:
            raise ExpressionSecurityError(f"Forbidden operator: {type(node.op).__name__}")
        self.generic_visit(node)

    def visit_Dict(self, node: ast.Dict) -> None:
        if any(key is None for key in node.keys):
            raise ExpressionSecurityError("Dict spread (**) is not allowed")
        self.generic_visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if isinstance(func, ast.Attribute):
            if not (
                isinstance(func.value, ast.Name)
                and func.value.id == RECORD_NAME
                and func.attr == "get"
            ):
                raise ExpressionSecurityError(f"Forbidden record attribute: {func.attr}")
            if node.keywords:
                raise ExpressionSecurityError("record.get() does not accept keyword arguments")
            if not 1 <= len(node.args) <= 2:
                raise ExpressionSecurityError("record.get() requires 1 or 2 arguments")
        elif isinstance(func, ast.Name):
            if func.id.startswith("_") or func.id in _FORBIDDEN_NAMES:
                raise ExpressionSecurityError(f"Forbidden name: {func.id}")
            if func.id not in _SAFE_FUNCTIONS:
                raise ExpressionSecurityError(f"Forbidden function call: {func.id}")
            if node.keywords:
                raise ExpressionSecurityError(f"{func.id}() does not accept keyword arguments")
        else:
            raise ExpressionSecurityError("Forbidden function call")
        for arg in node.args:
            self.visit(arg)


class ExpressionParser:
    """Parse once, evaluate against many contexts.

    Example:
        parser = ExpressionParser("title + ' (' + record.get('lang', 'en') + ')'")
        parser.evaluate({"title": "Test"})  # "Test (en)"
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        try:
            tree = ast.parse(expression, mode="eval")
        except SyntaxError as e:
            raise ExpressionSyntaxError(f"Invalid syntax: {e.msg}") from e
        _Validator().visit(tree)
        self._tree = tree

    @property
    def expression(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f'ExpressionParser("{self._expression}")'

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        """Evaluate the expression against a field context.

        Raises:
            ExpressionEvaluationError: On unknown fields or operator failures
                (e.g. adding a string to a number).
        """
        try:
            return self._eval(self._tree.body, context)
        except ExpressionEvaluationError:
            raise
        except (TypeError, ValueError, KeyError, IndexError, ZeroDivisionError) as e:
            raise ExpressionEvaluationError(f"{type(e).__name__}: {e}") from e

    def _eval(self, node: ast.AST, ctx: Mapping[str, Any]) -> Any:
        match node:
            case ast.Constant(value=value):
                return value
            case ast.Name(id=name):
                if name == RECORD_NAME:
                    return ctx
                if name in ctx:
                    return ctx[name]
                raise ExpressionEvaluationError(f"Unknown field: {name}")
            case ast.Subscript(value=value, slice=index):
                return self._eval(value, ctx)[self._eval(index, ctx)]
            case ast.Call(func=ast.Attribute(attr="get"), args=args):
                values = [self._eval(a, ctx) for a in args]
                return ctx.get(*values)
            case ast.Call(func=ast.Name(id=name), args=args):
                return _SAFE_FUNCTIONS[name](*(self._eval(a, ctx) for a in args))
            case ast.BinOp(left=left, op=op, right=right):
                return _BINARY_OPS[type(op)](self._eval(left, ctx), self._eval(right, ctx))
            case ast.UnaryOp(op=op, operand=operand):
                return _UNARY_OPS[type(op)](self._eval(operand, ctx))
            case ast.BoolOp(op=ast.And(), values=values):
                result: Any = True
                for v in values:
                    result = self._eval(v, ctx)
                    if not result:
                        return result
                return result
            case ast.BoolOp(op=ast.Or(), values=values):
                result = False
                for v in values:
                    result = self._eval(v, ctx)
                    if result:
                        return result
                return result
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                current = self._eval(left, ctx)
                for op, comparator in zip(ops, comparators, strict=True):
                    right = self._eval(comparator, ctx)
                    if not _COMPARE_OPS[type(op)](current, right):
                        return False
                    current = right
                return True
            case ast.IfExp(test=test, body=body, orelse=orelse):
                return self._eval(body if self._eval(test, ctx) else orelse, ctx)
            case ast.List(elts=elts):
                return [self._eval(e, ctx) for e in elts]
            case ast.Tuple(elts=elts):
                return tuple(self._eval(e, ctx) for e in elts)
            case ast.Set(elts=elts):
                return {self._eval(e, ctx) for e in elts}
            case ast.Dict(keys=keys, values=values):
                return {
                    self._eval(k, ctx): self._eval(v, ctx)
                    for k, v in zip(keys, values, strict=True)
                    if k is not None
                }
        raise ExpressionSecurityError(f"Unsupported expression: {type(node).__name__}")

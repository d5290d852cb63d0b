"""Expression syntax tree and the parser that produces it.

Expressions are parsed with Python's own ``ast`` module and translated into a
small closed set of node types. Only the shape the evaluator needs survives
the translation: operator symbols, child nodes and, for numeric literals, the
exact source text as the user typed it.
"""
from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import Union

from inline_calc.services.errors import ExpressionSyntaxError


@dataclass(frozen=True)
class BinaryExpression:
    operator: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class UnaryExpression:
    operator: str
    argument: "Node"


@dataclass(frozen=True)
class Literal:
    raw: str


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class CallExpression:
    callee: "Node"
    arguments: tuple["Node", ...]


@dataclass(frozen=True)
class Compound:
    body: tuple["Node", ...]


@dataclass(frozen=True)
class Unsupported:
    kind: str


Node = Union[BinaryExpression, UnaryExpression, Literal, Identifier, CallExpression, Compound, Unsupported]

_BINARY_OPERATORS: dict[type[ast.operator], str] = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
    ast.Mod: "%",
    ast.Pow: "**",
    ast.FloorDiv: "//",
    ast.MatMult: "@",
    ast.LShift: "<<",
    ast.RShift: ">>",
    ast.BitAnd: "&",
    ast.BitOr: "|",
    ast.BitXor: "^",
}

_UNARY_OPERATORS: dict[type[ast.unaryop], str] = {
    ast.USub: "-",
    ast.UAdd: "+",
    ast.Invert: "~",
    ast.Not: "not",
}


def parse(expression: str) -> Node:
    """Parse expression text into a syntax tree.

    Raises ExpressionSyntaxError when the text is not a single expression.
    """
    source = expression.strip()
    try:
        tree = ast.parse(source, mode="eval")
        return _convert(tree.body, source)
    except (SyntaxError, ValueError, RecursionError) as exc:
        raise ExpressionSyntaxError(
            "Invalid arithmetic expression.", details={"expression": expression}
        ) from exc


def _convert(node: ast.AST, source: str) -> Node:
    if isinstance(node, ast.BinOp):
        return BinaryExpression(
            operator=_BINARY_OPERATORS.get(type(node.op), type(node.op).__name__),
            left=_convert(node.left, source),
            right=_convert(node.right, source),
        )

    if isinstance(node, ast.UnaryOp):
        return UnaryExpression(
            operator=_UNARY_OPERATORS.get(type(node.op), type(node.op).__name__),
            argument=_convert(node.operand, source),
        )

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            return Unsupported(kind=type(node.value).__name__)
        raw = ast.get_source_segment(source, node)
        if raw is None:
            return Unsupported(kind="Constant")
        return Literal(raw=raw)

    if isinstance(node, ast.Name):
        return Identifier(name=node.id)

    if isinstance(node, ast.Call):
        return CallExpression(
            callee=_convert(node.func, source),
            arguments=tuple(_convert(arg, source) for arg in node.args),
        )

    if isinstance(node, ast.Tuple):
        return Compound(body=tuple(_convert(element, source) for element in node.elts))

    return Unsupported(kind=type(node).__name__)

"""Arithmetic expression grammar.

Supports numbers, identifiers, parentheses, ``+ - * / %`` and assignment:

    y = 2 + x * x * (a - 5) / 3 % 15

Grammar (ordered alternatives, most specific first):

    expression  ::= add | mul | factor
    factor      ::= assignment | number | identifier | paren
    assignment  ::= identifier "=" expression
    add         ::= term ("+" | "-") (add | term)
    term        ::= mul | operand
    mul         ::= operand ("*" | "/" | "%") (mul | operand)
    operand     ::= identifier | number | paren
    paren       ::= "(" expression ")"

Left recursion:
    Recursive descent cannot evaluate ``mul ::= mul "*" operand``, so the
    chains are written right-recursively and re-associated afterwards.
    Each chain rule first produces a flat "*-chain" node holding
    operands and operators in source order; the public "add"/"mul" nodes
    are then folded from the left, so ``8 - 2 - 1`` means ``(8 - 2) - 1``.
    A parenthesized chain is already an "add"/"mul" node, never a chain
    node, so it is never flattened into its neighbours.

Node types:
    number      value: int | float
    identifier  value: str
    add, mul    value: {"lhs": Token, "op": str, "rhs": Token}
    assignment  value: {"lhs": Token (identifier), "rhs": Token}
"""

from __future__ import annotations

import operator
from collections.abc import Callable, MutableMapping
from typing import Any

from pcengine.diagnostics import EngineError, ErrorTemplate
from pcengine.syntax import (
    Alt,
    Ignore,
    Lazy,
    Opt,
    ParseOutcome,
    ParserRunner,
    Produce,
    Regex,
    Seq,
    Token,
)

__all__ = ["EXPRESSION", "UndefinedVariableError", "evaluate", "parse_expression"]

type Number = int | float

_OPERATORS: dict[str, Callable[[Number, Number], Number]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
}


class UndefinedVariableError(EngineError):
    """An identifier was evaluated before anything was assigned to it.

    Attributes:
        name: The undefined identifier
    """

    def __init__(self, name: str) -> None:
        super().__init__(ErrorTemplate.undefined_variable(name))
        self.name = name


def _number_value(num_str: str) -> Number:
    """int if no decimal point, float otherwise."""
    return int(num_str) if "." not in num_str else float(num_str)


def _flatten(chain_type: str) -> Callable[[Token[Any]], tuple[Any, ...]]:
    """Build (operand, op, operand, op, ...) out of lhs op (chain | operand)."""

    def build(token: Token[Any]) -> tuple[Any, ...]:
        lhs, op, rhs = token.value
        if rhs.type == chain_type:
            return (lhs, op.value[1], *rhs.value)
        return (lhs, op.value[1], rhs)

    return build


def _fold_left(node_type: str) -> Callable[[Token[Any]], dict[str, Any]]:
    """Re-associate a flat chain as ((a op b) op c) op d."""

    def build(token: Token[Any]) -> dict[str, Any]:
        items = token.value
        node = items[0]
        for i in range(1, len(items), 2):
            op, rhs = items[i], items[i + 1]
            node = Token(
                node.index,
                rhs.end - node.index,
                node_type,
                {"lhs": node, "op": op, "rhs": rhs},
            )
        return node.value

    return build


def _unwrap_paren(source: str, index: int) -> ParseOutcome:
    # Parentheses only group: the node keeps its inner type and value
    return _PAREN(source, index).map(lambda t: t.produce(t.value[0].type, t.value[0].value))


_WS = Regex(r"\s+")
_NUMBER = Produce(Regex(r"\d+(?:\.\d+)?"), "number", lambda t: _number_value(t.value[0]))
_IDENTIFIER = Produce(Regex(r"(?i)[a-z_][a-z_0-9]*"), "identifier", lambda t: t.value[0])
_MUL_OP = Regex(r"\s*([*/%])\s*")
_ADD_OP = Regex(r"\s*([-+])\s*")
_ASSIGN_OP = Regex(r"\s*=\s*")

_expression = Lazy(lambda: EXPRESSION)
_mul_chain = Lazy(lambda: _MUL_CHAIN)
_add_chain = Lazy(lambda: _ADD_CHAIN)

_PAREN = Seq([Ignore(Regex(r"\s*\(\s*")), _expression, Ignore(Regex(r"\s*\)\s*"))])
_OPERAND = Alt(_IDENTIFIER, _NUMBER, _unwrap_paren)

_MUL_CHAIN = Produce(
    Seq([_OPERAND, _MUL_OP, Alt(_mul_chain, _OPERAND)]), "mul-chain", _flatten("mul-chain")
)
_MUL = Produce(_MUL_CHAIN, "mul", _fold_left("mul"))
_TERM = Alt(_MUL, _OPERAND)

_ADD_CHAIN = Produce(
    Seq([_TERM, _ADD_OP, Alt(_add_chain, _TERM)]), "add-chain", _flatten("add-chain")
)
_ADD = Produce(_ADD_CHAIN, "add", _fold_left("add"))

_ASSIGNMENT = Produce(
    Seq([_IDENTIFIER, Ignore(_ASSIGN_OP), _expression]),
    "assignment",
    lambda t: {"lhs": t.value[0], "rhs": t.value[1]},
)
_FACTOR = Alt(_ASSIGNMENT, _NUMBER, _IDENTIFIER, _unwrap_paren)

EXPRESSION = Alt(_ADD, _MUL, _FACTOR)
"""Entry parser: one expression, no surrounding whitespace."""

# Trailing whitespace is stripped by parse_expression, never matched here
_PROGRAM = Seq([Ignore(Opt(_WS)), EXPRESSION])

_runner = ParserRunner(require_end=True)


def parse_expression(source: str) -> ParseOutcome:
    """Parse a complete expression, allowing surrounding whitespace.

    Only trailing whitespace is dropped before parsing, so node spans
    and error offsets still index into the original text.

    Returns:
        Ok with the expression node, or Err with the ParseError

    Example:
        >>> tree = parse_expression("8 - 2 - 1").unwrap()
        >>> tree.type, tree.value["op"], tree.value["lhs"].type
        ('add', '-', 'add')
    """
    return _runner.run(_PROGRAM, source.rstrip()).map(lambda t: t.value[0])


def evaluate(token: Token[Any], env: MutableMapping[str, Number] | None = None) -> Number:
    """Evaluate an expression tree.

    Args:
        token: Node produced by parse_expression()
        env: Variable bindings; assignments are written back into it

    Returns:
        The numeric value (an assignment yields the assigned value)

    Raises:
        UndefinedVariableError: If an identifier has no binding
        ZeroDivisionError: On division or modulo by zero
        ValueError: If the token is not an expression node
    """
    if env is None:
        env = {}

    match token.type:
        case "number":
            return token.value
        case "identifier":
            try:
                return env[token.value]
            except KeyError:
                raise UndefinedVariableError(token.value) from None
        case "assignment":
            value = evaluate(token.value["rhs"], env)
            env[token.value["lhs"].value] = value
            return value
        case "add" | "mul":
            lhs = evaluate(token.value["lhs"], env)
            rhs = evaluate(token.value["rhs"], env)
            return _OPERATORS[token.value["op"]](lhs, rhs)
        case _:
            msg = f"Not an expression node: {token.type!r}"
            raise ValueError(msg)

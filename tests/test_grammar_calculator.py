"""Tests for grammars.calculator: parsing, associativity, and evaluation."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pcengine.diagnostics import DiagnosticCode, EngineError
from pcengine.grammars.calculator import (
    UndefinedVariableError,
    evaluate,
    parse_expression,
)
from pcengine.syntax.token import Token


def _tree(source: str) -> Token[Any]:
    return parse_expression(source).unwrap()


def _shape(token: Token[Any]) -> object:
    """Reduce a tree to nested tuples for readable comparisons."""
    match token.type:
        case "add" | "mul":
            return (token.value["op"], _shape(token.value["lhs"]), _shape(token.value["rhs"]))
        case "assignment":
            return ("=", token.value["lhs"].value, _shape(token.value["rhs"]))
        case _:
            return token.value


# ============================================================================
# PARSING
# ============================================================================


class TestCalculatorParsing:
    """Test tree shapes."""

    def test_number(self) -> None:
        """Integers and decimals become number nodes."""
        assert _tree("42").type == "number"
        assert _tree("42").value == 42
        assert _tree("2.5").value == 2.5

    def test_identifier(self) -> None:
        """Names become identifier nodes."""
        token = _tree("rate_2")

        assert token.type == "identifier"
        assert token.value == "rate_2"

    def test_addition_spans_input(self) -> None:
        """The add node spans the whole expression."""
        token = _tree("12 + 7")

        assert token.type == "add"
        assert (token.index, token.end) == (0, 6)
        assert _shape(token) == ("+", 12, 7)

    def test_subtraction_is_left_associative(self) -> None:
        """8 - 2 - 1 groups as (8 - 2) - 1."""
        assert _shape(_tree("8 - 2 - 1")) == ("-", ("-", 8, 2), 1)

    def test_division_is_left_associative(self) -> None:
        """8 / 4 / 2 groups as (8 / 4) / 2."""
        assert _shape(_tree("8 / 4 / 2")) == ("/", ("/", 8, 4), 2)

    def test_precedence(self) -> None:
        """Multiplication binds tighter than addition."""
        assert _shape(_tree("1 + 2 * 3")) == ("+", 1, ("*", 2, 3))
        assert _shape(_tree("1 * 2 + 3")) == ("+", ("*", 1, 2), 3)

    def test_parentheses_group(self) -> None:
        """Parentheses override precedence and keep their inner node."""
        assert _shape(_tree("(1 + 2) * 3")) == ("*", ("+", 1, 2), 3)
        assert _shape(_tree("2 - (3 - 4)")) == ("-", 2, ("-", 3, 4))

    def test_inner_node_spans(self) -> None:
        """Re-associated inner nodes span their operands."""
        token = _tree("8 - 2 - 1")
        inner = token.value["lhs"]

        assert (inner.index, inner.end) == (0, 5)

    def test_assignment(self) -> None:
        """Assignment is tried before a bare identifier."""
        token = _tree("y = 2 + x")

        assert token.type == "assignment"
        assert _shape(token) == ("=", "y", ("+", 2, "x"))

    def test_surrounding_whitespace(self) -> None:
        """Leading and trailing whitespace is allowed."""
        assert _shape(_tree("  1+2 \n")) == ("+", 1, 2)

    @pytest.mark.parametrize(
        ("source", "shape"),
        [
            ("1+2", ("+", 1, 2)),
            ("3*x", ("*", 3, "x")),
            ("(1+2)", ("+", 1, 2)),
            ("a = 1", ("=", "a", 1)),
        ],
    )
    def test_expression_ending_at_end_of_input(self, source: str, shape: object) -> None:
        """Nothing after the last operand is required."""
        token = _tree(source)

        assert _shape(token) == shape
        assert token.end == len(source)

    def test_trailing_garbage_fails(self) -> None:
        """Input that only partly parses is rejected."""
        error = parse_expression("1 + 2 )").unwrap_err()

        assert error.code == DiagnosticCode.INCOMPLETE_PARSE

    def test_empty_input_fails(self) -> None:
        """Nothing to parse is an error, not an exception."""
        assert parse_expression("").is_err


# ============================================================================
# EVALUATION
# ============================================================================


class TestCalculatorEvaluation:
    """Test evaluate()."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("12 + 7", 19),
            ("8 - 2 - 1", 5),
            ("2 * 3 + 4", 10),
            ("2 + 3 * 4", 14),
            ("(2 + 3) * 4", 20),
            ("100 / 10 / 5", 2),
            ("17 % 5", 2),
            ("1.5 * 2", 3.0),
        ],
    )
    def test_arithmetic(self, source: str, expected: float) -> None:
        """Operators follow usual precedence and associativity."""
        assert evaluate(_tree(source)) == expected

    def test_variables(self) -> None:
        """Identifiers are looked up in env."""
        source = "y = 2 + x * x * (a - 5) / 3 % 15"
        env = {"x": 3, "a": 8}

        assert evaluate(_tree(source), env) == 11
        assert env["y"] == 11

    def test_assignment_updates_env(self) -> None:
        """Assignments write back and yield the value."""
        env: dict[str, float] = {}

        assert evaluate(_tree("a = 4"), env) == 4
        assert evaluate(_tree("a * a"), env) == 16

    def test_undefined_variable(self) -> None:
        """Reading an unbound name raises UndefinedVariableError."""
        with pytest.raises(UndefinedVariableError) as exc_info:
            evaluate(_tree("z + 1"))

        assert exc_info.value.name == "z"
        assert isinstance(exc_info.value, EngineError)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNDEFINED_VARIABLE

    def test_division_by_zero(self) -> None:
        """Division by zero propagates."""
        with pytest.raises(ZeroDivisionError):
            evaluate(_tree("1 / 0"))

    def test_unknown_node(self) -> None:
        """Non-expression tokens are rejected."""
        with pytest.raises(ValueError, match="Not an expression node"):
            evaluate(Token(0, 1, "text", "x"))

    @given(
        numbers=st.lists(st.integers(min_value=0, max_value=999), min_size=1, max_size=8),
        ops=st.lists(st.sampled_from("+-"), min_size=7, max_size=7),
    )
    def test_additive_chain_matches_left_fold(self, numbers: list[int], ops: list[str]) -> None:
        """PROPERTY: + and - chains evaluate left to right."""
        source = str(numbers[0])
        expected = numbers[0]
        for op, number in zip(ops, numbers[1:], strict=False):
            source += f" {op} {number}"
            expected = expected + number if op == "+" else expected - number

        assert evaluate(_tree(source)) == expected


"""Tests for combinators.rules: Produce relabeling and Lazy forward references."""

from __future__ import annotations

import logging

import pytest

from pcengine.syntax.combinators import Alt, Lazy, Produce, Regex, Seq, Text
from pcengine.syntax.result import ParseOutcome
from pcengine.syntax.token import Token

# ============================================================================
# PRODUCE
# ============================================================================


class TestProduce:
    """Test Produce()."""

    def test_relabels_with_built_value(self) -> None:
        """build() computes the new value from the matched token."""
        number = Produce(Regex(r"\d+"), "number", lambda t: int(t.value[0]))
        token = number("42", 0).unwrap()

        assert token.type == "number"
        assert token.value == 42
        assert (token.index, token.size) == (0, 2)

    def test_without_build_keeps_value(self) -> None:
        """Only the type changes when build is omitted."""
        token = Produce(Text("x"), "name")("x", 0).unwrap()

        assert token.type == "name"
        assert token.value == "x"

    def test_failure_propagates(self) -> None:
        """build() is never called on failure."""
        calls: list[Token[object]] = []
        parser = Produce(Text("x"), "name", calls.append)

        assert parser("y", 0) == Text("x")("y", 0)
        assert calls == []


# ============================================================================
# LAZY
# ============================================================================


class TestLazy:
    """Test Lazy()."""

    def test_recursive_rule(self) -> None:
        """A rule may refer to itself through Lazy."""
        nested = Lazy(lambda: Alt(Seq([Text("("), nested, Text(")")]), Text("x")))

        assert nested("((x))", 0).unwrap().end == 5

    def test_forward_reference(self) -> None:
        """A rule may refer to a rule defined later."""
        later = Lazy(lambda: digit)
        digit = Regex(r"\d")

        assert later("7", 0).unwrap().value[0] == "7"

    def test_factory_runs_once(self) -> None:
        """The built parser is reused across calls."""
        calls: list[int] = []

        def factory() -> Text:
            calls.append(1)
            return Text("a")

        parser = Lazy(factory)
        parser("a", 0)
        parser("b", 0)

        assert len(calls) == 1

    def test_results_are_not_cached(self) -> None:
        """Each call parses afresh."""
        seen: list[int] = []

        def counting(source: str, index: int) -> ParseOutcome:
            seen.append(index)
            return Text("a")(source, index)

        parser = Lazy(lambda: counting)
        parser("a", 0)
        parser("a", 0)

        assert seen == [0, 0]

    def test_resolution_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Resolving the factory is logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="pcengine.syntax.combinators.rules"):
            Lazy(lambda: Text("a"))("a", 0)

        assert any("Resolved lazy parser" in r.getMessage() for r in caplog.records)

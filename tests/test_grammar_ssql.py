"""Tests for grammars.ssql: SELECT/FROM/JOIN/WHERE query parsing."""

from __future__ import annotations

from typing import Any

import pytest

from pcengine.diagnostics import DiagnosticCode
from pcengine.grammars.ssql import parse_query
from pcengine.syntax.token import Token

MOVIE_QUERY = """
SELECT movie.name
FROM movie JOIN director ON movie.director_id = director.id
WHERE director.name = 'Jame''s Cameron'
"""


def _query(source: str) -> Token[Any]:
    return parse_query(source).unwrap()


def _column(token: Token[Any]) -> tuple[str, str]:
    assert token.type == "column-id"
    return token.value["table"], token.value["column"]


# ============================================================================
# FULL QUERIES
# ============================================================================


class TestSsqlQuery:
    """Test complete statements."""

    def test_movie_query(self) -> None:
        """SELECT with one JOIN and a WHERE clause."""
        query = _query(MOVIE_QUERY)

        assert query.type == "query"
        assert [_column(c) for c in query.value["select"]] == [("movie", "name")]

        from_ = query.value["from"]
        assert from_["table"] == "movie"
        (join,) = from_["joins"]
        assert join.type == "join"
        assert join.value["table"] == "director"
        test = join.value["test"]
        assert test.type == "value-test"
        assert _column(test.value["lhs"]) == ("movie", "director_id")
        assert test.value["op"].value == "="
        assert _column(test.value["rhs"]) == ("director", "id")

        where = query.value["where"]
        assert where.type == "where"
        rhs = where.value.value["rhs"]
        assert rhs.type == "string"
        assert rhs.value == "Jame's Cameron"

    def test_query_spans_statement(self) -> None:
        """The query token starts at 0 and ends with the last clause."""
        query = _query(MOVIE_QUERY)

        assert (query.index, query.end) == (0, len(MOVIE_QUERY.rstrip()))

    @pytest.mark.parametrize(
        "source",
        [
            "SELECT a.b FROM t",
            "SELECT a.b FROM t JOIN u ON t.id = u.id",
            "SELECT a.b FROM t WHERE a.b = 'x'",
            "SELECT a.b FROM t JOIN u ON t.id = u.id WHERE u.n > 2",
        ],
    )
    def test_clause_ending_at_end_of_input(self, source: str) -> None:
        """Whichever clause comes last may end exactly at the end of input."""
        assert _query(source).end == len(source)

    def test_trailing_whitespace(self) -> None:
        """Whitespace after the statement is accepted and not spanned."""
        query = _query("SELECT a.b FROM t  \n")

        assert query.end == len("SELECT a.b FROM t")
        assert query.value["where"] is None

    def test_minimal_query(self) -> None:
        """JOIN and WHERE are optional."""
        query = _query("SELECT a.x FROM a")

        assert query.value["from"] == {"table": "a", "joins": ()}
        assert query.value["where"] is None

    def test_where_without_join(self) -> None:
        """WHERE may follow FROM directly."""
        query = _query("SELECT a.x FROM a WHERE a.x >= 10")

        assert query.value["from"]["joins"] == ()
        test = query.value["where"].value
        assert test.value["op"].value == ">="
        assert test.value["rhs"].type == "number"
        assert test.value["rhs"].value == 10.0

    def test_multiple_columns(self) -> None:
        """Columns are comma separated."""
        query = _query("SELECT a.x , b.y,c.z FROM a")

        assert [_column(c) for c in query.value["select"]] == [
            ("a", "x"),
            ("b", "y"),
            ("c", "z"),
        ]

    def test_multiple_joins(self) -> None:
        """JOIN clauses repeat until WHERE."""
        query = _query(
            "SELECT a.x FROM a JOIN b ON a.id = b.a_id JOIN c ON b.id = c.b_id WHERE c.v <> 0"
        )

        joins = query.value["from"]["joins"]
        assert [j.value["table"] for j in joins] == ["b", "c"]
        assert query.value["where"].value.value["op"].value == "<>"

    def test_keywords_case_insensitive(self) -> None:
        """Keywords may be written in any case."""
        query = _query("select a.x from a join b on a.id = b.id where a.x < 'q'")

        assert query.value["from"]["joins"][0].value["table"] == "b"
        assert query.value["where"].value.value["rhs"].value == "q"

    def test_constant_on_left(self) -> None:
        """Either side of a comparison may be a constant."""
        query = _query("SELECT a.x FROM a WHERE 1 < a.x")

        test = query.value["where"].value
        assert test.value["lhs"].type == "number"
        assert test.value["rhs"].type == "column-id"


# ============================================================================
# ERRORS
# ============================================================================


class TestSsqlErrors:
    """Test rejected statements."""

    def test_unqualified_column(self) -> None:
        """Columns must be table-qualified."""
        assert parse_query("SELECT x FROM a").is_err

    def test_missing_from(self) -> None:
        """FROM is required."""
        error = parse_query("SELECT a.x").unwrap_err()

        assert error.code == DiagnosticCode.UNEXPECTED_END

    def test_trailing_input(self) -> None:
        """Anything after the statement is rejected."""
        error = parse_query("SELECT a.x FROM a ORDER BY a.x").unwrap_err()

        assert error.code == DiagnosticCode.INCOMPLETE_PARSE

    def test_bad_comparison(self) -> None:
        """A WHERE clause needs a valid operator."""
        assert parse_query("SELECT a.x FROM a WHERE a.x ~ 1").is_err

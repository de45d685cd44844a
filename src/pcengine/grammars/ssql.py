"""Simplified SQL (SSQL) query grammar.

Recognizes a single SELECT statement with optional JOIN and WHERE
clauses:

    SELECT movie.name, director.name
    FROM movie JOIN director ON movie.director_id = director.id
    WHERE director.name = 'James Cameron'

Keywords are case-insensitive. Columns are always qualified
(``table.column``). Strings use single quotes; a doubled quote inside
a string stands for one quote (``'Jame''s'`` is ``Jame's``).

Node types:
    query       value: {"select": (column-id, ...), "from": {...}, "where": where | None}
    select      value: (column-id, ...)
    from        value: {"table": str, "joins": (join, ...)}
    join        value: {"table": str, "test": value-test}
    where       value: value-test
    value-test  value: {"lhs": Token, "op": compare, "rhs": Token}
    column-id   value: {"table": str, "column": str}
    number      value: float
    string      value: str
    compare     value: str
"""

from __future__ import annotations

import re
from typing import Any

from pcengine.syntax import (
    Alt,
    Ignore,
    List,
    ParseOutcome,
    Parser,
    ParserRunner,
    Produce,
    Regex,
    Seq,
    Text,
    Token,
)

__all__ = ["QUERY", "parse_query"]

_IDENTIFIER_PATTERN = re.compile(r"[a-z][a-z0-9_]*", re.IGNORECASE)


def _keyword(pattern: str) -> Parser:
    return Ignore(Regex(re.compile(pattern, re.IGNORECASE)))


def _identifier(type: str) -> Parser:  # noqa: A002
    return Produce(Regex(_IDENTIFIER_PATTERN), type, lambda t: t.value[0])


def _unquote(token: Token[Any]) -> str:
    return token.value[1].replace("''", "'")


def _from_value(token: Token[Any]) -> dict[str, Any]:
    table, *rest = token.value
    joins = rest[0].value if rest else ()
    return {"table": table.value, "joins": joins}


def _query_value(token: Token[Any]) -> dict[str, Any]:
    select, clauses = token.value
    from_, *rest = clauses.value
    return {
        "select": select.value,
        "from": from_.value,
        "where": rest[0] if rest else None,
    }


_WS = Regex(r"\s+")

_NUMBER = Produce(Regex(r"\d+(?:\.\d+)?"), "number", lambda t: float(t.value[0]))
_STRING = Produce(Regex(r"'((?:[^']|'')*)'"), "string", _unquote)
_COMPARE = Produce(Regex(r"\s*(<>|<=|>=|=|<|>)\s*"), "compare", lambda t: t.value[1])
_CONSTANT = Alt(_NUMBER, _STRING)

_COLUMN_ID = Produce(
    Seq([_identifier("table-name"), Ignore(Text(".")), _identifier("column-name")]),
    "column-id",
    lambda t: {"table": t.value[0].value, "column": t.value[1].value},
)
_VALUE = Alt(_COLUMN_ID, _CONSTANT)

_VALUE_TEST = Produce(
    Seq([_VALUE, _COMPARE, _VALUE]),
    "value-test",
    lambda t: {"lhs": t.value[0], "op": t.value[1], "rhs": t.value[2]},
)

_WHERE = Produce(
    Seq([_keyword(r"\s*WHERE\s+"), _VALUE_TEST]),
    "where",
    lambda t: t.value[0],
)

_JOIN = Produce(
    Seq([
        _keyword(r"\s*JOIN\s+"),
        _identifier("table-name"),
        _keyword(r"\s+ON\s+"),
        _VALUE_TEST,
    ]),
    "join",
    lambda t: {"table": t.value[0].value, "test": t.value[1]},
)

_FROM_HEAD = [_keyword(r"\s*FROM\s+"), _identifier("table-name")]
_JOINS = List(_JOIN, _WS, Regex(re.compile(r"\s*WHERE", re.IGNORECASE)))

# Optional parts never end a Seq: each is an Alt with and without it
_FROM = Produce(
    Alt(Seq([*_FROM_HEAD, _JOINS]), Seq(_FROM_HEAD)),
    "from",
    _from_value,
)

_SELECT = Produce(
    Seq([_keyword(r"\s*SELECT\s+"), List(_COLUMN_ID, Regex(r"\s*,\s*"))]),
    "select",
    lambda t: t.value[0].value,
)

QUERY = Produce(
    Seq([_SELECT, Ignore(_WS), Alt(Seq([_FROM, _WHERE]), Seq([_FROM]))]),
    "query",
    _query_value,
)
"""Entry parser for one SELECT statement, without trailing whitespace."""

_runner = ParserRunner(require_end=True)


def parse_query(source: str) -> ParseOutcome:
    """Parse one complete SSQL statement.

    Leading whitespace belongs to the statement; trailing whitespace is
    dropped before parsing.

    Example:
        >>> tree = parse_query("SELECT a.x FROM a WHERE a.x > 1").unwrap()
        >>> tree.value["where"].value.value["op"].value
        '>'
    """
    return _runner.run(QUERY, source.rstrip())

"""Combinator engine: tokens, results, errors, and the combinators.

Provides the Parser contract and everything needed to build grammars
by composing small parsers into larger ones.

Python 3.13+.
"""

from typing import Any

from .combinators import (
    Alt,
    Ignore,
    Lazy,
    List,
    Opt,
    ParseOutcome,
    Parser,
    Produce,
    Regex,
    Seq,
    Text,
)
from .errors import ParseError
from .result import Err, Ok, Result
from .runner import ParserRunner
from .token import Token

__all__ = [
    "Alt",
    "Err",
    "Ignore",
    "Lazy",
    "List",
    "Ok",
    "Opt",
    "ParseError",
    "ParseOutcome",
    "Parser",
    "ParserRunner",
    "Produce",
    "Regex",
    "Result",
    "Seq",
    "Text",
    "Token",
    "parse",
    "run",
]


def run(parser: Parser, source: str) -> ParseOutcome:
    """Run a grammar entry parser over source from offset 0.

    Convenience function for ParserRunner().run().

    Example:
        >>> from pcengine.syntax import Regex, run
        >>> run(Regex(r"\\d+"), "42").unwrap().size
        2
    """
    return ParserRunner().run(parser, source)


def parse(parser: Parser, source: str) -> Token[Any]:
    """Run a grammar entry parser and unwrap its token.

    Convenience function for ParserRunner().parse().

    Raises:
        ParseFailedError: If the parser failed
    """
    return ParserRunner().parse(parser, source)

"""Helpers for writing grammar rules on top of the core combinators.

Produce names the "match, then relabel" step every semantic rule needs.
Lazy lets a rule refer to itself, or to a rule defined further down,
without rebuilding the parser tree on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pcengine.syntax.result import ParseOutcome, Parser
from pcengine.syntax.token import Token

__all__ = ["Lazy", "Produce"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Produce:
    """Relabel a successful token as a semantic node.

    Attributes:
        parser: Parser whose token is relabeled
        type: New type label
        build: Computes the new value from the token (default: keep value)

    Example:
        >>> number = Produce(Regex(r"\\d+"), "number", lambda t: int(t.value[0]))
        >>> number("42", 0).unwrap().value
        42
    """

    parser: Parser
    type: str
    build: Callable[[Token[Any]], Any] | None = None

    def __call__(self, source: str, index: int) -> ParseOutcome:
        return self.parser(source, index).map(self._relabel)

    def _relabel(self, token: Token[Any]) -> Token[Any]:
        value = self.build(token) if self.build is not None else token.value
        return token.produce(self.type, value)


@dataclass(frozen=True, slots=True)
class Lazy:
    """Defer building a parser until it is first called.

    The factory runs once; the parser it returns is kept and reused.
    Parse results are never cached.

    Attributes:
        factory: Zero-argument callable returning the real parser

    Example:
        >>> nested = Lazy(lambda: Alt(Seq([Text("("), nested, Text(")")]), Text("x")))
        >>> nested("((x))", 0).unwrap().end
        5
    """

    factory: Callable[[], Parser]
    _parser: Parser | None = field(default=None, init=False, repr=False, compare=False)

    def __call__(self, source: str, index: int) -> ParseOutcome:
        parser = self._parser
        if parser is None:
            parser = self.factory()
            object.__setattr__(self, "_parser", parser)
            logger.debug("Resolved lazy parser %r", parser)
        return parser(source, index)

"""Top-level driver for grammar entry parsers.

A grammar's entry point is an ordinary parser; ParserRunner calls it at
offset 0 and adds what only the outermost caller needs:

    - an input size limit
    - an optional "whole input must be consumed" check
    - conversion of runaway recursion into DepthLimitExceededError
    - logging of the outcome

Nothing here participates in the combinator protocol itself.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from pcengine.constants import MAX_SOURCE_SIZE
from pcengine.diagnostics import DepthLimitExceededError, ErrorTemplate

from .errors import ParseError
from .result import Err, ParseOutcome, Parser
from .token import Token

__all__ = ["ParserRunner"]

logger = logging.getLogger(__name__)


class ParserRunner:
    """Run an entry parser over a complete source text.

    Security:
    - Configurable max_source_size bounds the work a single call can do
    - Default limit: 10 MiB (see pcengine.constants.MAX_SOURCE_SIZE)

    Attributes:
        max_source_size: Maximum source length in characters (0 disables)
        require_end: Fail unless the entry parser consumes the whole source

    Example:
        >>> runner = ParserRunner(require_end=True)
        >>> runner.run(Regex(r"\\d+"), "12a").unwrap_err().message
        'Unexpected trailing input "a"'
    """

    __slots__ = ("_max_source_size", "_require_end")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        require_end: bool = False,
    ) -> None:
        """Initialize runner.

        Args:
            max_source_size: Maximum source length (default: 10 MiB).
                            Set to 0 to disable the size limit.
            require_end: Report INCOMPLETE_PARSE when input is left over.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._require_end = require_end

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source length in characters."""
        return self._max_source_size

    @property
    def require_end(self) -> bool:
        """Whether left-over input is a failure."""
        return self._require_end

    def run(self, parser: Parser, source: str) -> ParseOutcome:
        """Call parser(source, 0) and return its Result.

        Args:
            parser: Grammar entry parser
            source: Complete input text

        Returns:
            Ok with the entry token, or Err with the (possibly merged) ParseError

        Raises:
            ValueError: If source exceeds max_source_size
            DepthLimitExceededError: If the grammar recursed past the interpreter limit
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(source), self._max_source_size)
            raise ValueError(diagnostic.message)

        logger.debug("Parsing %d characters with %r", len(source), parser)

        try:
            result = parser(source, 0)
        except RecursionError as e:
            limit = sys.getrecursionlimit()
            logger.warning("Grammar recursion exceeded %d frames", limit)
            raise DepthLimitExceededError(limit) from e

        match result:
            case Err(error):
                logger.warning("Parse failed [%s] at %d", error.code.name, error.index)
            case _:
                token = result.value
                logger.debug("Parsed %s token spanning [%d, %d)", token.type, token.index, token.end)
                if self._require_end and token.end < len(source):
                    diagnostic = ErrorTemplate.incomplete_parse(source[token.end :])
                    logger.warning("Parse stopped at %d of %d characters", token.end, len(source))
                    return Err(ParseError.from_diagnostic(diagnostic, token.end))

        return result

    def parse(self, parser: Parser, source: str) -> Token[Any]:
        """Run parser and unwrap the result.

        Raises:
            ParseFailedError: If parsing failed (str() gives "<message> at <index>")
            ValueError: If source exceeds max_source_size
            DepthLimitExceededError: If the grammar recursed past the interpreter limit
        """
        return self.run(parser, source).unwrap()

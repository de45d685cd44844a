"""Leaf matchers that inspect the source string directly.

Text and Regex are the only places where character-level recognition
happens; every other combinator composes their results.

Both are immutable callables: calling one with (source, index) is the
parse, and nothing is remembered between calls.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pcengine.diagnostics import ErrorTemplate
from pcengine.enums import TokenType
from pcengine.syntax.errors import ParseError
from pcengine.syntax.result import Err, Ok, ParseOutcome
from pcengine.syntax.token import Token

__all__ = ["Regex", "Text"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Text:
    """Match a literal string at the offset.

    Succeeds with a "text" token whose value is the matched source slice
    (in case-insensitive mode, the source spelling, not the literal's).

    Attributes:
        literal: Exact text to match
        case_insensitive: Compare lowercased forms of both sides

    Example:
        >>> Text("select", case_insensitive=True)("SELECT *", 0).unwrap().value
        'SELECT'
    """

    literal: str
    case_insensitive: bool = False
    _folded: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        folded = self.literal.lower() if self.case_insensitive else self.literal
        object.__setattr__(self, "_folded", folded)

    def __call__(self, source: str, index: int) -> ParseOutcome:
        sample = source[index : index + len(self.literal)]
        candidate = sample.lower() if self.case_insensitive else sample
        if candidate != self._folded:
            return Err(
                ParseError.from_diagnostic(
                    ErrorTemplate.text_mismatch(self.literal, sample), index
                )
            )
        return Ok(Token(index, len(sample), TokenType.TEXT, sample))


@dataclass(frozen=True, slots=True)
class Regex:
    """Match a regular expression anchored at the offset.

    The pattern never scans ahead: Pattern.match(source, index) only
    accepts a match starting exactly at index. The token value is the
    re.Match, so group(0)/[0] is the full match and [1] the first
    capture group.

    Attributes:
        pattern: Pattern source or a compiled pattern (its flags are kept)

    Example:
        >>> token = Regex(r"\\s*([-+])\\s*")("1 + 2", 1).unwrap()
        >>> (token.index, token.size, token.value[1])
        (1, 3, '+')
    """

    pattern: str | re.Pattern[str]
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.pattern, re.Pattern):
            compiled = self.pattern
        else:
            compiled = re.compile(self.pattern)
            logger.debug("Compiled pattern /%s/", self.pattern)
        object.__setattr__(self, "_compiled", compiled)

    def __call__(self, source: str, index: int) -> ParseOutcome:
        found = self._compiled.match(source, index)
        if found is None:
            return Err(
                ParseError.from_diagnostic(
                    ErrorTemplate.regex_mismatch(self._compiled.pattern), index
                )
            )
        return Ok(Token(index, found.end() - index, TokenType.REGEX, found))

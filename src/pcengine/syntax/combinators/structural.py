"""Structural combinators: build larger parsers out of smaller ones.

Backtracking and error policy live here:
    - Ignore: consume but drop the payload
    - Opt: turn failure into a zero-length ignore token
    - Alt: ordered choice, first success wins, failures merged
    - Seq: run parsers back to back, collecting non-ignored tokens
    - List: repeat an item, optionally separated by a delimiter

No combinator keeps a cursor between calls. On failure nothing needs to
be undone: alternatives simply start again from the original index.
Sibling parsers always run strictly left to right; that order decides
both match priority and which error is reported.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pcengine.diagnostics import ErrorTemplate
from pcengine.enums import TokenType
from pcengine.syntax.errors import ParseError
from pcengine.syntax.result import Err, Ok, ParseOutcome, Parser
from pcengine.syntax.token import Token

__all__ = ["Alt", "Ignore", "List", "Opt", "Seq"]


@dataclass(frozen=True, slots=True)
class Ignore:
    """Run a parser and relabel its token as an ignore token.

    Position and size are preserved, the payload is discarded. Failures
    propagate unchanged. Use it for whitespace and punctuation inside Seq.
    """

    parser: Parser

    def __call__(self, source: str, index: int) -> ParseOutcome:
        return self.parser(source, index).map(Token.ignore)


@dataclass(frozen=True, slots=True)
class Opt:
    """Make a parser optional.

    Returns the inner result if it matches, or a zero-length ignore
    token at the original index if it does not. Never fails and never
    advances on failure; check ``is_ignore and size == 0`` to detect
    that nothing matched.
    """

    parser: Parser

    def __call__(self, source: str, index: int) -> ParseOutcome:
        result = self.parser(source, index)
        if result.is_ok:
            return result
        return Ok(Token.ignored(index))


@dataclass(frozen=True, slots=True, init=False)
class Alt:
    """Ordered choice: try each parser at the same index, first success wins.

    Order alternatives most specific first: Alt(Assign, Identifier) can
    see an assignment, Alt(Identifier, Assign) never will. When every
    alternative fails, their errors are merged into one at the original
    index.

    Example:
        >>> result = Alt(Text("foo"), Text("bar"))("baz", 0)
        >>> print(result.unwrap_err().message)
        Multiple errors occurred:
        Expected "foo" but found "baz" at 0
        Expected "bar" but found "baz" at 0
    """

    parsers: tuple[Parser, ...]

    def __init__(self, *parsers: Parser) -> None:
        if not parsers:
            msg = "Alt requires at least one parser"
            raise ValueError(msg)
        object.__setattr__(self, "parsers", parsers)

    def __call__(self, source: str, index: int) -> ParseOutcome:
        errors: list[ParseError] = []
        for parse in self.parsers:
            match parse(source, index):
                case Ok() as success:
                    return success
                case Err(error):
                    errors.append(error)
        return Err(ParseError.merge(errors, index))


@dataclass(frozen=True, slots=True)
class Seq:
    """Run parsers one after another, each starting where the last ended.

    Ignore tokens advance the position but are left out of the result.
    The result is one "sequence" token spanning everything consumed,
    whose value is the tuple of retained tokens.

    Before each step, a position at end of input fails the sequence with
    "Unexpected end of input", even if the step could match nothing (an
    Opt, say). Keep optional parts out of the tail; use Alt instead.

    When a step fails:
        1. if check_end matches at the current position, the sequence
           stops early and succeeds with what it has so far;
        2. else the step's own error is returned unchanged.

    A sequence that retains no token at all fails ("Cannot match sequence").

    Attributes:
        parsers: Steps, in order
        check_end: Optional lookahead recognizing a terminator
    """

    parsers: Sequence[Parser]
    check_end: Parser | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.parsers, tuple):
            object.__setattr__(self, "parsers", tuple(self.parsers))

    def __call__(self, source: str, index: int) -> ParseOutcome:
        items: list[Token[object]] = []
        last_index = index

        for parse in self.parsers:
            if last_index >= len(source):
                return Err(ParseError.from_diagnostic(ErrorTemplate.unexpected_end(), last_index))

            result = parse(source, last_index)
            if isinstance(result, Err):
                if self.check_end is not None and self.check_end(source, last_index).is_ok:
                    break
                return result

            token = result.value
            last_index = token.end
            if not token.is_ignore:
                items.append(token)

        if not items:
            return Err(ParseError.from_diagnostic(ErrorTemplate.empty_sequence(), last_index))

        return Ok(Token(index, last_index - index, TokenType.SEQUENCE, tuple(items)))


@dataclass(frozen=True, slots=True)
class List:
    """Match one or more items, optionally separated by a delimiter.

    Each round matches an item, then checks the check_end lookahead
    (stop if it matches), then tries the delimiter (stop if it does not
    match). The loop also stops at end of input, or when a round
    consumed nothing. Ignored items advance the position but are left
    out of the result.

    The first item failing, or any item failing after a delimiter, fails
    the whole list with that item's error.

    Attributes:
        item: Parser for one element
        delimiter: Optional separator parser (its tokens are never kept)
        check_end: Optional lookahead recognizing a terminator

    Example:
        >>> letters = List(Regex(r"[a-z]+"), Regex(r","))
        >>> token = letters("a,b,c", 0).unwrap()
        >>> [t.value[0] for t in token.value], token.end
        (['a', 'b', 'c'], 5)
    """

    item: Parser
    delimiter: Parser | None = None
    check_end: Parser | None = None

    def __call__(self, source: str, index: int) -> ParseOutcome:
        items: list[Token[object]] = []
        last_index = index

        while last_index < len(source):
            round_start = last_index

            result = self.item(source, last_index)
            if isinstance(result, Err):
                return result
            token = result.value
            if not token.is_ignore:
                items.append(token)
            last_index = token.end

            if self.check_end is not None and self.check_end(source, last_index).is_ok:
                break

            if self.delimiter is not None:
                delimited = self.delimiter(source, last_index)
                if isinstance(delimited, Err):
                    break
                last_index = delimited.value.end

            # Zero-width item and delimiter would repeat forever
            if last_index == round_start:
                break

        if not items:
            return Err(ParseError.from_diagnostic(ErrorTemplate.empty_list(), last_index))

        return Ok(Token(index, last_index - index, TokenType.LIST, tuple(items)))


"""Two-variant success/failure container returned by every parser.

Pattern:
    Every parser has signature:
        def parse_foo(source: str, index: int) -> Result[Token[Foo], ParseError]:
            ...
            return Ok(Token(index, size, "foo", value))

Failures travel by value. Only unwrap() / unwrap_err() turn the missing
variant into a raised exception, and only callers that are certain of the
variant (top-level entry points) should call them.

Both variants are frozen dataclasses, so they work with structural
pattern matching:

    match parser(source, 0):
        case Ok(token):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, NoReturn

from pcengine.diagnostics import ErrorTemplate, ParseFailedError, UnwrapError

from .errors import ParseError
from .token import Token

__all__ = ["Err", "Ok", "ParseOutcome", "Parser", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding a value."""

    value: T

    @property
    def is_ok(self) -> Literal[True]:
        return True

    @property
    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        """Return the success value."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise UnwrapError: an Ok holds no error."""
        raise UnwrapError(ErrorTemplate.unwrap_err_on_ok(self.value), payload=self.value)

    def map[R](self, fn: Callable[[T], R]) -> Ok[R]:
        """Transform the success value."""
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[object], object]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged."""
        return self

    def map_or_else[R](self, on_err: Callable[[object], R], on_ok: Callable[[T], R]) -> R:  # noqa: ARG002
        """Fold to a plain value by applying on_ok to the success value."""
        return on_ok(self.value)


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding an error."""

    error: E

    @property
    def is_ok(self) -> Literal[False]:
        return False

    @property
    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the held failure.

        Raises:
            ParseFailedError: If the error is a ParseError
            UnwrapError: For any other error payload
        """
        if isinstance(self.error, ParseError):
            raise ParseFailedError(self.error)
        raise UnwrapError(ErrorTemplate.unwrap_on_err(self.error), payload=self.error)

    def unwrap_err(self) -> E:
        """Return the error value."""
        return self.error

    def map(self, fn: Callable[[object], object]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged."""
        return self

    def map_err[F](self, fn: Callable[[E], F]) -> Err[F]:
        """Transform the error value, keeping the Err variant."""
        return Err(fn(self.error))

    def map_or_else[R](self, on_err: Callable[[E], R], on_ok: Callable[[object], R]) -> R:  # noqa: ARG002
        """Fold to a plain value by applying on_err to the error."""
        return on_err(self.error)


type Result[T, E] = Ok[T] | Err[E]

# What every parser returns.
type ParseOutcome = Result[Token[Any], ParseError]

# The composition unit: a pure function of (source, index).
type Parser = Callable[[str, int], ParseOutcome]

"""pcengine exception hierarchy with structured diagnostics.

Combinators never raise: failures travel as Err values. These exceptions
cover contract violations (unwrapping the wrong Result variant) and
driver-level faults.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic
from .templates import ErrorTemplate

if TYPE_CHECKING:
    from pcengine.syntax.errors import ParseError

__all__ = [
    "DepthLimitExceededError",
    "EngineError",
    "ParseFailedError",
    "UnwrapError",
]


class EngineError(Exception):
    """Base exception for all pcengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize EngineError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class UnwrapError(EngineError):
    """The wrong Result variant was unwrapped.

    Raised by Ok.unwrap_err(), and by Err.unwrap() when the error payload
    is not a ParseError.

    Attributes:
        payload: The value held by the Result that was unwrapped
    """

    def __init__(self, message: str | Diagnostic, payload: object = None) -> None:
        super().__init__(message)
        self.payload = payload


class ParseFailedError(UnwrapError):
    """Err.unwrap() was called on a failed parse.

    The string form is the ParseError rendering ("<message> at <index>"),
    which is how a top-level caller surfaces the failure.

    Attributes:
        error: The (possibly merged) ParseError
        index: Source offset of the failure
    """

    def __init__(self, error: ParseError) -> None:
        super().__init__(str(error), payload=error)
        self.diagnostic = error.to_diagnostic()
        self.error = error
        self.index = error.index


class DepthLimitExceededError(EngineError):
    """Grammar recursion exhausted the interpreter stack.

    Usually a left-recursive rule, which recursive descent cannot
    evaluate; occasionally pathologically nested input.
    """

    def __init__(self, limit: int) -> None:
        super().__init__(ErrorTemplate.depth_exceeded(limit))
        self.limit = limit

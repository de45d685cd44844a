"""Diagnostic codes and the Diagnostic record.

A Diagnostic is the presentation form of any failure: a ParseError
converts to one, and every EngineError carries one.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Stable numeric identifiers for every failure the engine reports.

    Ranges:
        1000-1999: Match errors (a primitive did not recognize the input)
        2000-2999: Structural errors (a combinator could not satisfy its shape)
        3000-3999: Contract and driver errors (raised, never returned)
        4000-4999: Example grammar evaluation errors
    """

    # Match errors (1000-1999)
    # 1000: PARSE_FAILED - default for ParseErrors built by hand-written parsers
    PARSE_FAILED = 1000
    TEXT_MISMATCH = 1001
    REGEX_MISMATCH = 1002

    # Structural errors (2000-2999)
    UNEXPECTED_END = 2001
    EMPTY_SEQUENCE = 2002
    EMPTY_LIST = 2003
    ALTERNATIVES_EXHAUSTED = 2004
    INCOMPLETE_PARSE = 2005

    # Contract and driver errors (3000-3999)
    UNWRAP_ERR_ON_OK = 3001
    UNWRAP_ON_ERR = 3002
    DEPTH_EXCEEDED = 3003
    SOURCE_TOO_LARGE = 3004

    # Example grammar evaluation errors (4000-4999)
    UNDEFINED_VARIABLE = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Where in the parsed text a diagnostic points.

    Offsets count characters (code points), matching ParseError.index.
    Parse failures are points, so start == end is the common case.

    Attributes:
        start: First offset covered (0-based)
        end: Offset just past the span
        line: 1-based line of start
        column: 1-based column of start
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Reject spans that could not come from a real source.

        Raises:
            ValueError: Negative start, end before start, or a line or
                column below 1
        """
        for name, value, minimum in (
            ("start", self.start, 0),
            ("line", self.line, 1),
            ("column", self.column, 1),
        ):
            if value < minimum:
                msg = f"SourceSpan.{name} must be >= {minimum}, got {value}"
                raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) is before start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A failure ready to be shown to a person or a tool.

    Attributes:
        code: What went wrong
        message: One-line description (multi-line for merged errors)
        span: Location, when the source text was available
        hint: How to fix it, if there is a generic answer
        expected: What the failing parser(s) would have accepted
        severity: "error" or "warning"
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    def format_error(self, source: str | None = None) -> str:
        """Render in the default rustc-like style.

        Example output:
            error[TEXT_MISMATCH]: Expected "foo" but found "baz"
              --> line 1, column 1
              = expected: 'foo'
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self, source)

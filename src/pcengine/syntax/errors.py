"""ParseError: the failure payload carried by every Err a parser returns.

ParseError is a value, not an exception. Combinators return it inside
Err and never raise it; Err.unwrap() wraps it in ParseFailedError when a
caller insists on the success value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pcengine.constants import DEFAULT_CONTEXT_LINES
from pcengine.diagnostics import Diagnostic, DiagnosticCode, ErrorTemplate, SourceSpan

from .position import line_col

__all__ = ["ParseError"]


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse failure with location and context.

    Design:
        - Stores the source offset only (line:column computed on demand)
        - User-friendly message
        - Expected tokens tuple (immutable for better errors)
        - Sub-errors kept in causes when several failures are merged

    Attributes:
        message: Human-readable description
        index: Source offset where the failure was detected
        code: Diagnostic code classifying the failure
        expected: What the failing parser(s) expected to find
        causes: The individual errors an aggregate was merged from

    Example:
        >>> error = ParseError("Expected identifier", 4)
        >>> str(error)
        'Expected identifier at 4'
    """

    message: str
    index: int
    code: DiagnosticCode = DiagnosticCode.PARSE_FAILED
    expected: tuple[str, ...] = ()
    causes: tuple[ParseError, ...] = ()

    def __str__(self) -> str:
        return f"{self.message} at {self.index}"

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic, index: int) -> ParseError:
        """Attach a source offset to a position-free template Diagnostic."""
        return cls(
            message=diagnostic.message,
            index=index,
            code=diagnostic.code,
            expected=diagnostic.expected,
        )

    @classmethod
    def merge(cls, errors: Iterable[ParseError], index: int) -> ParseError:
        """Build one aggregate error out of several failures.

        The message lists every input error's rendering in order, under a
        common header. Expectations are combined in order of first
        appearance.

        Args:
            errors: Failures to aggregate (typically one per Alt branch)
            index: Offset the aggregate is reported at

        Returns:
            ParseError with code ALTERNATIVES_EXHAUSTED

        Example:
            >>> merged = ParseError.merge([ParseError("a", 0), ParseError("b", 0)], 0)
            >>> print(merged.message)
            Multiple errors occurred:
            a at 0
            b at 0
        """
        causes = tuple(errors)
        expected = tuple(dict.fromkeys(e for error in causes for e in error.expected))
        diagnostic = ErrorTemplate.alternatives_exhausted(
            [str(error) for error in causes], expected
        )
        return cls(
            message=diagnostic.message,
            index=index,
            code=diagnostic.code,
            expected=diagnostic.expected,
            causes=causes,
        )

    def to_diagnostic(self, source: str | None = None) -> Diagnostic:
        """Convert to a Diagnostic, with a SourceSpan when source is given."""
        span = None
        if source is not None:
            line, col = line_col(source, self.index)
            index = min(self.index, len(source))
            span = SourceSpan(start=index, end=index, line=line, column=col)
        return Diagnostic(
            code=self.code,
            message=self.message,
            span=span,
            expected=self.expected,
        )

    def format_error(self, source: str) -> str:
        """Format error with line:column.

        Args:
            source: The text that was being parsed

        Returns:
            Formatted error string with location

        Example:
            >>> error = ParseError("Expected ']'", 7, expected=("]",))
            >>> error.format_error("hello\\nworld")
            "2:2: Expected ']' (expected: ']')"
        """
        line, col = line_col(source, self.index)
        error_msg = f"{line}:{col}: {self.message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(
        self, source: str, context_lines: int = DEFAULT_CONTEXT_LINES
    ) -> str:
        """Format error with source context and pointer.

        Shows the problematic line and a caret pointing to the error location.

        Args:
            source: The text that was being parsed
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context

        Example:
            >>> source = "SELECT a.b\\nFROM t WHERE\\nx"
            >>> print(ParseError("Cannot match /ON/", 18).format_with_context(source))
            2:8: Cannot match /ON/
            <BLANKLINE>
               1 | SELECT a.b
               2 | FROM t WHERE
                 |        ^
               3 | x
        """
        line, col = line_col(source, self.index)
        lines = source.split("\n")

        result_lines = [self.format_error(source), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1].rstrip("\r"))

            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)

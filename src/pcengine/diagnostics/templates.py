"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from pcengine.constants import MERGED_ERROR_HEADER

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]

# Longest excerpt of unparsed input quoted in a message.
_EXCERPT_LEN: int = 20


def _excerpt(text: str) -> str:
    if len(text) > _EXCERPT_LEN:
        return text[:_EXCERPT_LEN] + "..."
    return text


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases

    Templates return position-free Diagnostics; combinators attach the
    offset when they wrap one into a ParseError.
    """

    # ------------------------------------------------------------------
    # Match failures
    # ------------------------------------------------------------------

    @staticmethod
    def text_mismatch(expected: str, found: str) -> Diagnostic:
        """Literal text did not match at the offset.

        Args:
            expected: The literal the Text parser wanted
            found: The source slice of the same length actually present

        Returns:
            Diagnostic for TEXT_MISMATCH
        """
        msg = f'Expected "{expected}" but found "{_excerpt(found)}"'
        return Diagnostic(
            code=DiagnosticCode.TEXT_MISMATCH,
            message=msg,
            expected=(expected,),
        )

    @staticmethod
    def regex_mismatch(pattern: str) -> Diagnostic:
        """Pattern did not match starting exactly at the offset.

        Args:
            pattern: Source of the regular expression

        Returns:
            Diagnostic for REGEX_MISMATCH
        """
        msg = f"Cannot match /{pattern}/"
        return Diagnostic(
            code=DiagnosticCode.REGEX_MISMATCH,
            message=msg,
            expected=(f"/{pattern}/",),
        )

    # ------------------------------------------------------------------
    # Structural failures
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_end() -> Diagnostic:
        """A sequence ran out of input before its next element."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_END,
            message="Unexpected end of input",
            hint="The input stopped before the sequence was complete",
        )

    @staticmethod
    def empty_sequence() -> Diagnostic:
        """A sequence matched, but every element was ignored."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_SEQUENCE,
            message="Cannot match sequence",
            hint="At least one element of a Seq must produce a non-ignored token",
        )

    @staticmethod
    def empty_list() -> Diagnostic:
        """A list finished without retaining a single item."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_LIST,
            message="Cannot match list",
            hint="A List needs at least one non-ignored item",
        )

    @staticmethod
    def alternatives_exhausted(
        renderings: Sequence[str], expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """Every alternative of an Alt failed.

        Args:
            renderings: str() of each alternative's error, in try order
            expected: Combined expectations of all alternatives

        Returns:
            Diagnostic for ALTERNATIVES_EXHAUSTED
        """
        msg = "\n".join([MERGED_ERROR_HEADER, *renderings])
        return Diagnostic(
            code=DiagnosticCode.ALTERNATIVES_EXHAUSTED,
            message=msg,
            expected=expected,
        )

    @staticmethod
    def incomplete_parse(remaining: str) -> Diagnostic:
        """The entry parser succeeded but left input unconsumed.

        Args:
            remaining: The unconsumed tail of the source

        Returns:
            Diagnostic for INCOMPLETE_PARSE
        """
        msg = f'Unexpected trailing input "{_excerpt(remaining)}"'
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_PARSE,
            message=msg,
            hint="The grammar matched a prefix of the input only",
        )

    # ------------------------------------------------------------------
    # Contract and driver errors
    # ------------------------------------------------------------------

    @staticmethod
    def unwrap_on_err(error: object) -> Diagnostic:
        """unwrap() called on an Err result.

        Args:
            error: The error payload held by the Err

        Returns:
            Diagnostic for UNWRAP_ON_ERR
        """
        msg = f"Called unwrap() on an Err value: {error}"
        return Diagnostic(
            code=DiagnosticCode.UNWRAP_ON_ERR,
            message=msg,
            hint="Check is_ok before unwrapping, or use map_or_else()",
        )

    @staticmethod
    def unwrap_err_on_ok(value: object) -> Diagnostic:
        """unwrap_err() called on an Ok result.

        Args:
            value: The success payload held by the Ok

        Returns:
            Diagnostic for UNWRAP_ERR_ON_OK
        """
        msg = f"Called unwrap_err() on an Ok value: {value!r}"
        return Diagnostic(
            code=DiagnosticCode.UNWRAP_ERR_ON_OK,
            message=msg,
            hint="Check is_err before unwrapping the error",
        )

    @staticmethod
    def depth_exceeded(limit: int) -> Diagnostic:
        """Grammar recursion overflowed the interpreter stack.

        Args:
            limit: The active sys.getrecursionlimit() value

        Returns:
            Diagnostic for DEPTH_EXCEEDED
        """
        msg = f"Grammar recursion exceeded the interpreter limit ({limit} frames)"
        return Diagnostic(
            code=DiagnosticCode.DEPTH_EXCEEDED,
            message=msg,
            hint=(
                "Left-recursive rules never terminate; rewrite them right-recursively "
                "and re-associate the resulting values"
            ),
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Source exceeds the configured runner limit.

        Args:
            size: Length of the rejected source in characters
            limit: Configured max_source_size

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = (
            f"Source size ({size:,} characters) exceeds maximum "
            f"({limit:,} characters)"
        )
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Configure max_source_size in the ParserRunner constructor to increase the limit",
        )

    # ------------------------------------------------------------------
    # Example grammar evaluation
    # ------------------------------------------------------------------

    @staticmethod
    def undefined_variable(name: str) -> Diagnostic:
        """Calculator expression read a variable that was never assigned.

        Args:
            name: The identifier that was looked up

        Returns:
            Diagnostic for UNDEFINED_VARIABLE
        """
        msg = f"Variable '{name}' is not defined"
        return Diagnostic(
            code=DiagnosticCode.UNDEFINED_VARIABLE,
            message=msg,
            hint=f"Assign '{name}' first (e.g. '{name} = 1') or pass it in env",
        )

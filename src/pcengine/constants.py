"""Shared constants for pcengine.

Centralized configuration constants used by the syntax layer and the
example grammars. Placing them here avoids circular imports and provides
a single source of truth.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Error rendering
    "MERGED_ERROR_HEADER",
    "DEFAULT_CONTEXT_LINES",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source length (in characters) accepted by ParserRunner.
# Every combinator slices and re-scans the source while backtracking, so an
# unbounded input is an easy way to burn CPU and memory. 10 MiB is far
# beyond any hand-written grammar's realistic input.
# Set ParserRunner(max_source_size=0) to disable the check.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# ERROR RENDERING
# ============================================================================

# First line of the message produced by ParseError.merge().
MERGED_ERROR_HEADER: str = "Multiple errors occurred:"

# Lines of source shown above and below the error line by
# ParseError.format_with_context().
DEFAULT_CONTEXT_LINES: int = 2

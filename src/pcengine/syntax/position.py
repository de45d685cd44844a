"""Position utilities for error reporting.

Converts character offsets into 1-indexed line/column pairs, the form
text editors display. Only used when rendering errors, never while
parsing.
"""

__all__ = ["line_col"]


def line_col(source: str, pos: int) -> tuple[int, int]:
    """Compute line and column for a character offset.

    Args:
        source: Complete source text
        pos: Character offset in source (clamped to [0, len(source)])

    Returns:
        (line, column) tuple (1-indexed, like text editors)

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_col(source, 0)
        (1, 1)
        >>> line_col(source, 6)  # Start of line2
        (2, 1)
        >>> line_col(source, 8)  # Middle of line2
        (2, 3)

    Note:
        Uses \\n as the line delimiter, so CRLF sources work too.
    """
    pos = max(0, min(pos, len(source)))

    # O(1) memory: count in range instead of creating substring
    line = source.count("\n", 0, pos) + 1
    last_newline = source.rfind("\n", 0, pos)
    col = pos - last_newline if last_newline >= 0 else pos + 1

    return (line, col)


"""Diagnostic formatting service.

Renders Diagnostics for people (rustc-style blocks, one-liners) and for
tools (JSON). When the parsed source is supplied, rustc-style output
quotes the offending line under a caret.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_ANSI_RESET = "\033[0m"
_SEVERITY_COLORS = {
    "error": "\033[1;31m",  # Bold red
    "warning": "\033[1;33m",  # Bold yellow
}


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Multi-line block with location, expectations, hint
    SIMPLE = "simple"  # CODE: message
    JSON = "json"  # One JSON object per diagnostic


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Render Diagnostics as text.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Clip messages and hints to max_content_length
        color: Wrap the severity label in ANSI color codes (rust style only)
        max_content_length: Clip length used when sanitize is on

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.unexpected_end()))
        UNEXPECTED_END: Unexpected end of input
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic, source: str | None = None) -> str:
        """Render one diagnostic.

        Args:
            diagnostic: What to render
            source: Parsed text; lets rust style quote the failing line

        Returns:
            Rendered text (no trailing newline)
        """
        match self.output_format:
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._clip(diagnostic.message)}"
            case OutputFormat.JSON:
                return json.dumps(self._as_dict(diagnostic), ensure_ascii=False)
            case _:
                return "\n".join(self._rust_lines(diagnostic, source))

    def format_all(self, diagnostics: Iterable[Diagnostic], source: str | None = None) -> str:
        """Render several diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d, source) for d in diagnostics)

    def _rust_lines(self, diagnostic: Diagnostic, source: str | None) -> list[str]:
        """Lines of a rustc-style block.

        Example output:
            error[TEXT_MISMATCH]: Expected "b" but found "x"
              --> line 1, column 2
               |
             1 | ax
               |  ^
              = expected: 'b'
        """
        label = diagnostic.severity
        if self.color:
            label = f"{_SEVERITY_COLORS[label]}{label}{_ANSI_RESET}"
        lines = [f"{label}[{diagnostic.code.name}]: {self._clip(diagnostic.message)}"]

        span = diagnostic.span
        if span is not None:
            lines.append(f"  --> line {span.line}, column {span.column}")
            if source is not None:
                source_lines = source.split("\n")
                if span.line <= len(source_lines):
                    text = source_lines[span.line - 1].rstrip("\r")
                    number = str(span.line)
                    gutter = " " * (len(number) + 1)
                    lines.append(f"{gutter} |")
                    lines.append(f" {number} | {text}")
                    lines.append(f"{gutter} | {' ' * (span.column - 1)}^")

        if diagnostic.expected:
            quoted = ", ".join(f"'{e}'" for e in diagnostic.expected)
            lines.append(f"  = expected: {self._clip(quoted)}")
        if diagnostic.hint:
            lines.append(f"  = help: {self._clip(diagnostic.hint)}")
        return lines

    def _as_dict(self, diagnostic: Diagnostic) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "severity": diagnostic.severity,
            "message": self._clip(diagnostic.message),
        }
        if diagnostic.span is not None:
            span = diagnostic.span
            data |= {
                "start": span.start,
                "end": span.end,
                "line": span.line,
                "column": span.column,
            }
        if diagnostic.expected:
            data["expected"] = list(diagnostic.expected)
        if diagnostic.hint:
            data["hint"] = self._clip(diagnostic.hint)
        return data

    def _clip(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text

"""Diagnostic system for pcengine errors.

Provides structured error diagnostics with codes, spans, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    DepthLimitExceededError,
    EngineError,
    ParseFailedError,
    UnwrapError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "EngineError",
    "ErrorTemplate",
    "OutputFormat",
    "ParseFailedError",
    "SourceSpan",
    "UnwrapError",
]

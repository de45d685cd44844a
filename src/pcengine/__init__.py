"""pcengine - a backtracking parser-combinator engine.

Parsers are pure functions of (source, index) that return either a
positioned Token or a ParseError. Combinators build larger parsers out
of smaller ones; a grammar is just the outermost parser.

Public API:
    Token - Immutable positioned, typed match value
    Ok, Err, Result - Success/failure container returned by every parser
    ParseError - Failure payload (message + offset), mergeable
    Text, Regex - Leaf matchers
    Ignore, Opt, Alt, Seq, List - Structural combinators
    Produce, Lazy - Grammar-authoring helpers
    ParserRunner, run, parse - Top-level drivers

Exceptions:
    EngineError - Base exception class
    UnwrapError - Wrong Result variant unwrapped
    ParseFailedError - unwrap() on a failed parse
    DepthLimitExceededError - Grammar recursion overflowed the stack

Submodules:
    pcengine.syntax - Engine (tokens, results, combinators, runner)
    pcengine.diagnostics - Error codes, templates, and formatting
    pcengine.grammars - Example grammars (calculator, SQL-like queries)
"""

from .diagnostics import (
    DepthLimitExceededError,
    EngineError,
    ParseFailedError,
    UnwrapError,
)
from .syntax import (
    Alt,
    Err,
    Ignore,
    Lazy,
    List,
    Ok,
    Opt,
    ParseError,
    Parser,
    ParserRunner,
    Produce,
    Regex,
    Result,
    Seq,
    Text,
    Token,
    parse,
    run,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("pcengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Alt",
    "DepthLimitExceededError",
    "EngineError",
    "Err",
    "Ignore",
    "Lazy",
    "List",
    "Ok",
    "Opt",
    "ParseError",
    "ParseFailedError",
    "Parser",
    "ParserRunner",
    "Produce",
    "Regex",
    "Result",
    "Seq",
    "Text",
    "Token",
    "UnwrapError",
    "__version__",
    "parse",
    "run",
]

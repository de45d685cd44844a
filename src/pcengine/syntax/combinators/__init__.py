"""Parser combinators.

Module Organization:
- primitives.py: Leaf matchers (Text, Regex)
- structural.py: Combinators over other parsers (Ignore, Opt, Alt, Seq, List)
- rules.py: Grammar-authoring helpers (Produce, Lazy)

Every combinator is an immutable callable satisfying the Parser contract:
``(source, index) -> Ok(Token) | Err(ParseError)``. Plain functions with the
same signature mix freely with them.
"""

from pcengine.syntax.result import ParseOutcome, Parser

from .primitives import Regex, Text
from .rules import Lazy, Produce
from .structural import Alt, Ignore, List, Opt, Seq

__all__ = [
    "Alt",
    "Ignore",
    "Lazy",
    "List",
    "Opt",
    "ParseOutcome",
    "Parser",
    "Produce",
    "Regex",
    "Seq",
    "Text",
]

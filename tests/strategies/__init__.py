"""Hypothesis strategies for pcengine property-based testing.

Strategies are organized by domain:

- combinators: source texts, literals, leaf parsers, composed parser trees

Usage:
    from tests.strategies import parsers, source_and_index
    from tests.strategies.combinators import leaf_parsers, literals
"""

from .combinators import (
    REGEX_PATTERNS,
    SOURCE_ALPHABET,
    leaf_parsers,
    literals,
    parsers,
    source_and_index,
    sources,
)

__all__ = [
    "REGEX_PATTERNS",
    "SOURCE_ALPHABET",
    "leaf_parsers",
    "literals",
    "parsers",
    "source_and_index",
    "sources",
]

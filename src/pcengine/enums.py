"""Enumerations for pcengine type-safe constants.

Uses StrEnum (Python 3.11+) for the built-in token labels so they compare
equal to plain strings chosen by grammar authors.

Python 3.13+.
"""

from enum import Enum, StrEnum


class TokenType(StrEnum):
    """Type labels assigned by the built-in combinators.

    StrEnum provides automatic string conversion: TokenType.TEXT == "text"
    """

    TEXT = "text"
    """Literal match: Text("SELECT")"""

    REGEX = "regex"
    """Pattern match, value is the re.Match: Regex(r"\\d+")"""

    SEQUENCE = "sequence"
    """Ordered sub-tokens of a Seq"""

    LIST = "list"
    """Repeated items of a List"""


class TokenMarker(Enum):
    """Reserved token type that no caller-chosen label can collide with.

    Deliberately NOT a StrEnum: a grammar that labels a token "ignore"
    must not turn it into an ignore token.
    """

    IGNORE = "ignore"
    """Matched input that is dropped from Seq and List results"""


__all__ = [
    "TokenMarker",
    "TokenType",
]

"""Immutable positioned token produced by every successful match.

Design Philosophy:
    - Token is immutable (frozen dataclass)
    - Position (index, size) is fixed at creation
    - Relabeling (produce, ignore) returns a NEW token at the same position
    - The ignore marker is an enum member, never a string label

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from pcengine.enums import TokenMarker

__all__ = ["Token"]


@dataclass(frozen=True, slots=True)
class Token[V]:
    """Typed value covering the source span [index, index + size).

    Type Parameters:
        V: Type of the semantic payload

    Attributes:
        index: Start offset in the source
        size: Length of the matched span
        type: Caller-chosen label, or TokenMarker.IGNORE
        value: Semantic payload (match object, sub-tokens, or a caller structure)

    Example:
        >>> raw = Token(0, 2, "regex", "42")
        >>> number = raw.produce("number", 42)
        >>> (number.index, number.end, number.type, number.value)
        (0, 2, 'number', 42)
        >>> raw.type  # Original unchanged
        'regex'
    """

    index: int
    size: int
    type: str | TokenMarker
    value: V

    def __post_init__(self) -> None:
        """Validate Token position invariants.

        Raises:
            ValueError: If index or size is negative
        """
        if self.index < 0:
            msg = f"Token.index must be >= 0, got {self.index}"
            raise ValueError(msg)
        if self.size < 0:
            msg = f"Token.size must be >= 0, got {self.size}"
            raise ValueError(msg)

    @classmethod
    def ignored(cls, index: int, size: int = 0) -> Token[None]:
        """Create an ignore token covering [index, index + size)."""
        return Token(index, size, TokenMarker.IGNORE, None)

    @property
    def end(self) -> int:
        """Offset just past the matched span."""
        return self.index + self.size

    @property
    def is_ignore(self) -> bool:
        """True if this token was marked to be dropped from results."""
        return self.type is TokenMarker.IGNORE

    def produce[V2](self, type: str | TokenMarker, value: V2) -> Token[V2]:  # noqa: A002
        """Relabel this token, keeping its position.

        Used to turn a raw match into a semantic node:

            >>> Token(3, 1, "regex", "7").produce("number", 7.0).type
            'number'
        """
        return Token(self.index, self.size, type, value)

    def ignore(self) -> Token[None]:
        """Return an ignore token at the same position, dropping the payload."""
        return Token.ignored(self.index, self.size)

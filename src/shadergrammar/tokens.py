"""Token categories, source positions, and the classified token record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenCategory(Enum):
    # Values are highlight.js scope names
    KEYWORD = "keyword"
    TYPE = "type"
    BUILT_IN = "built_in"
    LITERAL = "literal"
    NUMBER = "number"
    STRING = "string"
    COMMENT = "comment"
    META = "meta"  # preprocessor lines
    SYMBOL = "symbol"  # semantic annotations (: SV_Position)
    TITLE_FUNCTION = "title.function"


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A run of source text with its classification.

    ``scope`` is the classification path, outermost first; ``category`` is
    its last element, or None for text nothing classified. The directive
    keyword in ``#include`` has ``scope == (META, KEYWORD)``.
    """

    category: TokenCategory | None
    text: str
    span: Span
    scope: tuple[TokenCategory, ...] = ()
    relevance: int = 0

    @property
    def position(self) -> int:
        return self.span.start.offset


def position_at(source: str, offset: int) -> Position:
    """Return the Position of a 0-based character offset in *source*."""
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)

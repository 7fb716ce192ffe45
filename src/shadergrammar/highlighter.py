"""Registry-level entry points: highlight by name and detect the language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from shadergrammar.engine import tokenize
from shadergrammar.errors import IllegalSyntaxError
from shadergrammar.registry import LanguageRegistry
from shadergrammar.tokens import Span, Token, position_at


@dataclass(frozen=True, slots=True)
class HighlightResult:
    """Tokens of one text under one language, with the summed relevance."""

    language: str | None
    tokens: tuple[Token, ...]
    relevance: int

    @property
    def text(self) -> str:
        return "".join(t.text for t in self.tokens)


def tokenize_language(registry: LanguageRegistry, name: str, text: str) -> Iterator[Token]:
    """Lazily tokenize *text* with the grammar registered as *name*."""
    return tokenize(registry.get_language(name), text)


def highlight(
    registry: LanguageRegistry,
    name: str,
    text: str,
    *,
    ignore_illegals: bool = True,
) -> HighlightResult:
    """Tokenize *text* fully and score it.

    With ``ignore_illegals=False`` an illegal construct raises
    IllegalSyntaxError.
    """
    grammar = registry.get_language(name)
    tokens = tuple(tokenize(grammar, text, ignore_illegals=ignore_illegals))
    return HighlightResult(
        language=registry.resolve_name(name),
        tokens=tokens,
        relevance=sum(t.relevance for t in tokens),
    )


def detect_language(registry: LanguageRegistry, text: str) -> HighlightResult:
    """Highlight *text* with every registered grammar and keep the best.

    Each distinct grammar runs once, in strict mode; a grammar that hits an
    illegal construct scores zero. Ties go to the earliest registration. If
    nothing scores above zero the result has ``language=None`` and a single
    unclassified token.
    """
    best: HighlightResult | None = None
    seen: list[object] = []
    for name in registry.list_languages():
        grammar = registry.get_language(name)
        if any(g == grammar for g in seen):
            continue
        seen.append(grammar)
        try:
            result = highlight(registry, name, text, ignore_illegals=False)
        except IllegalSyntaxError:
            continue
        if result.relevance > 0 and (best is None or result.relevance > best.relevance):
            best = result

    if best is not None:
        return best
    return _plaintext(text)


def _plaintext(text: str) -> HighlightResult:
    if not text:
        return HighlightResult(language=None, tokens=(), relevance=0)
    span = Span(position_at(text, 0), position_at(text, len(text)))
    return HighlightResult(language=None, tokens=(Token(None, text, span),), relevance=0)

"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from shadergrammar import hlsl
from shadergrammar.engine import tokenize
from shadergrammar.grammar import GrammarDefinition
from shadergrammar.registry import LanguageRegistry
from shadergrammar.tokens import Token, TokenCategory


@pytest.fixture
def grammar() -> GrammarDefinition:
    return hlsl.build_grammar()


@pytest.fixture
def lex(grammar):
    """Return a helper that tokenizes source with the HLSL grammar."""

    def _lex(source: str, *, ignore_illegals: bool = True) -> list[Token]:
        return list(tokenize(grammar, source, ignore_illegals=ignore_illegals))

    return _lex


@pytest.fixture
def registry() -> LanguageRegistry:
    """An isolated registry with the HLSL grammar registered."""
    reg = LanguageRegistry()
    hlsl.register(reg)
    return reg


def assert_categories(tokens: list[Token], expected: list[TokenCategory | None]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], category: TokenCategory) -> list[Token]:
    """Return all tokens of the given category."""
    return [t for t in tokens if t.category == category]


def classified(tokens: list[Token]) -> list[tuple[TokenCategory, str]]:
    """(category, text) pairs for every classified token."""
    return [(t.category, t.text) for t in tokens if t.category is not None]

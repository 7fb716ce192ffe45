"""Highlighting by registered name, and relevance-based detection."""

from __future__ import annotations

import types

import pytest

from shadergrammar.errors import IllegalSyntaxError, UnknownLanguageError
from shadergrammar.grammar import GrammarDefinition, KeywordSet, TokenRule
from shadergrammar.highlighter import detect_language, highlight, tokenize_language
from shadergrammar.registry import LanguageRegistry
from shadergrammar.tokens import TokenCategory

SHADER = """\
#include "common.hlsli"

cbuffer Constants : register(b0)
{
    float4x4 WorldViewProj;
};

struct VSOutput
{
    float4 pos : SV_Position;
    float2 uv  : TEXCOORD0;
};

float4 PSMain(VSOutput input) : SV_Target
{
    return saturate(float4(input.uv, 0.0f, 1.0f));
}
"""


class TestHighlight:
    def test_sums_relevance(self, registry):
        result = highlight(registry, "hlsl", ": SV_Position")
        assert result.relevance == 10
        assert result.language == "hlsl"

    def test_alias_name(self, registry):
        result = highlight(registry, "SDSL", "float x;")
        assert result.language == "sdsl"
        assert result.tokens[0].category == TokenCategory.TYPE

    def test_text_roundtrip(self, registry):
        assert highlight(registry, "hlsl", SHADER).text == SHADER

    def test_unknown_language(self, registry):
        with pytest.raises(UnknownLanguageError):
            highlight(registry, "glsl", "x")

    def test_strict(self, registry):
        with pytest.raises(IllegalSyntaxError):
            highlight(registry, "hlsl", '"open\n', ignore_illegals=False)

    def test_tokenize_language_is_lazy(self, registry):
        tokens = tokenize_language(registry, "hlsl", "float x;")
        assert isinstance(tokens, types.GeneratorType)


class TestDetect:
    def test_shader(self, registry):
        result = detect_language(registry, SHADER)
        assert result.language == "hlsl"
        assert result.relevance >= 30

    def test_no_relevance(self, registry):
        result = detect_language(registry, "hello world")
        assert result.language is None
        assert result.relevance == 0
        assert result.text == "hello world"

    def test_empty(self, registry):
        result = detect_language(registry, "")
        assert result.language is None
        assert result.tokens == ()

    def test_empty_registry(self):
        assert detect_language(LanguageRegistry(), "float x;").language is None

    def test_illegal_disqualifies(self, registry):
        result = detect_language(registry, '"open string\nfloat x;')
        assert result.language is None

    def test_best_score_wins(self, registry):
        words = GrammarDefinition(
            name="Words",
            keywords=(KeywordSet.from_words(TokenCategory.KEYWORD, "hello world", relevance=5),),
        )
        registry.register_language("words", words)
        assert detect_language(registry, "hello world").language == "words"
        assert detect_language(registry, SHADER).language == "hlsl"

    def test_tie_goes_to_first_registered(self):
        reg = LanguageRegistry()
        for name in ("first", "second"):
            reg.register_language(
                name,
                GrammarDefinition(name=name, rules=(TokenRule(begin="x", category=TokenCategory.SYMBOL),)),
            )
        assert detect_language(reg, "x").language == "first"

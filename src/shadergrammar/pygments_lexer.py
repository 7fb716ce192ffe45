"""
Pygments lexer for HLSL/SDSL, driven by the same grammar as the HTML output.

Registered under the ``pygments.lexers`` entry point. Pygments resolves its
built-in lexers first and ships its own ``hlsl``, so this one answers to
``sdsl`` and ``hlsl-sdsl``; Sphinx/MkDocs code blocks pick it up by those
names once the package is installed.
"""

from __future__ import annotations

from typing import Iterator

from pygments.lexer import Lexer
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    String,
    Text,
    _TokenType,
)

from shadergrammar import hlsl
from shadergrammar.engine import tokenize
from shadergrammar.tokens import Token, TokenCategory

CATEGORY_TOKENS: dict[TokenCategory, _TokenType] = {
    TokenCategory.KEYWORD: Keyword,
    TokenCategory.TYPE: Keyword.Type,
    TokenCategory.BUILT_IN: Name.Builtin,
    TokenCategory.LITERAL: Keyword.Constant,
    TokenCategory.NUMBER: Number,
    TokenCategory.STRING: String,
    TokenCategory.COMMENT: Comment,
    TokenCategory.META: Comment.Preproc,
    TokenCategory.SYMBOL: Name.Attribute,
    TokenCategory.TITLE_FUNCTION: Name.Function,
}


def pygments_token_type(tok: Token) -> _TokenType:
    """Map a classified token to its Pygments token type."""
    if tok.category is None:
        return Text
    if TokenCategory.META in tok.scope:
        # Directive words and include paths keep the preprocessor colouring
        if tok.category == TokenCategory.STRING:
            return Comment.PreprocFile
        if tok.category in (TokenCategory.KEYWORD, TokenCategory.META):
            return Comment.Preproc
    return CATEGORY_TOKENS[tok.category]


class HLSLLexer(Lexer):
    """Pygments lexer for HLSL and SDSL shaders."""

    name = "HLSL/SDSL"
    aliases = ["sdsl", "hlsl-sdsl"]
    filenames = ["*.sdsl"]
    mimetypes = ["text/x-sdsl"]

    grammar = hlsl.build_grammar()

    def get_tokens_unprocessed(self, text: str) -> Iterator[tuple[int, _TokenType, str]]:
        for tok in tokenize(self.grammar, text):
            yield tok.position, pygments_token_type(tok), tok.text

    def analyse_text(text: str) -> float:
        # Semantic annotations are the distinctive marker; 10 relevance each
        relevance = sum(t.relevance for t in tokenize(HLSLLexer.grammar, text))
        return min(relevance / 100.0, 1.0)

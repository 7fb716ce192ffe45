"""Minimal LSP server for HLSL/SDSL — semantic tokens and diagnostics."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokenModifiers,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    SemanticTokenTypes,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from shadergrammar import hlsl
from shadergrammar.engine import tokenize
from shadergrammar.errors import IllegalSyntaxError
from shadergrammar.highlighter import highlight
from shadergrammar.registry import default_registry
from shadergrammar.tokens import Token, TokenCategory

TOKEN_TYPES: list[SemanticTokenTypes] = [
    SemanticTokenTypes.Keyword,
    SemanticTokenTypes.Type,
    SemanticTokenTypes.Function,
    SemanticTokenTypes.EnumMember,
    SemanticTokenTypes.Number,
    SemanticTokenTypes.String,
    SemanticTokenTypes.Comment,
    SemanticTokenTypes.Macro,
    SemanticTokenTypes.Decorator,
]
TOKEN_MODIFIERS: list[SemanticTokenModifiers] = [SemanticTokenModifiers.DefaultLibrary]

LEGEND = SemanticTokensLegend(
    token_types=[t.value for t in TOKEN_TYPES],
    token_modifiers=[m.value for m in TOKEN_MODIFIERS],
)

# category -> (token type, modifier bits)
_CATEGORY_TYPES: dict[TokenCategory, tuple[SemanticTokenTypes, int]] = {
    TokenCategory.KEYWORD: (SemanticTokenTypes.Keyword, 0),
    TokenCategory.TYPE: (SemanticTokenTypes.Type, 0),
    TokenCategory.BUILT_IN: (SemanticTokenTypes.Function, 1),
    TokenCategory.LITERAL: (SemanticTokenTypes.EnumMember, 0),
    TokenCategory.NUMBER: (SemanticTokenTypes.Number, 0),
    TokenCategory.STRING: (SemanticTokenTypes.String, 0),
    TokenCategory.COMMENT: (SemanticTokenTypes.Comment, 0),
    TokenCategory.META: (SemanticTokenTypes.Macro, 0),
    TokenCategory.SYMBOL: (SemanticTokenTypes.Decorator, 0),
    TokenCategory.TITLE_FUNCTION: (SemanticTokenTypes.Function, 0),
}

registry = default_registry()

server = LanguageServer(
    "shadergrammar-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full
)


def _token_type(tok: Token) -> tuple[int, int] | None:
    if tok.category is None:
        return None
    if tok.category == TokenCategory.KEYWORD and TokenCategory.META in tok.scope:
        kind, modifiers = SemanticTokenTypes.Macro, 0
    else:
        kind, modifiers = _CATEGORY_TYPES[tok.category]
    return TOKEN_TYPES.index(kind), modifiers


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def encode_semantic_tokens(source: str) -> list[int]:
    """Encode classified tokens in the LSP relative five-integer format.

    Columns and lengths count UTF-16 code units, the protocol's default
    position encoding. Tokens spanning several lines (block comments,
    continued directives) are split per line.
    """
    data: list[int] = []
    prev_line = 0
    prev_char = 0
    for tok in tokenize(registry.get_language(hlsl.PRIMARY_NAME), source):
        encoded = _token_type(tok)
        if encoded is None:
            continue
        type_idx, modifiers = encoded
        start = tok.span.start
        line = start.line - 1
        char = _utf16_len(source[start.offset - start.column + 1 : start.offset])
        for i, piece in enumerate(tok.text.split("\n")):
            if i > 0:
                line += 1
                char = 0
            length = _utf16_len(piece.rstrip("\r"))
            if length == 0:
                continue
            delta_line = line - prev_line
            delta_char = char - prev_char if delta_line == 0 else char
            data.extend([delta_line, delta_char, length, type_idx, modifiers])
            prev_line = line
            prev_char = char
    return data


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize strictly and publish illegal constructs as diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        highlight(registry, hlsl.PRIMARY_NAME, doc.source, ignore_illegals=False)
    except IllegalSyntaxError as exc:
        pos = exc.position
        line = pos.line - 1
        col = _utf16_len(doc.source[pos.offset - pos.column + 1 : pos.offset])
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Warning,
                source="shadergrammar",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return SemanticTokens(data=encode_semantic_tokens(doc.source))


def main() -> None:
    server.start_io()

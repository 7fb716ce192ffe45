"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from shadergrammar.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*: position, scope, relevance, text."""
    for tok in tokens:
        _dump_token(tok, file)


def _scope_path(tok: Token) -> str:
    if not tok.scope:
        return "-"
    return ">".join(c.value for c in tok.scope)


def _dump_token(tok: Token, f: TextIO) -> None:
    start = tok.span.start
    where = f"{start.line}:{start.column}"
    line = f"{where:>8} {_scope_path(tok):<24} {tok.text!r}"
    if tok.relevance:
        line += f" (+{tok.relevance})"
    f.write(line + "\n")

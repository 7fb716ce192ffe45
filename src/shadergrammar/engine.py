"""Tokenizer engine — runs a GrammarDefinition over source text.

Each region (the top level, a comment, a preprocessor line, ...) is
compiled into one combined regex of its child begin patterns, then its end
pattern, then its illegal pattern. Scanning takes the leftmost match; when
several alternatives match at the same position the first declared wins.
Text between matches is split into words and classified by the region's
keyword sets.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator

from shadergrammar.errors import GrammarError, IllegalSyntaxError
from shadergrammar.grammar import GrammarDefinition, KeywordSet, TokenRule
from shadergrammar.tokens import Position, Span, Token, TokenCategory, position_at

_END = "_end"
_ILLEGAL = "_illegal"


@dataclass(slots=True)
class Mode:
    """A compiled rule: begin pattern source plus, for regions, its terminators."""

    begin: str
    category: TokenCategory | None
    relevance: int
    keywords: dict[str, tuple[TokenCategory, int]]
    opens_region: bool
    children: list[Mode] = field(default_factory=list)
    terminators: re.Pattern[str] | None = None

    def describe(self) -> str:
        return self.category.value if self.category is not None else "region"


@dataclass(frozen=True, slots=True)
class CompiledGrammar:
    name: str
    root: Mode
    keyword_re: re.Pattern[str]
    case_insensitive: bool


class _Compiler:
    def __init__(self, grammar: GrammarDefinition) -> None:
        self._grammar = grammar
        self._flags = re.MULTILINE
        if grammar.case_insensitive:
            self._flags |= re.IGNORECASE
        self._cache: dict[TokenRule, Mode] = {}

    def compile(self) -> CompiledGrammar:
        g = self._grammar
        root = Mode(
            begin="",
            category=None,
            relevance=0,
            keywords=self._keyword_map(g.keywords),
            opens_region=True,
        )
        root.children = [self._compile_rule(r, p) for p, r in _expand(g.rules, "rules")]
        root.terminators = self._terminators(root.children, None, None, "rules")
        keyword_re = self._check(g.keyword_pattern, "keyword_pattern")
        return CompiledGrammar(g.name, root, keyword_re, g.case_insensitive)

    def _compile_rule(self, rule: TokenRule, path: str) -> Mode:
        cached = self._cache.get(rule)
        if cached is not None:
            return cached

        self._check(rule.begin, f"{path}.begin")
        mode = Mode(
            begin=rule.begin,
            category=rule.category,
            relevance=rule.relevance,
            keywords=self._keyword_map(rule.keywords),
            opens_region=rule.end is not None,
        )
        if rule.end is not None:
            self._check(rule.end, f"{path}.end")
            if rule.illegal is not None:
                self._check(rule.illegal, f"{path}.illegal")
            mode.children = [
                self._compile_rule(r, p) for p, r in _expand(rule.contains, f"{path}.contains")
            ]
            mode.terminators = self._terminators(mode.children, rule.end, rule.illegal, path)
        self._cache[rule] = mode
        return mode

    def _terminators(
        self,
        children: list[Mode],
        end: str | None,
        illegal: str | None,
        path: str,
    ) -> re.Pattern[str] | None:
        parts = [f"(?P<_c{i}>{child.begin})" for i, child in enumerate(children)]
        if end is not None:
            parts.append(f"(?P<{_END}>{end})")
        if illegal is not None:
            parts.append(f"(?P<{_ILLEGAL}>{illegal})")
        if not parts:
            return None
        return self._check("|".join(parts), path)

    def _check(self, pattern: str, path: str) -> re.Pattern[str]:
        try:
            return re.compile(pattern, self._flags)
        except re.error as exc:
            raise GrammarError(
                f"invalid pattern: {exc}", self._grammar.name, path, pattern
            ) from None

    def _keyword_map(self, sets: tuple[KeywordSet, ...]) -> dict[str, tuple[TokenCategory, int]]:
        result: dict[str, tuple[TokenCategory, int]] = {}
        for ks in sets:
            for word in ks.words:
                key = word.lower() if self._grammar.case_insensitive else word
                # Earlier sets win on overlap
                result.setdefault(key, (ks.category, ks.score(word)))
        return result


def _expand(rules: tuple[TokenRule, ...], path: str) -> list[tuple[str, TokenRule]]:
    """Flatten variants in place, keeping declaration order."""
    out: list[tuple[str, TokenRule]] = []
    for i, rule in enumerate(rules):
        if rule.variants:
            for j, variant in enumerate(rule.expand()):
                out.append((f"{path}[{i}].variants[{j}]", variant))
        else:
            out.append((f"{path}[{i}]", rule))
    return out


@lru_cache(maxsize=32)
def compile_grammar(grammar: GrammarDefinition) -> CompiledGrammar:
    """Compile (and cache) *grammar*. Raises GrammarError on a bad pattern."""
    return _Compiler(grammar).compile()


class _Scanner:
    def __init__(self, compiled: CompiledGrammar, source: str, ignore_illegals: bool) -> None:
        self._compiled = compiled
        self._source = source
        self._ignore_illegals = ignore_illegals
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(source) if ch == "\n"]

    def scan(self) -> Iterator[Token]:
        src = self._source
        stack: list[tuple[Mode, tuple[TokenCategory, ...]]] = [(self._compiled.root, ())]
        pos = 0  # where the next search starts
        buf = 0  # start of text not yet emitted
        carry = 0  # relevance owed to the next emitted token

        while True:
            mode, scope = stack[-1]
            if mode.terminators is None:
                break
            m = mode.terminators.search(src, pos)
            if m is None:
                break
            start, end = m.span()
            kind = m.lastgroup

            if kind == _END:
                yield from self._flush(buf, end, mode, scope, carry)
                carry = 0
                stack.pop()
                pos = buf = end
            elif kind == _ILLEGAL:
                if not self._ignore_illegals:
                    raise IllegalSyntaxError(
                        f"unexpected {m.group()!r} inside {mode.describe()}",
                        position_at(src, start),
                        src,
                    )
                # Close the region here; the parent resumes at the same spot
                yield from self._flush(buf, start, mode, scope, carry)
                carry = 0
                stack.pop()
                pos = buf = start
            else:
                assert kind is not None
                child = mode.children[int(kind[2:])]
                if start == end:
                    # Zero-width begins never open anything
                    pos = start + 1
                    continue
                if child.category is None and not child.opens_region:
                    # Unclassified match (an escape): stays part of the buffer
                    carry += child.relevance
                    pos = end
                    continue
                yield from self._flush(buf, start, mode, scope, carry)
                child_scope = scope if child.category is None else scope + (child.category,)
                if child.opens_region:
                    # The begin lexeme is the first text of the new region
                    stack.append((child, child_scope))
                    carry = child.relevance
                    buf = start
                else:
                    yield self._token(start, end, child_scope, child.relevance)
                    carry = 0
                    buf = end
                pos = end

        # Unterminated regions keep the remainder of the input
        mode, scope = stack[-1]
        yield from self._flush(buf, len(src), mode, scope, carry)

    def _flush(
        self,
        start: int,
        end: int,
        mode: Mode,
        scope: tuple[TokenCategory, ...],
        bonus: int = 0,
    ) -> Iterator[Token]:
        """Emit text[start:end] inside *mode*, classifying keywords.

        *bonus* (the region's own relevance) is credited to the first token.
        """
        if start >= end:
            return
        if not mode.keywords:
            yield self._token(start, end, scope, bonus)
            return

        fold = self._compiled.case_insensitive
        last = start
        for m in self._compiled.keyword_re.finditer(self._source, start, end):
            word = m.group()
            hit = mode.keywords.get(word.lower() if fold else word)
            if hit is None:
                continue
            category, relevance = hit
            if m.start() > last:
                yield self._token(last, m.start(), scope, bonus)
                bonus = 0
            yield self._token(m.start(), m.end(), scope + (category,), relevance + bonus)
            bonus = 0
            last = m.end()
        if last < end:
            yield self._token(last, end, scope, bonus)

    def _token(
        self,
        start: int,
        end: int,
        scope: tuple[TokenCategory, ...],
        relevance: int,
    ) -> Token:
        category = scope[-1] if scope else None
        span = Span(self._position(start), self._position(end))
        return Token(category, self._source[start:end], span, scope, relevance)

    def _position(self, offset: int) -> Position:
        idx = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[idx]
        return Position(idx + 1, offset - line_start + 1, offset)


def tokenize(
    grammar: GrammarDefinition,
    source: str,
    *,
    ignore_illegals: bool = True,
) -> Iterator[Token]:
    """Lazily tokenize *source*. Token texts concatenate back to *source*.

    The grammar is compiled up front, so a malformed pattern raises
    GrammarError here rather than on first iteration.
    """
    compiled = compile_grammar(grammar)
    return _Scanner(compiled, source, ignore_illegals).scan()

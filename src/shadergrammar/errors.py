"""Error types with formatted source context."""

from __future__ import annotations

from shadergrammar.tokens import Position


class GrammarError(Exception):
    """Raised when a grammar rule cannot be compiled (malformed regex)."""

    def __init__(self, message: str, grammar: str, rule_path: str, pattern: str) -> None:
        self.message = message
        self.grammar = grammar
        self.rule_path = rule_path
        self.pattern = pattern
        super().__init__(self.format())

    def format(self) -> str:
        return (
            f"error: {self.message}\n"
            f"  --> grammar {self.grammar}, rule {self.rule_path}\n"
            f"   | pattern: {self.pattern!r}"
        )


class IllegalSyntaxError(Exception):
    """Raised in strict mode when a region's illegal pattern matches."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.hlsl") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # At least one caret, even when the offending character is the newline
        underline_len = max(1, min(2, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class UnknownLanguageError(KeyError):
    """Raised when a language name is not registered."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(name)

    def __str__(self) -> str:
        if self.known:
            return f"unknown language '{self.name}' (known: {', '.join(self.known)})"
        return f"unknown language '{self.name}' (no languages registered)"

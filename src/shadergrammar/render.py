"""HTML renderer — highlight.js-compatible markup from a token stream."""

from __future__ import annotations

from typing import Iterable

from shadergrammar.tokens import Token, TokenCategory

DEFAULT_CLASS_PREFIX = "hljs-"


def scope_classes(category: TokenCategory, class_prefix: str = DEFAULT_CLASS_PREFIX) -> str:
    """CSS classes for a category: ``title.function`` -> ``hljs-title function_``."""
    head, *rest = category.value.split(".")
    classes = [f"{class_prefix}{head}"]
    # Sub-scopes get one trailing underscore per nesting level
    classes.extend(f"{part}{'_' * (i + 1)}" for i, part in enumerate(rest))
    return " ".join(classes)


def render_html(tokens: Iterable[Token], class_prefix: str = DEFAULT_CLASS_PREFIX) -> str:
    """Render tokens as nested ``<span>`` markup (no wrapper element).

    Spans stay open across consecutive tokens that share a scope prefix, so a
    preprocessor line renders as one ``meta`` span around its keyword span.
    """
    parts: list[str] = []
    open_scope: tuple[TokenCategory, ...] = ()

    for tok in tokens:
        common = 0
        while (
            common < len(open_scope)
            and common < len(tok.scope)
            and open_scope[common] == tok.scope[common]
        ):
            common += 1
        parts.append("</span>" * (len(open_scope) - common))
        for category in tok.scope[common:]:
            parts.append(f'<span class="{scope_classes(category, class_prefix)}">')
        parts.append(_escape_html(tok.text))
        open_scope = tok.scope

    parts.append("</span>" * len(open_scope))
    return "".join(parts)


def render_block(
    tokens: Iterable[Token],
    language: str | None,
    class_prefix: str = DEFAULT_CLASS_PREFIX,
) -> str:
    """Render tokens inside ``<pre><code class="hljs language-...">``."""
    classes = "hljs"
    if language:
        classes += f" language-{_escape_attr(language)}"
    return f'<pre><code class="{classes}">{render_html(tokens, class_prefix)}</code></pre>'


def render_document(
    block: str,
    title: str,
    css_files: Iterable[str] = (),
) -> str:
    """Wrap a rendered block in a complete HTML document."""
    parts: list[str] = ["<!DOCTYPE html>\n", "<html>\n", "<head>\n"]
    parts.append('<meta charset="utf-8">\n')
    parts.append(f"<title>{_escape_html(title)}</title>\n")
    for href in css_files:
        parts.append(f'<link rel="stylesheet" href="{_escape_attr(href)}">\n')
    parts.append("</head>\n")
    parts.append("<body>\n")
    parts.append(block)
    parts.append("\n</body>\n")
    parts.append("</html>\n")
    return "".join(parts)


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for HTML body content. Also encodes non-ASCII as entities."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)

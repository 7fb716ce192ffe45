"""HLSL/SDSL lexical grammar and the regex tokenizer it plugs into."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shadergrammar.registry import LanguageRegistry

__version__ = "0.1.0"


def highlight_html(
    source: str,
    language: str | None = "hlsl",
    registry: LanguageRegistry | None = None,
) -> str:
    """Highlight source to a ``<pre><code>`` block; ``language=None`` auto-detects."""
    from shadergrammar.highlighter import detect_language, highlight
    from shadergrammar.registry import default_registry
    from shadergrammar.render import render_block

    if registry is None:
        registry = default_registry()
    if language is None:
        result = detect_language(registry, source)
    else:
        result = highlight(registry, language, source)
    return render_block(result.tokens, result.language)

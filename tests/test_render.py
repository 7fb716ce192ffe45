"""HTML rendering of token streams."""

from __future__ import annotations

from shadergrammar.render import render_block, render_document, render_html, scope_classes
from shadergrammar.tokens import TokenCategory


class TestScopeClasses:
    def test_simple(self):
        assert scope_classes(TokenCategory.KEYWORD) == "hljs-keyword"

    def test_built_in(self):
        assert scope_classes(TokenCategory.BUILT_IN) == "hljs-built_in"

    def test_dotted(self):
        assert scope_classes(TokenCategory.TITLE_FUNCTION) == "hljs-title function_"

    def test_custom_prefix(self):
        assert scope_classes(TokenCategory.TYPE, "hl-") == "hl-type"


class TestRenderHtml:
    def test_plain_text(self, lex):
        assert render_html(lex("x = y;")) == "x = y;"

    def test_keyword(self, lex):
        assert render_html(lex("float x")) == '<span class="hljs-type">float</span> x'

    def test_entry_point(self, lex):
        html = render_html(lex("void PSMain()"))
        assert '<span class="hljs-title function_">PSMain</span>' in html

    def test_nested_preprocessor(self, lex):
        html = render_html(lex("#include <a.h>"))
        assert html == (
            '<span class="hljs-meta">#<span class="hljs-keyword">include</span> '
            '<span class="hljs-string">&lt;a.h&gt;</span></span>'
        )

    def test_escapes_markup(self, lex):
        html = render_html(lex("a < b && c > d"))
        assert html == "a &lt; b &amp;&amp; c &gt; d"

    def test_non_ascii(self, lex):
        assert render_html(lex("// é")) == '<span class="hljs-comment">// &#xE9;</span>'

    def test_spans_balanced(self, lex):
        html = render_html(lex('#define X "a" // c\nfloat4 v : SV_Target;'))
        assert html.count("<span") == html.count("</span>")

    def test_custom_prefix(self, lex):
        assert render_html(lex("true"), class_prefix="") == '<span class="literal">true</span>'

    def test_empty(self):
        assert render_html([]) == ""


class TestRenderBlock:
    def test_language_class(self, lex):
        html = render_block(lex("int"), "hlsl")
        assert html == '<pre><code class="hljs language-hlsl"><span class="hljs-type">int</span></code></pre>'

    def test_no_language(self, lex):
        assert render_block(lex("x"), None) == '<pre><code class="hljs">x</code></pre>'


class TestRenderDocument:
    def test_structure(self):
        html = render_document("<pre></pre>", "shader.hlsl", ["style.css"])
        assert html.startswith("<!DOCTYPE html>\n")
        assert "<title>shader.hlsl</title>" in html
        assert '<link rel="stylesheet" href="style.css">' in html
        assert "<body>\n<pre></pre>\n</body>" in html

    def test_escapes_title_and_href(self):
        html = render_document("", "a<b", ['x"y.css'])
        assert "<title>a&lt;b</title>" in html
        assert 'href="x&quot;y.css"' in html

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup renderer
===============
Renders rich text property values to HTML for the block templates.

Supported formats:
  - markdown  : rendered via mistune (tables, strikethrough, bare URLs)
  - rst       : rendered via docutils
  - html      : passed through untouched (rich text editor output)

Fenced / literal code is highlighted with Pygments.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound


RICH_TEXT_FORMATS = ("markdown", "rst", "html")


# -----------------------------------------------------------------------------
# Syntax highlighting via Pygments
# -----------------------------------------------------------------------------

def highlight_code(code: str, lang: str = "") -> str:
    """Highlight *code*.  Unknown or empty languages render as plain text."""
    try:
        lexer = get_lexer_by_name(lang.strip(), stripall=True) if lang.strip() else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
    return highlight(code, lexer, formatter)


# -----------------------------------------------------------------------------
# Markdown renderer via mistune
# -----------------------------------------------------------------------------

def _make_md_renderer():
    import mistune
    from mistune.plugins.table import table
    from mistune.plugins.formatting import strikethrough
    from mistune.plugins.url import url

    class _HighlightRenderer(mistune.HTMLRenderer):
        def codespan(self, code: str) -> str:
            return f'<code>{_html.escape(code)}</code>'

        def block_code(self, code: str, **kwargs) -> str:
            info = kwargs.get('info') or ''
            lang = info.split()[0] if info else ''
            if lang:
                return highlight_code(code, lang)
            return f'<pre><code>{_html.escape(code)}</code></pre>'

    return mistune.create_markdown(
        renderer=_HighlightRenderer(escape=False),
        plugins=[table, strikethrough, url],
    )


_md_renderer = None


def _get_md_renderer():
    global _md_renderer
    if _md_renderer is None:
        _md_renderer = _make_md_renderer()
    return _md_renderer


# -----------------------------------------------------------------------------
# RST renderer via docutils
# -----------------------------------------------------------------------------

def _render_rst(content: str) -> str:
    from docutils.core import publish_parts
    parts = publish_parts(
        source=content,
        writer="html5",
        settings_overrides={
            "halt_level": 5,
            "report_level": 5,
            "input_encoding": "unicode",
            "output_encoding": "unicode",
            "syntax_highlight": "short",
            "doctitle_xform": False,
            "sectsubtitle_xform": False,
            "raw_enabled": False,
            "file_insertion_enabled": False,
        },
    )
    return parts["body"]


# -----------------------------------------------------------------------------

def render(content: str, fmt: str = "markdown") -> str:
    """
    Render rich text *content* to an HTML fragment.

    Parameters
    ----------
    content : raw property value
    fmt     : "markdown", "rst" or "html"
    """
    if not content:
        return ""
    fmt = (fmt or "markdown").lower()

    if fmt == "markdown":
        return _get_md_renderer()(content)
    if fmt == "rst":
        return _render_rst(content)
    if fmt == "html":
        return content
    # Unknown format: show the source rather than guess
    return f"<pre>{_html.escape(content)}</pre>"


# -----------------------------------------------------------------------------

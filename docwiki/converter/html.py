"""Text-to-HTML transforms for plain text and the restricted Markdown dialect.

The Markdown renderer is a fixed chain of line-oriented substitutions run on
already-escaped source. Its output on overlapping or malformed markup is
whatever the ordered substitutions produce; stored documents depend on that
exact output, so the order below must not change.

Line handling follows browser regex rules rather than Python's: ``\\r``,
``\\u2028`` and ``\\u2029`` end a line just like ``\\n``, so ``.`` never
crosses them and ``^``/``$`` match next to each of them. CRLF sources
therefore render the same as they do in the browser client.
"""

from __future__ import annotations

import re

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

_LINE_TERMINATORS = "\n\r\u2028\u2029"
_WHITESPACE = (
    "\t\v\f \xa0\ufeff\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u202f\u205f\u3000" + _LINE_TERMINATORS
)

_DOT = f"[^{_LINE_TERMINATORS}]"
_WS = f"[{_WHITESPACE}]"
_BOL = f"(?<![^{_LINE_TERMINATORS}])"
_EOL = f"(?![^{_LINE_TERMINATORS}])"

# Longest run first so "######" is never taken by the single-# rule.
_HEADINGS = [
    (level, re.compile(f"{_BOL}{'#' * level}{_WS}?({_DOT}*){_EOL}"))
    for level in range(6, 0, -1)
]

_BOLD = re.compile(rf"\*\*({_DOT}+?)\*\*")
_ITALIC = re.compile(rf"\*({_DOT}+?)\*")
# Only http(s) targets become anchors; javascript: and friends stay literal.
_LINK = re.compile(rf"\[([^\]]+)\]\((https?://[^{_WHITESPACE})]+)\)")
_LIST_ITEM = re.compile(f"{_BOL}{_WS}*-{_WS}+({_DOT}*){_EOL}")
_LIST_RUN = re.compile(f"(<li>{_DOT}*</li>\\n?)+")
_BLOCK_SPLIT = re.compile(r"\n{2,}")


def escape_html(value: object) -> str:
    """Escape the five characters with special meaning in HTML."""
    s = str(value)
    for char, entity in _ESCAPES:
        s = s.replace(char, entity)
    return s


def text_to_html(text: str) -> str:
    return f'<pre class="txt">{escape_html(text)}</pre>'


def markdown_to_html(md: str | None) -> str:
    s = escape_html(md or "")

    for level, pattern in _HEADINGS:
        s = pattern.sub(rf"<h{level}>\1</h{level}>", s)

    s = _BOLD.sub(r"<strong>\1</strong>", s)
    s = _ITALIC.sub(r"<em>\1</em>", s)

    s = _LINK.sub(r'<a href="\2" target="_blank" rel="noopener">\1</a>', s)

    s = _LIST_ITEM.sub(r"<li>\1</li>", s)
    s = _LIST_RUN.sub(lambda m: f"<ul>{m.group(0)}</ul>", s)

    blocks = [b.strip(_WHITESPACE) for b in _BLOCK_SPLIT.split(s)]
    s = "\n".join(_wrap_block(b) for b in blocks if b)

    return f'<div class="md">{s}</div>'


def _wrap_block(block: str) -> str:
    if block.startswith("<h") or block.startswith("<ul>"):
        return block
    return "<p>" + block.replace("\n", "<br>") + "</p>"


def pdf_page_html(page_number: int, data_uri: str) -> str:
    label = f"Page {page_number}"
    return (
        '<div class="pdf-page">'
        f'<div class="pdf-page-label">{label}</div>'
        f'<img class="pdf-page-img" src="{data_uri}" alt="{label}" />'
        "</div>"
    )

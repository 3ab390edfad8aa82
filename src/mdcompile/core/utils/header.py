"""Normalize heading text with inline markup into plain text.

Supported forms:
  [text](url)                 -> text
  `t`, *t*, **t**, ***t***, _t_ -> t
  \\* \\_ \\` \\! \\< \\$        -> literal character
  <tag>...</tag> outside code -> removed
  HTML entities               -> unescaped
"""

import html
import re


_LINK_RE = re.compile(r"(\[(.[^\]]+)\]\((.[^)]+)\))")
_WRAPPER_RE = re.compile(r"(`|\*{1,3}|_)(.*?[^\\])\1")
_ESCAPE_RE = re.compile(r"(\\)(\*|_|`|\!|<|\$)")
_HTML_RE = re.compile(r"(^|[^><`\\])<.*>([^><`]|$)")


def remove_markdown_tokens(text: str) -> str:
    text = _LINK_RE.sub(r"\2", text)
    text = _WRAPPER_RE.sub(r"\2", text)
    return _ESCAPE_RE.sub(r"\2", text)


def remove_non_code_wrapped_html(text: str) -> str:
    return _HTML_RE.sub(r"\1\2", text)


def parse_header(text: str) -> str:
    """Trim, strip inline markdown, then unescape entities."""
    return html.unescape(remove_markdown_tokens(str(text).strip()))


def deeply_parse_header(text: str) -> str:
    """parse_header, after first dropping inline HTML that is not inside code."""
    return parse_header(remove_non_code_wrapped_html(str(text)))

"""Escape bundler-reserved constants so static replacement leaves docs text alone.

A later build step rewrites literal occurrences of ``process.env``,
``import.meta`` and user defines. When those tokens appear as documentation
text they must survive, so a breaker is inserted after their first character:

- ``JS_STRING_BREAKER`` (zero-width space) inside the page data string;
- ``TEMPLATE_BREAKER`` (``<wbr>``) inside the rendered template markup.
"""

import re
from typing import Any, Iterable


JS_STRING_BREAKER = "\u200b"
TEMPLATE_BREAKER = "<wbr>"

ALWAYS_REPLACED = ("process.env",)
BUILD_REPLACED = ("import.meta",)


def reserved_tokens(user_defines: dict[str, Any] = None, is_build: bool = False) -> list[str]:
    """Return the literal tokens a downstream replacement step would rewrite."""
    tokens = list(ALWAYS_REPLACED)
    if is_build:
        tokens.extend(BUILD_REPLACED)
        tokens.extend((user_defines or {}).keys())
    return tokens


def gen_replace_regex(user_defines: dict[str, Any] = None, is_build: bool = False) -> re.Pattern:
    """Compile a word-bounded alternation of every reserved token."""
    return _compile(reserved_tokens(user_defines, is_build))


def _compile(tokens: Iterable[str]) -> re.Pattern:
    return re.compile(r"\b(" + "|".join(re.escape(t) for t in tokens) + ")")


def replace_constants(text: str, replace_regex: re.Pattern, breaker: str) -> str:
    """Insert breaker right after the first character of every reserved token."""
    return replace_regex.sub(lambda m: m.group(0)[0] + breaker + m.group(0)[1:], text)


def strip_breakers(text: str, breaker: str) -> str:
    """Remove breakers inserted by replace_constants."""
    return text.replace(breaker, "")

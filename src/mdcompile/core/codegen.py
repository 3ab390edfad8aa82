"""Page data script generation and merging with user-authored script blocks"""

import json
import re

from mdcompile.core.guard import JS_STRING_BREAKER, replace_constants
from mdcompile.core.models import PageData


SCRIPT_CLOSE_RE = re.compile(r"</script>")
SCRIPT_LANG_TS_RE = re.compile(r"""<\s*script[^>]*\blang=['"]ts['"][^>]*""")
SCRIPT_SETUP_RE = re.compile(r"<\s*script[^>]*\bsetup\b[^>]*")
SCRIPT_CLIENT_RE = re.compile(r"<\s*script[^>]*\bclient\b[^>]*")
DEFAULT_EXPORT_RE = re.compile(r"((?:^|\n|;)\s*)export(\s*)default")
NAMED_DEFAULT_EXPORT_RE = re.compile(r"((?:^|\n|;)\s*)export(.+)as(\s*)default")


def page_data_statement(page_data: PageData, replace_regex: re.Pattern) -> str:
    """``export const __pageData = JSON.parse("...")`` with reserved tokens broken."""
    data_json = replace_constants(page_data.to_json(), replace_regex, JS_STRING_BREAKER)
    return f"\nexport const __pageData = JSON.parse({json.dumps(data_json, ensure_ascii=False)})"


def fallback_default_export(relative_path: str) -> str:
    return f"\nexport default {{name:{json.dumps(relative_path, ensure_ascii=False)}}}"


def _is_plain_script(tag: str) -> bool:
    return bool(
        SCRIPT_CLOSE_RE.search(tag)
        and not SCRIPT_SETUP_RE.search(tag)
        and not SCRIPT_CLIENT_RE.search(tag)
    )


def has_default_export(script: str) -> bool:
    return bool(DEFAULT_EXPORT_RE.search(script) or NAMED_DEFAULT_EXPORT_RE.search(script))


def gen_page_data_code(tags: list[str], page_data: PageData, replace_regex: re.Pattern) -> list[str]:
    """Return hoisted tags with the page data statement injected.

    The first plain ``<script>`` (not setup, not client) receives the statement
    before its closing tag, plus a fallback default export when it has none.
    Without one, a new script block is prepended. Other tags are untouched.
    """
    tags = list(tags)
    code = page_data_statement(page_data, replace_regex)
    fallback = fallback_default_export(page_data.relative_path)

    index = next((i for i, tag in enumerate(tags) if _is_plain_script(tag)), None)
    if index is not None:
        tag = tags[index]
        injected = code + ("" if has_default_export(tag) else fallback) + "</script>"
        tags[index] = SCRIPT_CLOSE_RE.sub(lambda _: injected, tag, count=1)
        return tags

    uses_ts = any(SCRIPT_LANG_TS_RE.search(tag) for tag in tags)
    opening = '<script lang="ts">' if uses_ts else "<script>"
    return [f"{opening}{code}{fallback}</script>", *tags]

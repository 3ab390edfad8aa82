"""Page title and description inference from frontmatter and content"""

import re
from typing import Any, Optional

from mdcompile.core.utils.header import deeply_parse_header


FIRST_HEADING_RE = re.compile(r"^\s*#+\s+(.*)", re.MULTILINE)


def infer_title(frontmatter: dict[str, Any], content: str) -> str:
    """Frontmatter title, else the first markdown heading, else ''."""
    if frontmatter.get("title"):
        return deeply_parse_header(str(frontmatter["title"]))
    m = FIRST_HEADING_RE.search(content)
    if m:
        return deeply_parse_header(m.group(1).strip())
    return ""


def get_head_meta_content(head: Any, name: str) -> Optional[str]:
    """Return content of the first ``["meta", {name: <name>, content: ...}]`` head entry."""
    if not head or not isinstance(head, list):
        return None
    for entry in head:
        if not isinstance(entry, (list, tuple)) or not entry:
            continue
        tag = entry[0]
        attrs = entry[1] if len(entry) > 1 and isinstance(entry[1], dict) else {}
        if tag == "meta" and attrs.get("name") == name and attrs.get("content"):
            return str(attrs["content"])
    return None


def infer_description(frontmatter: dict[str, Any]) -> str:
    """An explicit frontmatter description wins, even when empty."""
    if "description" in frontmatter:
        description = frontmatter["description"]
        return "" if description is None else str(description)
    return get_head_meta_content(frontmatter.get("head"), "description") or ""

"""Anchor slugs for rendered headings"""

import re


_STRIP_RE = re.compile(r'[^\w\s-]')
_SEPARATOR_RE = re.compile(r'[\s_]+')


def slugify(text: str) -> str:
    """Convert heading text to a lowercase, hyphen-separated anchor id ('' if nothing is left)."""
    text = _STRIP_RE.sub('', text.lower())
    text = _SEPARATOR_RE.sub('-', text)
    return re.sub(r'-+', '-', text).strip('-')

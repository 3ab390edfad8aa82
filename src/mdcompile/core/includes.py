"""Inline ``<!-- @include: path -->`` expansion ahead of rendering"""

import os
import re

from mdcompile.core.models import IncludeOutcome
from mdcompile.core.utils.paths import slash


INCLUDE_RE = re.compile(r"<!--\s*@include:\s*(.*?)\s*-->")


def include_path(target: str, base_dir: str) -> str:
    """Join target onto base_dir; a leading separator does not escape base_dir."""
    return os.path.normpath(os.path.join(base_dir, target.lstrip("/\\")))


def _expand(target: str, base_dir: str) -> tuple[IncludeOutcome, str, str]:
    """Read one include target relative to base_dir. Returns (outcome, path, content)."""
    path = include_path(target, base_dir)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return IncludeOutcome.EXPANDED, path, f.read()
    except (OSError, UnicodeDecodeError):
        return IncludeOutcome.NOT_FOUND, path, ""


def resolve_includes(source: str, base_dir: str) -> tuple[str, list[str]]:
    """Replace every include directive with the referenced file's contents.

    Single pass: directives inside included content are not expanded.
    Unreadable targets leave the directive verbatim so it shows up in the
    rendered page. Returns (expanded_source, include_paths) with one path per
    expanded occurrence, in order.
    """
    includes: list[str] = []

    def _sub(m: re.Match) -> str:
        outcome, path, content = _expand(m.group(1), base_dir)
        if outcome is IncludeOutcome.NOT_FOUND:
            return m.group(0)
        includes.append(slash(path))
        return content

    return INCLUDE_RE.sub(_sub, source), includes

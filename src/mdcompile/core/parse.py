"""Page discovery and YAML frontmatter extraction"""

import re
from pathlib import Path
from typing import Any, Iterable

import yaml

from mdcompile.core.utils.paths import slash


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md'}


def _key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return "null" if key is None else str(key)


def _string_keys(value: Any) -> Any:
    """Coerce mapping keys to strings at every depth ('2023: x' -> {"2023": "x"})."""
    if isinstance(value, dict):
        return {_key(k): _string_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_string_keys(v) for v in value]
    return value


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return _string_keys(fm), text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS and p.is_file())


def discover_pages(src_dir: Path, exclude: Iterable[str] = ()) -> list[str]:
    """Return source-relative page paths ('guide/index.md') under src_dir.

    Files below any directory named in exclude (relative to src_dir) are skipped.
    """
    skip = {slash(e).strip('/') for e in exclude if e}
    pages = []
    for p in discover_files(src_dir):
        rel = slash(str(p.relative_to(src_dir)))
        if any(rel.startswith(f"{s}/") for s in skip):
            continue
        pages.append(rel)
    return pages

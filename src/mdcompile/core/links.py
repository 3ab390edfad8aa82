"""Dead-link validation of links collected during render"""

import logging
import os
import re
from typing import Iterable
from urllib.parse import unquote

from mdcompile.core.utils.paths import EXTERNAL_URL_RE, slash


logger = logging.getLogger(__name__)

ASSET_EXT_RE = re.compile(r"\.(?!html|md)\w+($|\?)", re.IGNORECASE)
QUERY_HASH_RE = re.compile(r"[?#].*$")
PAGE_EXT_RE = re.compile(r"\.(html|md)$")


def normalize_pages(pages: Iterable[str]) -> frozenset[str]:
    """Turn source-relative page paths ('guide/index.md') into page ids ('guide/index')."""
    return frozenset(slash(re.sub(r"\.md$", "", p)) for p in pages)


def strip_link(url: str) -> str:
    """Drop query/hash and a '.md'/'.html' extension; a trailing '/' gains 'index'."""
    url = PAGE_EXT_RE.sub("", QUERY_HASH_RE.sub("", url))
    return url + "index" if url.endswith("/") else url


def resolve_page_id(url: str, file_dir: str, src_dir: str) -> str:
    """Resolve an internal link to a source-root-relative page identifier."""
    url = strip_link(url)
    if url.startswith("/"):
        resolved = url[1:]
    else:
        target = os.path.normpath(os.path.join(file_dir, url))
        resolved = os.path.relpath(target, src_dir)
    return unquote(slash(resolved))


def _is_localhost(url: str) -> bool:
    return EXTERNAL_URL_RE.sub("", url).startswith("//localhost:")


def _warn_dead_link(url: str, file_path: str) -> None:
    logger.warning(
        "Found dead link %s in file %s\n"
        "If it is intended, you can use:\n"
        '    <a href="%s" target="_blank" rel="noreferrer">%s</a>',
        url, file_path, url, url,
    )


def is_dead_link(
    url: str,
    file_dir: str,
    src_dir: str,
    pages: frozenset[str],
    public_dir: str,
    ) -> bool:
    """Apply the dead-link rules to a single URL."""
    if ASSET_EXT_RE.search(url):
        return False
    if _is_localhost(url):
        return True
    resolved = resolve_page_id(url, file_dir, src_dir)
    if resolved in pages:
        return False
    return not os.path.exists(os.path.join(file_dir, public_dir, f"{resolved}.html"))


def find_dead_links(
    links: Iterable[str],
    file_path: str,
    src_dir: str,
    pages: frozenset[str],
    public_dir: str,
    ) -> list[str]:
    """Return links from file_path that resolve to no known page or public asset.

    Localhost links are reported as written; page links are reported without
    query, hash or extension ('./missing.md#x' -> './missing'). Each dead link
    is logged as a warning; validation never raises.
    """
    file_dir = os.path.dirname(file_path)
    dead: list[str] = []
    for url in links:
        if is_dead_link(url, file_dir, src_dir, pages, public_dir):
            reported = url if _is_localhost(url) else strip_link(url)
            _warn_dead_link(reported, file_path)
            dead.append(reported)
    return dead

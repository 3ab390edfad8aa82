"""markdown-it adapter that renders HTML and reports side-channel data.

``MarkdownRenderer.render(source, env)`` strips frontmatter, renders the body,
and fills ``env`` with:

- ``content`` / ``frontmatter``: the body and parsed YAML header;
- ``data.hoisted_tags``: top-level ``<script>``/``<style>`` blocks, removed from
  the HTML body;
- ``data.headers``: headings at the configured levels;
- ``data.links``: internal link targets as written, plus external links to
  ``localhost``.

The renderer keeps no per-call state; everything for one call travels in the
markdown-it env under the ``"page"`` key, so one instance can serve
concurrent compiles.
"""

import re
from typing import Iterable

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from mdcompile.core.models import CleanUrlsMode, Header, RenderEnv
from mdcompile.core.parse import strip_frontmatter
from mdcompile.core.utils.header import deeply_parse_header
from mdcompile.core.utils.paths import EXTERNAL_URL_RE, is_external
from mdcompile.core.utils.slug import slugify


HOIST_RE = re.compile(r"^<(script|style)(?=(\s|>|$))", re.IGNORECASE)
HREF_RE = re.compile(r"^([^?#]*)(.*)$", re.DOTALL)

ENV_PAGE = "page"
ENV_SLUGS = "slugs"


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": True})


def _hoist_tags(state: StateCore) -> None:
    """Move top-level script/style html blocks out of the token stream."""
    env: RenderEnv = state.env[ENV_PAGE]
    kept = []
    for tok in state.tokens:
        if tok.type == "html_block" and tok.level == 0 and HOIST_RE.match(tok.content.strip()):
            env.data.hoisted_tags.append(tok.content.strip())
            continue
        kept.append(tok)
    state.tokens = kept


def _unique_slug(state: StateCore, title: str) -> str:
    seen: dict[str, int] = state.env.setdefault(ENV_SLUGS, {})
    base = slugify(title) or "heading"
    count = seen.get(base, 0)
    seen[base] = count + 1
    return base if count == 0 else f"{base}-{count}"


def _make_header_rule(levels: frozenset[int]):
    def _collect_headers(state: StateCore) -> None:
        """Give every heading an id and report those at the configured levels."""
        env: RenderEnv = state.env[ENV_PAGE]
        tokens = state.tokens
        for i, tok in enumerate(tokens):
            if tok.type != "heading_open" or i + 1 >= len(tokens):
                continue
            title = deeply_parse_header(tokens[i + 1].content)
            slug = _unique_slug(state, title)
            tok.attrSet("id", slug)
            level = int(tok.tag[1:])
            if level in levels:
                env.data.headers.append(Header(level=level, title=title, slug=slug, link=f"#{slug}"))
    return _collect_headers


def normalize_href(href: str, clean_urls: CleanUrlsMode) -> str:
    """Rewrite a '.md' link target to its output form; other targets pass through."""
    path, suffix = HREF_RE.match(href).groups()
    if path.endswith(".md"):
        path = path[:-3] if clean_urls is not CleanUrlsMode.disabled else path[:-3] + ".html"
    elif path.endswith(".html") and clean_urls is not CleanUrlsMode.disabled:
        path = path[:-5]
    return path + suffix


def _collect_links(state: StateCore) -> None:
    """Record link targets for dead-link validation and rewrite internal ones."""
    env: RenderEnv = state.env[ENV_PAGE]
    for tok in state.tokens:
        if tok.type != "inline" or not tok.children:
            continue
        for child in tok.children:
            if child.type != "link_open":
                continue
            href = child.attrGet("href")
            if not href or href.startswith("#"):
                continue
            if is_external(href):
                child.attrSet("target", "_blank")
                child.attrSet("rel", "noreferrer")
                if EXTERNAL_URL_RE.sub("", href).startswith("//localhost:"):
                    env.data.links.append(href)
                continue
            env.data.links.append(href)
            child.attrSet("href", normalize_href(href, env.clean_urls))


class MarkdownRenderer:
    """Render markdown to HTML while reporting links, headers and hoisted tags."""

    def __init__(self, parser_config: str = "gfm-like", header_levels: Iterable[int] = (2, 3)) -> None:
        self.md = _make_parser(parser_config)
        self.md.core.ruler.push("mdcompile_hoist", _hoist_tags)
        self.md.core.ruler.push("mdcompile_headers", _make_header_rule(frozenset(header_levels)))
        self.md.core.ruler.push("mdcompile_links", _collect_links)

    def render(self, source: str, env: RenderEnv) -> str:
        """Render source into HTML; raises ValueError on invalid frontmatter."""
        frontmatter, body = strip_frontmatter(source)
        env.frontmatter = frontmatter
        env.content = body
        return self.md.render(body, {ENV_PAGE: env})

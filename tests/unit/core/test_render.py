"""Unit tests for core/render.py"""

import pytest

from mdcompile.core.models import CleanUrlsMode, RenderEnv
from mdcompile.core.render import MarkdownRenderer, normalize_href


def test_render_sets_frontmatter_and_content(renderer, make_env, sample_md):
    env = make_env()
    renderer.render(sample_md, env)
    assert env.frontmatter == {"title": "Sample", "description": "A sample page"}
    assert env.content.lstrip().startswith("# Sample Page")
    assert "---" not in env.content.splitlines()[0]


def test_script_and_style_blocks_are_hoisted(renderer, make_env, sample_md):
    env = make_env()
    html = renderer.render(sample_md, env)
    assert len(env.data.hoisted_tags) == 2
    assert env.data.hoisted_tags[0].startswith("<script>")
    assert "const answer = 42" in env.data.hoisted_tags[0]
    assert env.data.hoisted_tags[1].startswith("<style>")
    assert "<script>" not in html
    assert "<style>" not in html


def test_inline_html_is_not_hoisted(renderer, make_env):
    env = make_env()
    html = renderer.render("<div>kept</div>\n", env)
    assert env.data.hoisted_tags == []
    assert "<div>kept</div>" in html


def test_headers_reported_at_configured_levels(renderer, make_env, sample_md):
    env = make_env()
    html = renderer.render(sample_md, env)
    headers = env.data.headers
    assert [(h.level, h.title, h.slug) for h in headers] == [
        (2, "First Section", "first-section"),
        (3, "Nested code Heading", "nested-code-heading"),
    ]
    assert headers[0].link == "#first-section"
    assert '<h1 id="sample-page">' in html
    assert '<h2 id="first-section">' in html


def test_duplicate_heading_slugs_are_unique(renderer, make_env):
    env = make_env()
    html = renderer.render("## Setup\n\n## Setup\n", env)
    assert [h.slug for h in env.data.headers] == ["setup", "setup-1"]
    assert 'id="setup-1"' in html


def test_custom_header_levels(make_env):
    renderer = MarkdownRenderer("gfm-like", header_levels=[1])
    env = make_env()
    renderer.render("# One\n\n## Two\n", env)
    assert [h.title for h in env.data.headers] == ["One"]


def test_internal_links_recorded_and_rewritten(renderer, make_env, sample_md):
    env = make_env()
    html = renderer.render(sample_md, env)
    assert env.data.links == ["./install.md"]
    assert 'href="./install.html"' in html
    assert 'href="https://example.com" target="_blank" rel="noreferrer"' in html


def test_localhost_external_links_recorded(renderer, make_env):
    env = make_env()
    renderer.render("[dev](http://localhost:3000/x) and [#](#anchor) and [mail](mailto:a@b.c)\n", env)
    assert env.data.links == ["http://localhost:3000/x"]


def test_clean_urls_strip_extension(renderer, site):
    env = RenderEnv(path=str(site / "index.md"), relative_path="index.md", clean_urls=CleanUrlsMode.without_subfolders)
    html = renderer.render("[a](./guide/install.md#step) [b](/guide/index.html)\n", env)
    assert 'href="./guide/install#step"' in html
    assert 'href="/guide/index"' in html
    assert env.data.links == ["./guide/install.md#step", "/guide/index.html"]


@pytest.mark.parametrize("href,mode,expected", [
    ("a.md", CleanUrlsMode.disabled, "a.html"),
    ("a.md?x=1#y", CleanUrlsMode.disabled, "a.html?x=1#y"),
    ("a.html", CleanUrlsMode.disabled, "a.html"),
    ("a.md", CleanUrlsMode.with_subfolders, "a"),
    ("img.png", CleanUrlsMode.with_subfolders, "img.png"),
])
def test_normalize_href(href, mode, expected):
    assert normalize_href(href, mode) == expected


def test_render_env_is_per_call(renderer, make_env):
    """Side-channel data never leaks between calls sharing one renderer."""
    first, second = make_env(), make_env()
    renderer.render("[a](./a.md)\n\n## A\n", first)
    renderer.render("[b](./b.md)\n\n## A\n", second)
    assert first.data.links == ["./a.md"]
    assert second.data.links == ["./b.md"]
    assert [h.slug for h in second.data.headers] == ["a"]


def test_invalid_frontmatter_raises(renderer, make_env):
    with pytest.raises(ValueError):
        renderer.render("---\ntitle: [bad\n---\n# x\n", make_env())

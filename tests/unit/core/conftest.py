"""Shared fixtures for core unit tests"""

import pytest

from mdcompile.core.models import RenderEnv
from mdcompile.core.render import MarkdownRenderer


SAMPLE_MD = """\
---
title: Sample
description: A sample page
---

# Sample Page

Intro with a [guide link](./install.md) and an [external](https://example.com).

## First Section

<script>
const answer = 42
</script>

<style>
h1 { color: red; }
</style>

### Nested `code` Heading

Text mentioning process.env.NODE_ENV.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="renderer")
def renderer_fixture():
    return MarkdownRenderer("gfm-like")


@pytest.fixture(name="site")
def site_fixture(tmp_path):
    """A small docs tree: index, guide/index, guide/install and a public dir."""
    src = tmp_path / "docs"
    (src / "guide").mkdir(parents=True)
    (src / "public").mkdir()
    (src / "index.md").write_text("# Home\n")
    (src / "guide" / "index.md").write_text("# Guide\n")
    (src / "guide" / "install.md").write_text("# Install\n")
    return src


@pytest.fixture(name="make_env")
def make_env_fixture(site):
    def _make(rel: str = "guide/index.md") -> RenderEnv:
        return RenderEnv(path=str(site / rel), relative_path=rel)
    return _make

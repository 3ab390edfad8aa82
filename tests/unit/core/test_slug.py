"""Unit tests for core/utils/slug.py"""

import pytest

from mdcompile.core.utils.slug import slugify


@pytest.mark.parametrize("text,expected", [
    ("Getting Started", "getting-started"),
    ("First Section", "first-section"),
    ("Nested code Heading", "nested-code-heading"),
    ("What's new?", "whats-new"),
    ("snake_case_title", "snake-case-title"),
    ("", ""),
])
def test_slugify_heading_titles(text, expected):
    """slugify turns heading text into anchor ids."""
    assert slugify(text) == expected


def test_slugify_collapses_hyphens():
    """slugify collapses runs of separators into one hyphen."""
    assert slugify("a -- b") == "a-b"

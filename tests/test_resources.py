"""Tests for MCP resources."""

import pytest

from blog_mcp.content import PostLibrary
from blog_mcp.resources import get_post_resource, get_posts_resource, get_tags_resource


@pytest.fixture
def library(tmp_path):
    """Create a library with two posts."""
    root = tmp_path / "posts"
    root.mkdir()
    (root / "first.md").write_text(
        '---\ntitle: "First Post"\npublishDate: "2024-01-01"\ntags: [intro, python]\n---\nHello.'
    )
    (root / "second.md").write_text(
        '---\ntitle: "Second Post"\npublishDate: "2024-02-01"\ntags: [python]\n---\nAgain.'
    )
    library = PostLibrary(root)
    library.reload()
    return library


def test_posts_resource(library):
    text = get_posts_resource(library)
    assert text.startswith("# Blog Posts\n")
    assert "Total posts: 2" in text
    assert "## First Post" in text
    assert "- Slug: `second`" in text
    assert "- Tags: intro, python" in text


def test_posts_resource_empty(tmp_path):
    library = PostLibrary(tmp_path)
    library.reload()
    assert "Total posts: 0" in get_posts_resource(library)


def test_post_resource(library):
    text = get_post_resource(library, "first")
    assert 'title: "First Post"' in text
    assert text.endswith("Hello.")


def test_post_resource_missing(library):
    with pytest.raises(ValueError, match="Post 'nope' not found"):
        get_post_resource(library, "nope")


def test_tags_resource(library):
    text = get_tags_resource(library)
    assert "- `intro` (1 post)" in text
    assert "- `python` (2 posts)" in text


def test_tags_resource_empty(tmp_path):
    library = PostLibrary(tmp_path)
    library.reload()
    assert "No tags found." in get_tags_resource(library)

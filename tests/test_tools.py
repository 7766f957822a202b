"""Tests for MCP tools."""

import asyncio

import pytest
from fastmcp import FastMCP

from blog_mcp.content import PostLibrary
from blog_mcp.tools import register_tools


@pytest.fixture
def posts_root(tmp_path):
    """Create a posts directory with a few posts."""
    root = tmp_path / "posts"
    root.mkdir()

    (root / "getting-started-with-react.md").write_text("""---
title: "Getting Started with React"
publishDate: "2024-01-15T10:00:00Z"
tags: [react, javascript, frontend]
excerpt: "Learn the basics of React"
---
# Getting Started with React

React is a library for building user interfaces.
""")

    (root / "typescript-best-practices.md").write_text("""---
title: "TypeScript Best Practices"
publishDate: "2024-02-01"
tags: [typescript, javascript]
excerpt: "Patterns for maintainable code"
---
Use strict mode everywhere.
""")

    (root / "python-pipelines.md").write_text("""---
title: "Python Data Pipelines"
publishDate: "2024-03-10"
tags: [python]
---
Generators make pipelines lazy. React to backpressure.
""")

    (root / "broken.md").write_text("No frontmatter in this file.")
    return root


@pytest.fixture
def library(posts_root):
    library = PostLibrary(posts_root)
    library.reload()
    return library


@pytest.fixture
def tools(library):
    """Registered tool functions by name."""
    mcp = FastMCP()
    register_tools(mcp, library)
    registered = asyncio.run(mcp.get_tools())
    return {name: tool.fn for name, tool in registered.items()}


def test_all_tools_registered(tools):
    assert set(tools) == {
        "list_posts",
        "read_post",
        "search_posts",
        "posts_by_tag",
        "list_tags",
        "download_post",
        "check_post",
        "import_errors",
    }


class TestListPosts:
    def test_lists_summaries(self, tools):
        posts = tools["list_posts"]()
        assert [p["slug"] for p in posts] == [
            "getting-started-with-react",
            "python-pipelines",
            "typescript-best-practices",
        ]
        assert posts[0] == {
            "slug": "getting-started-with-react",
            "title": "Getting Started with React",
            "tags": ["react", "javascript", "frontend"],
            "publishDate": "2024-01-15T10:00:00Z",
        }


class TestReadPost:
    def test_existing_post(self, tools):
        post = tools["read_post"](slug="typescript-best-practices")
        assert post["exists"] is True
        assert post["error"] is None
        assert post["title"] == "TypeScript Best Practices"
        assert post["excerpt"] == "Patterns for maintainable code"
        assert post["body"] == "Use strict mode everywhere."
        assert post["source_path"] == "typescript-best-practices.md"

    def test_derived_excerpt(self, tools):
        post = tools["read_post"](slug="python-pipelines")
        assert post["excerpt"] == "Generators make pipelines lazy. React to backpressure."

    def test_missing_post(self, tools):
        post = tools["read_post"](slug="nope")
        assert post == {"slug": "nope", "exists": False, "error": "Post not found"}


class TestSearchPosts:
    def test_default_fields(self, tools):
        # python-pipelines matches through its derived excerpt
        results = tools["search_posts"](query="react")
        assert [r["slug"] for r in results] == [
            "getting-started-with-react",
            "python-pipelines",
        ]
        assert "body" not in results[0]

    def test_include_body(self, tools):
        assert tools["search_posts"](query="user interfaces") == []
        results = tools["search_posts"](query="user interfaces", include_body=True)
        assert [r["slug"] for r in results] == ["getting-started-with-react"]

    def test_fuzzy(self, tools):
        results = tools["search_posts"](query="javascript practices", fuzzy=True)
        assert [r["slug"] for r in results] == ["typescript-best-practices"]

    def test_blank_query(self, tools):
        assert tools["search_posts"](query="  ") == []

    def test_pagination(self, tools):
        results = tools["search_posts"](query="javascript", offset=1, limit=1)
        assert [r["slug"] for r in results] == ["typescript-best-practices"]

    def test_invalid_pagination_returns_empty(self, tools):
        assert tools["search_posts"](query="javascript", limit=0) == []
        assert tools["search_posts"](query="javascript", offset=-1) == []


class TestTags:
    def test_posts_by_tag(self, tools):
        results = tools["posts_by_tag"](tag="JavaScript")
        assert [r["slug"] for r in results] == [
            "getting-started-with-react",
            "typescript-best-practices",
        ]

    def test_list_tags(self, tools):
        assert tools["list_tags"]() == ["frontend", "javascript", "python", "react", "typescript"]


class TestDownloadPost:
    def test_download(self, tools):
        result = tools["download_post"](slug="python-pipelines")
        assert result["exists"] is True
        assert result["filename"] == "python-pipelines.md"
        assert result["content"].startswith('---\ntitle: "Python Data Pipelines"\n')
        assert result["content"].endswith("Generators make pipelines lazy. React to backpressure.")

    def test_download_missing(self, tools):
        result = tools["download_post"](slug="nope")
        assert result["exists"] is False
        assert result["content"] is None
        assert "nope" in result["error"]


class TestCheckPost:
    def test_valid(self, tools):
        result = tools["check_post"](
            content='---\ntitle: "Hi"\npublishDate: "2024-01-01"\ntags: [a]\n---\nBody',
            slug="hi",
        )
        assert result["valid"] is True
        assert result["metadata"] == {
            "title": "Hi",
            "publishDate": "2024-01-01",
            "tags": ["a"],
            "excerpt": "",
            "slug": "hi",
        }

    def test_malformed(self, tools):
        result = tools["check_post"](content="just text")
        assert result["valid"] is False
        assert result["field"] is None
        assert "missing frontmatter" in result["error"]

    def test_missing_field(self, tools):
        result = tools["check_post"](content="---\ntitle: Hi\n---\nBody")
        assert result["valid"] is False
        assert result["field"] == "publishDate"


def test_import_errors(tools):
    errors = tools["import_errors"]()
    assert len(errors) == 1
    assert errors[0]["path"] == "broken.md"
    assert "missing frontmatter" in errors[0]["error"]

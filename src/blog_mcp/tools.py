"""MCP tools for blogMCP server.

This module defines the tools exposed by the MCP server:
- list_posts: Summaries of every post
- read_post: Full content of one post
- search_posts: Substring search over selected post fields
- posts_by_tag: Posts carrying a tag
- list_tags: Every tag in use
- download_post: Post as a markdown file with frontmatter
- check_post: Validate raw post text without importing it
- import_errors: Post files that could not be loaded
"""

import logging

from fastmcp import FastMCP

from blog_mcp.content import (
    DocumentNotFoundError,
    MalformedInputError,
    MissingFieldError,
    PostLibrary,
    QuerySpec,
    parse_document,
)

logger = logging.getLogger(__name__)


def register_tools(mcp: FastMCP, library: PostLibrary) -> None:
    """Register all tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        library: Loaded post library to query
    """

    @mcp.tool()
    def list_posts() -> list[dict]:
        """List every post.

        Returns:
            List of post summaries with slug, title, tags and publishDate
        """
        return [summary.to_dict() for summary in library.summaries()]

    @mcp.tool()
    def read_post(slug: str) -> dict:
        """Read a complete post.

        Args:
            slug: Post slug (e.g., "getting-started-with-react")

        Returns:
            Post with slug, title, excerpt, publishDate, tags, body and
            source_path, plus exists/error fields
        """
        document = library.get(slug)
        if document is None:
            return {"slug": slug, "exists": False, "error": "Post not found"}

        return {**document.to_dict(), "exists": True, "error": None}

    @mcp.tool()
    def search_posts(
        query: str,
        include_title: bool = True,
        include_excerpt: bool = True,
        include_body: bool = False,
        include_tags: bool = True,
        case_sensitive: bool = False,
        fuzzy: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """Search posts by substring.

        Matching is case-insensitive unless case_sensitive is set. With
        fuzzy=False the whole query must appear as written; with fuzzy=True
        every word of the query must appear somewhere, in any order.
        Results keep post order; nothing is ranked.

        Args:
            query: Text to look for; a blank query returns no posts
            include_title: Search post titles (default: True)
            include_excerpt: Search excerpts (default: True)
            include_body: Search the full body (default: False)
            include_tags: Search tags (default: True)
            case_sensitive: Match case exactly (default: False)
            fuzzy: Match all words independently (default: False)
            limit: Maximum number of results (default: all)
            offset: Number of matches to skip (default: 0)

        Returns:
            List of post summaries
        """
        try:
            spec = QuerySpec(
                query=query,
                include_title=include_title,
                include_excerpt=include_excerpt,
                include_body=include_body,
                include_tags=include_tags,
                case_sensitive=case_sensitive,
                fuzzy=fuzzy,
                limit=limit,
                offset=offset,
            )
        except ValueError as e:
            logger.warning("Rejected search request: %s", e)
            return []

        return [summary.to_dict() for summary in library.search(spec)]

    @mcp.tool()
    def posts_by_tag(tag: str) -> list[dict]:
        """List posts carrying a tag (case-insensitive exact match).

        Args:
            tag: Tag to filter by

        Returns:
            List of post summaries
        """
        return [summary.to_dict() for summary in library.by_tag(tag)]

    @mcp.tool()
    def list_tags() -> list[str]:
        """List every distinct tag, sorted."""
        return library.tags()

    @mcp.tool()
    def download_post(slug: str) -> dict:
        """Get a post as a markdown file with its frontmatter.

        Args:
            slug: Post slug

        Returns:
            Dict with slug, filename, content, exists and error
        """
        try:
            content = library.markdown(slug)
        except DocumentNotFoundError as e:
            return {
                "slug": slug,
                "filename": None,
                "content": None,
                "exists": False,
                "error": str(e),
            }

        return {
            "slug": slug,
            "filename": f"{slug}.md",
            "content": content,
            "exists": True,
            "error": None,
        }

    @mcp.tool()
    def check_post(content: str, slug: str | None = None) -> dict:
        """Check whether raw post text can be imported.

        Args:
            content: Full post text including the --- frontmatter block
            slug: Optional slug that overrides the one in the frontmatter

        Returns:
            Dict with:
            - valid: Whether the post parses
            - error: Error message (if invalid)
            - field: Name of the missing field (if one is missing)
            - metadata: Parsed title, publishDate, tags, excerpt and slug
        """
        try:
            parsed = parse_document(content, slug_override=slug)
        except MissingFieldError as e:
            return {"valid": False, "error": str(e), "field": e.field, "metadata": None}
        except MalformedInputError as e:
            return {"valid": False, "error": str(e), "field": None, "metadata": None}

        metadata = parsed.metadata
        return {
            "valid": True,
            "error": None,
            "field": None,
            "metadata": {
                "title": metadata.title,
                "publishDate": metadata.publish_date,
                "tags": list(metadata.tags),
                "excerpt": metadata.excerpt,
                "slug": metadata.slug,
            },
        }

    @mcp.tool()
    def import_errors() -> list[dict]:
        """List post files that failed to load.

        Returns:
            List of dicts with path and error
        """
        return [
            {"path": path, "error": error}
            for path, error in sorted(library.failures.items())
        ]

"""MCP Resources for blogMCP.

Resources expose the loaded posts as read-only URIs.
"""

from blog_mcp.content import PostLibrary
from blog_mcp.content.errors import DocumentNotFoundError


def get_posts_resource(library: PostLibrary) -> str:
    """Resource: blog://posts

    Lists all posts with their date and tags.
    """
    summaries = library.summaries()

    result_lines = ["# Blog Posts\n"]
    result_lines.append(f"Total posts: {len(summaries)}\n")
    result_lines.append("\n")

    for summary in summaries:
        tags = ", ".join(summary.tags) if summary.tags else "none"
        result_lines.append(f"## {summary.title}\n")
        result_lines.append(f"- Slug: `{summary.slug}`\n")
        result_lines.append(f"- Published: {summary.publish_date}\n")
        result_lines.append(f"- Tags: {tags}\n")
        result_lines.append("\n")

    return "".join(result_lines)


def get_post_resource(library: PostLibrary, slug: str) -> str:
    """Resource: blog://posts/{slug}

    The post as markdown with its frontmatter.
    """
    try:
        return library.markdown(slug)
    except DocumentNotFoundError as e:
        raise ValueError(f"Post '{slug}' not found") from e


def get_tags_resource(library: PostLibrary) -> str:
    """Resource: blog://tags"""
    tags = library.tags()
    if not tags:
        return "# Tags\n\nNo tags found.\n"

    lines = ["# Tags\n\n"]
    for tag in tags:
        count = len(library.by_tag(tag))
        post_word = "post" if count == 1 else "posts"
        lines.append(f"- `{tag}` ({count} {post_word})\n")
    return "".join(lines)


def register_resources(mcp, library: PostLibrary):
    """Register all resources with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        library: Loaded post library
    """

    @mcp.resource("blog://posts")
    def list_posts_resource():
        """List all posts."""
        return get_posts_resource(library)

    @mcp.resource("blog://posts/{slug}")
    def post_resource(slug: str):
        """Read a post as markdown."""
        return get_post_resource(library, slug)

    @mcp.resource("blog://tags")
    def tags_resource():
        """List all tags with post counts."""
        return get_tags_resource(library)

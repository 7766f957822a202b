"""
Content module for blogMCP.

Parses posts (frontmatter + markdown body) and answers queries over the
loaded collection: free-text search, exact tag filtering and tag listing.
"""

from blog_mcp.content.errors import (
    DocumentError,
    DocumentNotFoundError,
    MalformedInputError,
    MissingFieldError,
)
from blog_mcp.content.library import PostLibrary
from blog_mcp.content.loader import PostFile, load_document, walk_posts_root
from blog_mcp.content.models import (
    Document,
    DocumentMetadata,
    DocumentSummary,
    ParsedDocument,
    QuerySpec,
)
from blog_mcp.content.parser import (
    derive_excerpt,
    derive_slug,
    parse_document,
    serialize_document,
    to_document,
    validate_document,
)
from blog_mcp.content.search import collect_tags, filter_by_tag, find_matches, search

__all__ = [
    "Document",
    "DocumentError",
    "DocumentMetadata",
    "DocumentNotFoundError",
    "DocumentSummary",
    "MalformedInputError",
    "MissingFieldError",
    "ParsedDocument",
    "PostFile",
    "PostLibrary",
    "QuerySpec",
    "collect_tags",
    "derive_excerpt",
    "derive_slug",
    "filter_by_tag",
    "find_matches",
    "load_document",
    "parse_document",
    "search",
    "serialize_document",
    "to_document",
    "validate_document",
    "walk_posts_root",
]

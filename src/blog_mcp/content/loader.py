"""Discover post files under the posts root and load them as documents."""

import hashlib
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path

from blog_mcp.content.models import Document
from blog_mcp.content.parser import (
    DEFAULT_EXCERPT_LENGTH,
    derive_excerpt,
    parse_document,
    to_document,
)


@dataclass
class PostFile:
    """Information about a discovered post file."""

    path: Path  # Absolute path
    relative_path: str  # Relative to the posts root
    slug: str  # File stem
    mtime: float
    content_hash: str


def compute_hash(content: bytes) -> str:
    """Compute SHA-256 hash of content."""
    return hashlib.sha256(content).hexdigest()


def walk_posts_root(posts_root: Path) -> Iterator[PostFile]:
    """
    Walk the posts root and yield a PostFile for each .md file.

    Posts may be nested in subdirectories (e.g. by year); the slug is
    always the file stem:
    <posts_root>/
    ├── hello-world.md
    └── 2024/
        └── typescript-tips.md
    """
    if not posts_root.exists():
        return

    for file_path in sorted(posts_root.rglob("*.md")):
        if not file_path.is_file():
            continue

        # Skip hidden files and directories
        relative_parts = file_path.relative_to(posts_root).parts
        if any(part.startswith(".") for part in relative_parts):
            continue

        content = file_path.read_bytes()

        yield PostFile(
            path=file_path,
            relative_path=file_path.relative_to(posts_root).as_posix(),
            slug=file_path.stem,
            mtime=file_path.stat().st_mtime,
            content_hash=compute_hash(content),
        )


def load_document(
    post_file: PostFile,
    *,
    derive_excerpts: bool = True,
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> Document:
    """
    Read and parse a post file.

    Args:
        post_file: File discovered by walk_posts_root
        derive_excerpts: Fill an empty excerpt from the body
        excerpt_length: Maximum length of a derived excerpt

    Raises:
        MalformedInputError, MissingFieldError: If the file cannot be parsed
    """
    raw_text = post_file.path.read_text(encoding="utf-8")
    parsed = parse_document(raw_text, slug_override=post_file.slug)
    document = to_document(parsed, source_path=post_file.relative_path)

    if derive_excerpts and not document.excerpt:
        return replace(document, excerpt=derive_excerpt(document.body, excerpt_length))
    return document

"""Parser for post frontmatter, plus slug and excerpt derivation."""

import hashlib
import re

from blog_mcp.content.errors import MalformedInputError, MissingFieldError
from blog_mcp.content.models import Document, DocumentMetadata, ParsedDocument

# Opening ---, optional metadata lines, closing --- on its own line, then body.
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n(.*))?\Z",
    re.DOTALL,
)

REQUIRED_FIELDS = ("title", "publishDate")

# Excerpt truncation policy. Heuristic values kept for compatibility with
# existing post listings.
DEFAULT_EXCERPT_LENGTH = 150
EXCERPT_BOUNDARY_RATIO = 0.8
ELLIPSIS = "..."

# Markdown stripping for excerpts, applied in this order
_FENCED_CODE = re.compile(r"```.*?```", re.DOTALL)
_HEADING = re.compile(r"^#+\s+", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_ITALIC = re.compile(r"\*(.*?)\*")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_NEWLINES = re.compile(r"(?:\r?\n)+")

_SLUG_INVALID = re.compile(r"[^a-z0-9\s-]")
_SLUG_WHITESPACE = re.compile(r"\s+")
_SLUG_HYPHENS = re.compile(r"-+")


def _strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _decode_tags(value: str) -> tuple[str, ...]:
    """Decode a tags value: ``[a, b]`` is a list, anything else a single tag."""
    if value.startswith("[") and value.endswith("]"):
        items = (_strip_quotes(item.strip()) for item in value[1:-1].split(","))
        return tuple(item for item in items if item)
    return (value,) if value else ()


def _parse_metadata(block: str) -> dict[str, str | tuple[str, ...]]:
    """Parse ``key: value`` lines in textual order.

    A later duplicate key overwrites an earlier one (last write wins).
    Lines without a colon and unrecognized keys are ignored.
    """
    fields: dict[str, str | tuple[str, ...]] = {}
    for line in block.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = _strip_quotes(value.strip())

        if key == "tags":
            fields["tags"] = _decode_tags(value)
        elif key in ("title", "publishDate", "excerpt", "slug"):
            fields[key] = value
    return fields


def parse_document(raw_text: str, slug_override: str | None = None) -> ParsedDocument:
    """
    Split raw post text into frontmatter metadata and body.

    Args:
        raw_text: Full post text, starting with a ``---`` delimiter line
        slug_override: Slug supplied by the caller (e.g. from the file name);
            takes precedence over a ``slug`` key in the metadata

    Returns:
        ParsedDocument with decoded metadata and the trimmed body

    Raises:
        MalformedInputError: If the text has no frontmatter delimiter pair
        MissingFieldError: If title or publishDate is missing or empty
    """
    match = FRONTMATTER_PATTERN.match(raw_text)
    if not match:
        raise MalformedInputError("Invalid markdown file: missing frontmatter")

    block, body = match.group(1) or "", match.group(2) or ""
    fields = _parse_metadata(block)

    # Checked only after every line has been read
    for name in REQUIRED_FIELDS:
        if not fields.get(name):
            raise MissingFieldError(name)

    slug = slug_override or fields.get("slug") or None
    metadata = DocumentMetadata(
        title=fields["title"],
        publish_date=fields["publishDate"],
        tags=fields.get("tags", ()),
        excerpt=fields.get("excerpt", ""),
        slug=slug,
    )
    return ParsedDocument(metadata=metadata, body=body.strip())


def validate_document(raw_text: str) -> bool:
    """Return True if the text parses into a document."""
    try:
        parse_document(raw_text)
    except (MalformedInputError, MissingFieldError):
        return False
    return True


def derive_slug(title: str) -> str:
    """
    Build a URL-safe slug from a title.

    May return an empty string when the title has no letters, digits,
    whitespace or hyphens left after lowercasing.
    """
    slug = _SLUG_INVALID.sub("", title.lower())
    slug = _SLUG_WHITESPACE.sub("-", slug)
    slug = _SLUG_HYPHENS.sub("-", slug)
    return slug.strip("-")


def fallback_slug(title: str) -> str:
    """Stable slug for titles that derive to an empty slug."""
    digest = hashlib.sha256(title.encode("utf-8")).hexdigest()
    return f"post-{digest[:8]}"


def derive_excerpt(body: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """
    Build a plain-text excerpt from a markdown body.

    Fenced code blocks are dropped, heading, emphasis, link and inline code
    markup is removed, and newlines collapse to single spaces. Text longer
    than ``max_length`` is cut at the last whitespace if that falls within
    the final 20% of the limit, otherwise exactly at the limit, and an
    ellipsis is appended.
    """
    text = _FENCED_CODE.sub("", body)
    text = _HEADING.sub("", text)
    text = _BOLD.sub(r"\1", text)
    text = _ITALIC.sub(r"\1", text)
    text = _LINK.sub(r"\1", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _NEWLINES.sub(" ", text).strip()

    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    boundary = max(truncated.rfind(" "), truncated.rfind("\t"))
    if boundary >= max_length * EXCERPT_BOUNDARY_RATIO:
        return truncated[:boundary] + ELLIPSIS
    return truncated + ELLIPSIS


def to_document(
    parsed: ParsedDocument,
    slug: str | None = None,
    source_path: str | None = None,
) -> Document:
    """Build a Document from parsed text, resolving its slug.

    Slug precedence: explicit argument, metadata slug, slug derived from the
    title, then a hash-based fallback when the title derives to nothing.
    """
    metadata = parsed.metadata
    resolved = slug or metadata.slug or derive_slug(metadata.title)
    if not resolved:
        resolved = fallback_slug(metadata.title)

    return Document(
        slug=resolved,
        title=metadata.title,
        publish_date=metadata.publish_date,
        tags=metadata.tags,
        excerpt=metadata.excerpt,
        body=parsed.body,
        source_path=source_path,
    )


def serialize_document(document: Document) -> str:
    """Render a document back into frontmatter + body text."""
    tags = ", ".join(f'"{tag}"' for tag in document.tags)
    lines = [
        "---",
        f'title: "{document.title}"',
        f'publishDate: "{document.publish_date}"',
        f"tags: [{tags}]",
        f'excerpt: "{document.excerpt}"',
        f'slug: "{document.slug}"',
        "---",
        "",
        document.body,
    ]
    return "\n".join(lines)

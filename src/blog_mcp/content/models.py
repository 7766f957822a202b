"""Data models for blog content."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentMetadata:
    """Decoded frontmatter block."""

    title: str
    publish_date: str
    tags: tuple[str, ...] = ()
    excerpt: str = ""
    slug: str | None = None


@dataclass(frozen=True)
class ParsedDocument:
    """Frontmatter metadata plus the untouched body."""

    metadata: DocumentMetadata
    body: str


@dataclass(frozen=True)
class DocumentSummary:
    """Lightweight projection returned by listings and searches (no body)."""

    slug: str
    title: str
    tags: tuple[str, ...]
    publish_date: str

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "tags": list(self.tags),
            "publishDate": self.publish_date,
        }


@dataclass(frozen=True)
class Document:
    """A blog post. Instances are never mutated after creation."""

    slug: str
    title: str
    publish_date: str
    tags: tuple[str, ...] = ()
    excerpt: str = ""
    body: str = ""
    source_path: str | None = None  # Relative to the posts root

    def summary(self) -> DocumentSummary:
        return DocumentSummary(
            slug=self.slug,
            title=self.title,
            tags=self.tags,
            publish_date=self.publish_date,
        )

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "excerpt": self.excerpt,
            "publishDate": self.publish_date,
            "tags": list(self.tags),
            "body": self.body,
            "source_path": self.source_path,
        }


@dataclass(frozen=True)
class QuerySpec:
    """A single search request.

    Field flags select which parts of a document form the searchable text.
    ``fuzzy`` switches from contiguous substring matching to conjunctive
    substring matching: every whitespace-separated query word must appear
    somewhere in the text, in any order. There is no edit-distance matching.
    """

    query: str
    include_title: bool = True
    include_excerpt: bool = True
    include_body: bool = False
    include_tags: bool = True
    case_sensitive: bool = False
    fuzzy: bool = False
    limit: int | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be a positive integer, got {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")

"""Search and tag filtering over an in-memory post collection.

Every call is a full linear scan of the collection. Matches are boolean:
there is no scoring, and results keep the collection's order.
"""

from collections.abc import Iterable, Sequence

from blog_mcp.content.models import Document, DocumentSummary, QuerySpec


def searchable_text(document: Document, spec: QuerySpec) -> str:
    """Concatenate the fields selected by the spec, in fixed order."""
    parts: list[str] = []
    if spec.include_title:
        parts.append(document.title)
    if spec.include_excerpt:
        parts.append(document.excerpt)
    if spec.include_body:
        parts.append(document.body)
    if spec.include_tags:
        parts.append(" ".join(document.tags))
    return " ".join(parts)


def _contains_all_words(text: str, words: list[str]) -> bool:
    """Conjunctive substring match: every word appears, order irrelevant."""
    return all(word in text for word in words)


def _matches(document: Document, spec: QuerySpec) -> bool:
    text = searchable_text(document, spec)
    query = spec.query
    if not spec.case_sensitive:
        text = text.lower()
        query = query.lower()

    if spec.fuzzy:
        return _contains_all_words(text, query.split())
    return query in text


def find_matches(documents: Sequence[Document], spec: QuerySpec) -> list[Document]:
    """
    Return the documents matching a query, paginated.

    A blank query returns no documents rather than all of them.

    Args:
        documents: Collection to scan
        spec: Query, field selection, matching mode and pagination

    Returns:
        Matching documents in collection order, after offset and limit
    """
    if not spec.query.strip():
        return []

    matches = [doc for doc in documents if _matches(doc, spec)]

    end = spec.offset + spec.limit if spec.limit is not None else None
    return matches[spec.offset:end]


def search(documents: Sequence[Document], spec: QuerySpec) -> list[DocumentSummary]:
    """Search and return summaries only."""
    return [doc.summary() for doc in find_matches(documents, spec)]


def documents_with_tag(documents: Iterable[Document], tag: str) -> list[Document]:
    """Documents carrying ``tag``, compared case-insensitively and exactly."""
    if not tag.strip():
        return []

    wanted = tag.lower()
    return [
        doc for doc in documents
        if any(doc_tag.lower() == wanted for doc_tag in doc.tags)
    ]


def filter_by_tag(documents: Iterable[Document], tag: str) -> list[DocumentSummary]:
    """Summaries of the documents carrying ``tag``."""
    return [doc.summary() for doc in documents_with_tag(documents, tag)]


def collect_tags(documents: Iterable[Document]) -> list[str]:
    """All distinct tags in the collection, sorted."""
    return sorted({tag for doc in documents for tag in doc.tags})

"""In-memory post library kept in sync with the posts directory."""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from blog_mcp.content.errors import DocumentError, DocumentNotFoundError
from blog_mcp.content.loader import PostFile, load_document, walk_posts_root
from blog_mcp.content.models import Document, DocumentSummary, QuerySpec
from blog_mcp.content.parser import DEFAULT_EXCERPT_LENGTH, serialize_document
from blog_mcp.content.search import collect_tags, filter_by_tag, search

logger = logging.getLogger(__name__)


@dataclass
class _FileState:
    mtime: float
    content_hash: str
    slug: str | None  # None when the file failed to load
    duplicate: bool = False  # Failed only because another file owns the slug


class PostLibrary:
    """
    Collection of posts loaded from the posts root.

    The filesystem is always the source of truth; the library can be rebuilt
    at any time with reload().

    Thread Safety:
        reload() and sync() are serialized by a lock and publish a new
        collection in one assignment. Readers work on whatever collection
        was current when they started, so they never see a partial load.
    """

    def __init__(
        self,
        posts_root: Path,
        *,
        derive_excerpts: bool = True,
        excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
    ):
        """
        Initialize an empty library.

        Args:
            posts_root: Directory holding the .md posts
            derive_excerpts: Fill empty excerpts from the post body
            excerpt_length: Maximum length of derived excerpts
        """
        self.posts_root = posts_root
        self.derive_excerpts = derive_excerpts
        self.excerpt_length = excerpt_length
        self._documents: dict[str, Document] = {}
        self._files: dict[str, _FileState] = {}
        self._failures: dict[str, str] = {}
        self._write_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def failures(self) -> dict[str, str]:
        """Files that could not be imported, by relative path."""
        return dict(self._failures)

    def reload(self) -> int:
        """
        Rebuild the library from disk.

        Returns the number of documents loaded.
        """
        with self._write_lock:
            logger.info("Loading posts from %s", self.posts_root)
            self._scan(reuse=False)
            logger.info(
                "Load complete: %d posts, %d failures",
                len(self._documents),
                len(self._failures),
            )
            return len(self._documents)

    def sync(self) -> tuple[int, int, int]:
        """
        Sync the library with filesystem changes.

        Uses mtime as fast-path and content hash for edge cases.

        Returns:
            Tuple of (added, updated, removed) counts.
        """
        with self._write_lock:
            logger.debug("Syncing library with filesystem")
            return self._scan(reuse=True)

    def _scan(self, reuse: bool) -> tuple[int, int, int]:
        previous_files = self._files if reuse else {}
        previous_docs = self._documents
        previous_failures = self._failures

        documents: dict[str, Document] = {}
        files: dict[str, _FileState] = {}
        failures: dict[str, str] = {}
        added = 0
        updated = 0

        for post_file in walk_posts_root(self.posts_root):
            path = post_file.relative_path
            state = previous_files.get(path)

            if state is not None and self._unchanged(state, post_file):
                # Duplicate-slug failures are retried; the owning file may be gone
                if state.slug is None and not state.duplicate and path in previous_failures:
                    failures[path] = previous_failures[path]
                    files[path] = _FileState(post_file.mtime, post_file.content_hash, None)
                    continue
                if state.slug is not None and state.slug not in documents:
                    documents[state.slug] = previous_docs[state.slug]
                    files[path] = _FileState(post_file.mtime, post_file.content_hash, state.slug)
                    continue

            document, duplicate = self._load(post_file, documents, failures)
            slug = document.slug if document is not None else None
            files[path] = _FileState(post_file.mtime, post_file.content_hash, slug, duplicate)
            if document is not None:
                if state is None or state.slug is None:
                    added += 1
                else:
                    updated += 1

        removed = sum(
            1
            for path, state in previous_files.items()
            if state.slug is not None and (path not in files or files[path].slug is None)
        )

        self._documents = documents
        self._files = files
        self._failures = failures
        return added, updated, removed

    @staticmethod
    def _unchanged(state: _FileState, post_file: PostFile) -> bool:
        if abs(post_file.mtime - state.mtime) <= 0.001:
            return True
        # Only mtime changed
        return state.content_hash == post_file.content_hash

    def _load(
        self,
        post_file: PostFile,
        documents: dict[str, Document],
        failures: dict[str, str],
    ) -> tuple[Document | None, bool]:
        """Load one file into ``documents``.

        Returns the document (None on failure) and whether it failed only
        because its slug is already taken.
        """
        path = post_file.relative_path
        try:
            document = load_document(
                post_file,
                derive_excerpts=self.derive_excerpts,
                excerpt_length=self.excerpt_length,
            )
        except (DocumentError, OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path, e)
            failures[path] = str(e)
            return None, False

        existing = documents.get(document.slug)
        if existing is not None:
            message = f"Duplicate slug '{document.slug}' (already used by {existing.source_path})"
            logger.warning("Skipping %s: %s", path, message)
            failures[path] = message
            return None, True

        documents[document.slug] = document
        return document, False

    def documents(self) -> list[Document]:
        """All documents in load order."""
        return list(self._documents.values())

    def get(self, slug: str) -> Document | None:
        return self._documents.get(slug)

    def summaries(self) -> list[DocumentSummary]:
        return [doc.summary() for doc in self.documents()]

    def search(self, spec: QuerySpec) -> list[DocumentSummary]:
        return search(self.documents(), spec)

    def by_tag(self, tag: str) -> list[DocumentSummary]:
        return filter_by_tag(self.documents(), tag)

    def tags(self) -> list[str]:
        return collect_tags(self.documents())

    def markdown(self, slug: str) -> str:
        """Serialized frontmatter + body for a post.

        Raises:
            DocumentNotFoundError: If no post has this slug
        """
        document = self.get(slug)
        if document is None:
            raise DocumentNotFoundError(slug)
        return serialize_document(document)

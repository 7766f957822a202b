"""Errors raised while turning raw post text into documents."""


class DocumentError(Exception):
    """Base class for document errors."""

    pass


class MalformedInputError(DocumentError):
    """Raised when the text has no recognizable frontmatter block."""

    pass


class MissingFieldError(DocumentError):
    """Raised when a required frontmatter field is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class DocumentNotFoundError(DocumentError):
    """Raised when a slug is not present in the library."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Post not found: {slug}")

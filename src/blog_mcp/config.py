"""Configuration module for blogMCP.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from blog_mcp.content.parser import DEFAULT_EXCERPT_LENGTH


def _parse_int(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid {name} value '{value}': {e}") from e


@dataclass
class Config:
    """Application configuration."""

    posts_root: Path
    port: int
    auth_token: str | None
    sync_interval: int
    derive_excerpts: bool
    excerpt_length: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        default_root = str(Path.home() / ".blog" / "posts")
        posts_root = Path(os.getenv("BLOG_POSTS_ROOT", default_root)).expanduser()

        port = _parse_int("BLOG_PORT", "8080")
        if not 1 <= port <= 65535:
            raise ValueError(f"Invalid BLOG_PORT value '{port}': Port must be between 1 and 65535")

        # Auth token - must be at least 32 bytes if set
        auth_token = os.getenv("BLOG_AUTH_TOKEN")
        if auth_token is not None:
            if len(auth_token) < 32:
                raise ValueError(
                    "BLOG_AUTH_TOKEN must be at least 32 characters for security"
                )

        # 0 disables background sync
        sync_interval = _parse_int("BLOG_SYNC_INTERVAL", "30")
        if sync_interval < 0:
            raise ValueError(
                f"Invalid BLOG_SYNC_INTERVAL value '{sync_interval}': Sync interval must be >= 0"
            )

        derive_excerpts = os.getenv("BLOG_DERIVE_EXCERPTS", "true").lower() not in (
            "0",
            "false",
            "no",
        )

        excerpt_length = _parse_int("BLOG_EXCERPT_LENGTH", str(DEFAULT_EXCERPT_LENGTH))
        if excerpt_length < 1:
            raise ValueError(
                f"Invalid BLOG_EXCERPT_LENGTH value '{excerpt_length}': Excerpt length must be positive"
            )

        return cls(
            posts_root=posts_root,
            port=port,
            auth_token=auth_token,
            sync_interval=sync_interval,
            derive_excerpts=derive_excerpts,
            excerpt_length=excerpt_length,
        )

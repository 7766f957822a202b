"""Main entry point for blogMCP server."""

import argparse
import logging
import sys

from fastmcp import FastMCP

from blog_mcp.auth import get_auth_provider
from blog_mcp.config import Config
from blog_mcp.content import PostLibrary
from blog_mcp.resources import register_resources
from blog_mcp.sync import SyncManager
from blog_mcp.tools import register_tools

logger = logging.getLogger(__name__)


def create_library(config: Config) -> PostLibrary:
    """Create a post library from configuration and load it."""
    library = PostLibrary(
        config.posts_root,
        derive_excerpts=config.derive_excerpts,
        excerpt_length=config.excerpt_length,
    )
    count = library.reload()
    logger.info("Loaded %d posts from %s", count, config.posts_root)
    return library


def create_server(config: Config, library: PostLibrary | None = None) -> FastMCP:
    """Create and configure the MCP server with all components.

    Args:
        config: Configuration instance with all settings.
        library: Already loaded library; loaded from config.posts_root if None.
    """
    auth_provider = get_auth_provider(config)

    mcp = FastMCP(
        name="blogMCP",
        instructions=(
            "blogMCP serves a collection of blog posts. Use search_posts to find "
            "posts by text, posts_by_tag and list_tags to browse by topic, and "
            "read_post or the blog://posts resources to read a post."
        ),
        auth=auth_provider,
    )

    if library is None:
        library = create_library(config)

    logger.info("Registering resources...")
    register_resources(mcp, library)

    logger.info("Registering tools...")
    register_tools(mcp, library)

    logger.info("Server configured successfully")
    return mcp


def check_posts(config: Config) -> int:
    """Load every post and report the ones that fail. Returns an exit code."""
    library = create_library(config)
    failures = library.failures
    for path, error in sorted(failures.items()):
        logger.error("%s: %s", path, error)
    if failures:
        logger.error(
            "%d of %d post files failed to load",
            len(failures),
            len(library) + len(failures),
        )
        return 1
    logger.info("All %d posts loaded", len(library))
    return 0


def main() -> None:
    """Main function - starts the MCP server."""
    # Configure logging here to avoid side effects on import
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="blogMCP - MCP server for blog posts")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Load all posts, report files that fail to parse, and exit",
    )
    parser.add_argument(
        "--no-sync",
        action="store_true",
        help="Disable background sync with the posts directory",
    )
    args = parser.parse_args()

    try:
        config = Config.from_env()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    if args.check:
        sys.exit(check_posts(config))

    sync_enabled = bool(config.sync_interval) and not args.no_sync

    logger.info("=" * 50)
    logger.info("blogMCP starting...")
    logger.info("  POSTS_ROOT: %s", config.posts_root)
    logger.info("  PORT:       %s", config.port)
    logger.info("  AUTH:       %s", "enabled" if config.auth_token else "disabled")
    logger.info("  SYNC:       %s", f"every {config.sync_interval}s" if sync_enabled else "disabled")
    logger.info("=" * 50)

    sync_manager: SyncManager | None = None
    try:
        library = create_library(config)
        mcp = create_server(config, library)

        if sync_enabled:
            sync_manager = SyncManager(library, config.sync_interval)
            sync_manager.start()

        logger.info("Starting MCP server on port %s...", config.port)
        mcp.run(transport="sse", host="0.0.0.0", port=config.port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception:
        logger.exception("Server error")
        sys.exit(1)
    finally:
        if sync_manager is not None:
            sync_manager.stop()


if __name__ == "__main__":
    main()

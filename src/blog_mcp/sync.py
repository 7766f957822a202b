"""Background sync of the post library.

A daemon thread periodically calls library.sync() so posts added, edited or
deleted on disk show up without restarting the server.
"""

import logging
import threading

from blog_mcp.content import PostLibrary

logger = logging.getLogger(__name__)


class SyncManager:
    """Runs PostLibrary.sync() every ``interval`` seconds in a daemon thread."""

    def __init__(self, library: PostLibrary, interval: int):
        """
        Args:
            library: The library to keep in sync.
            interval: Sync interval in seconds. Must be > 0.
        """
        if interval <= 0:
            raise ValueError(f"Sync interval must be positive, got {interval}")

        self._library = library
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background sync thread."""
        if self.running:
            logger.warning("Sync thread already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._sync_loop,
            name="blog-sync",
            daemon=True,
        )
        self._thread.start()
        logger.info("Sync manager started (interval: %ds)", self._interval)

    def stop(self) -> None:
        """Stop the background sync thread, waiting up to one interval."""
        if not self.running:
            return

        self._stop_event.set()
        self._thread.join(timeout=self._interval + 1)
        if self._thread.is_alive():
            logger.warning("Sync thread did not stop cleanly")
        else:
            logger.info("Sync manager stopped")
        self._thread = None

    def run_once(self) -> None:
        """Sync the library once, logging instead of raising on failure."""
        try:
            added, updated, removed = self._library.sync()
        except Exception:
            logger.exception("Error during post sync")
            return

        if added or updated or removed:
            logger.info(
                "Post sync: %d added, %d updated, %d removed",
                added,
                updated,
                removed,
            )
        else:
            logger.debug("Post sync: no changes detected")

    def _sync_loop(self) -> None:
        # Wait first so stop() right after start() returns immediately
        while not self._stop_event.wait(timeout=self._interval):
            self.run_once()
        logger.debug("Sync loop stopped")

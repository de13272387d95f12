"""
In-process cache of rendered dashboard pages, keyed by path.

Reads populate it, and every successful write evicts the affected path via
revalidate_path() so that the next read goes back to the database. A path
can hold several variants (e.g. one per pagination query); revalidating the
path drops all of them.

The cache lives in process memory: it assumes the app runs as a single
worker. With several uvicorn workers a revalidation only evicts the
worker that handled the write, and the others keep serving stale listings.
"""

import logging
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class PageCache:
    """Thread-safe path -> {variant -> payload} mapping."""

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, path: str, variant: str = "") -> Optional[Any]:
        with self._lock:
            return self._entries.get(path, {}).get(variant)

    def set(self, path: str, payload: Any, variant: str = "") -> None:
        with self._lock:
            self._entries.setdefault(path, {})[variant] = payload

    def revalidate_path(self, path: str) -> None:
        """Evict every cached variant of `path`. Missing paths are a no-op."""
        with self._lock:
            evicted = len(self._entries.pop(path, {}))

        logger.info(f"Revalidated {path} ({evicted} cached variants evicted)")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


# Process-wide instance shared by the routes
page_cache = PageCache()

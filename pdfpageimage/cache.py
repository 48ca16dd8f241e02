"""Thread-safe memo of rendered artifacts for one document session."""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from .types import CacheKey, PageArtifact
from .utils import get_logger

LOGGER = get_logger("pdfpageimage.cache")


class RenderCache:
    """Map :class:`CacheKey` to :class:`PageArtifact`, rendering each key at most once.

    Lookups for different keys proceed independently; concurrent requests for
    the same unseen key wait on a per-key lock so only one of them renders.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, PageArtifact] = {}
        self._key_locks: Dict[CacheKey, threading.Lock] = {}
        self._lock = threading.Lock()

    def _lock_for(self, key: CacheKey) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def get(self, key: CacheKey) -> Optional[PageArtifact]:
        with self._lock:
            return self._entries.get(key)

    def get_or_render(self, key: CacheKey, render_fn: Callable[[], PageArtifact]) -> PageArtifact:
        cached = self.get(key)
        if cached is not None:
            LOGGER.debug("Cache hit for %s", key)
            return cached

        with self._lock_for(key):
            cached = self.get(key)
            if cached is not None:
                return cached
            artifact = render_fn()
            with self._lock:
                self._entries[key] = artifact
            LOGGER.debug("Rendered %s to %s", key, artifact.path)
            return artifact

    def artifacts(self) -> List[PageArtifact]:
        with self._lock:
            return list(self._entries.values())

    def drain(self) -> List[PageArtifact]:
        """Remove and return every stored artifact."""

        with self._lock:
            drained = list(self._entries.values())
            self._entries.clear()
            self._key_locks.clear()
        return drained

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["RenderCache"]

"""Time-boxed in-memory response cache keyed by request URL."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_TTL = 300


class ResponseCache:
    """URL -> payload map whose entries expire after ``ttl`` seconds.

    Owned by a single client; the lock only guards the dict against the
    client's own batch worker threads.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            stored_at, payload = entry
            if self._clock() - stored_at >= self.ttl:
                del self._entries[url]
                return None
            return payload

    def set(self, url: str, value: Any) -> None:
        with self._lock:
            self._entries[url] = (self._clock(), value)

    def invalidate(self, url: str) -> bool:
        with self._lock:
            return self._entries.pop(url, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def prune(self) -> int:
        """Drop expired entries and return how many were removed."""

        with self._lock:
            now = self._clock()
            expired = [url for url, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl]
            for url in expired:
                del self._entries[url]
            return len(expired)

    def __len__(self) -> int:
        self.prune()
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.get(url) is not None

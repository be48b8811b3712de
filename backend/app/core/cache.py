"""In-process result cache with expiry on read and on write.

Owned by the API application (``app.state.cache``) and handed to services
through a dependency. Keys are built with :func:`make_key` so every entry is
scoped to one user and can be dropped when that user's transactions change.
"""

import time
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger()

_MISSING = object()


def make_key(namespace: str, user_id: int, **params: Any) -> str:
    """Build ``namespace:user_id:k1=v1&k2=v2`` with params in sorted order."""
    if ":" in namespace:
        raise ValueError("Cache namespace must not contain ':'")
    query = "&".join(f"{name}={params[name]}" for name in sorted(params))
    return f"{namespace}:{user_id}:{query}"


class TTLCache:
    def __init__(self, default_ttl: float = 120, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key, _MISSING)
        if entry is _MISSING:
            return default
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return default
        return value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store ``value`` for ``ttl`` seconds, dropping every expired entry first."""
        now = self._clock()
        self._sweep(now)
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = (now + ttl, value)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]

    def invalidate(self, key: str) -> bool:
        return self._entries.pop(key, _MISSING) is not _MISSING

    def invalidate_user(self, user_id: int) -> int:
        """Drop every entry scoped to ``user_id``. Returns the number removed."""
        owner = str(user_id)
        stale = [key for key in self._entries if key.split(":", 2)[1] == owner]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Cache invalidated", user_id=user_id, keys=len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

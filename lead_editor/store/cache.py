"""
Time-bounded response cache.

Record reads are cached for a few minutes under a key built from the
endpoint and its parameters. A successful submission evicts every entry
of the record it touched so the next read sees the applied values.
"""

import json
import time
from collections.abc import Callable, Mapping
from typing import Any

from lead_editor.config import DEFAULT_CACHE_TTL_SECONDS
from lead_editor.observability import metrics


def record_endpoint(entity_type: str, record_id: str) -> str:
    """Endpoint path a record is read from ("/room/R001")."""
    return f"/{entity_type}/{record_id}"


def cache_key(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Key for an endpoint and its query parameters ("/room/R001_{}")."""
    return f"{endpoint}_{json.dumps(dict(params or {}), sort_keys=True, default=str)}"


class TTLCache:
    """
    In-process cache whose entries expire `ttl_seconds` after being set.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        """Cached value for `key`, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            metrics.increment_counter(metrics.cache_lookups_total, 1, result="miss")
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            metrics.increment_counter(metrics.cache_lookups_total, 1, result="expired")
            return None

        metrics.increment_counter(metrics.cache_lookups_total, 1, result="hit")
        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value, dropping entries that have already expired."""
        now = self._clock()
        expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl_seconds]
        for k in expired:
            del self._entries[k]
        self._entries[key] = (now, value)

    def invalidate(self, key: str) -> bool:
        """Drop one entry. Returns whether it was present."""
        removed = self._entries.pop(key, None) is not None
        if removed:
            metrics.increment_counter(metrics.cache_invalidations_total)
        return removed

    def invalidate_record(self, entity_type: str, record_id: str) -> int:
        """
        Drop every entry read from the record's endpoint, whatever its parameters.

        Returns:
            Number of entries removed
        """
        prefix = f"{record_endpoint(entity_type, record_id)}_"
        keys = [key for key in self._entries if key.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        if keys:
            metrics.increment_counter(metrics.cache_invalidations_total, len(keys))
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

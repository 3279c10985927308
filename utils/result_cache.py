"""Caller-side cache for scoring and analytics results.

The engines never cache anything themselves. Callers that score or
aggregate large batches repeatedly can wrap the calls with a ResultCache
keyed by the fingerprint of the full input.

On a miss the value is computed outside the lock. Racing misses may compute
the same value twice, but only the first value stored is ever returned, so
cached results never diverge.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Example:
    >>> cache = ResultCache()
    >>> key = fingerprint(config, answers)
    >>> scored = cache.get_or_compute(key, lambda: engine.score(answers))
"""

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _canonical(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _canonical(value.model_dump(mode="json"))
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_canonical(v) for v in value), key=repr)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def fingerprint(*parts: Any) -> str:
    """Return the SHA-256 hex digest of the canonical JSON of ``parts``.

    Equal inputs always give equal fingerprints, whatever the key order of
    the mappings inside them.
    """
    payload = json.dumps(_canonical(list(parts)), sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ResultCache:
    """Thread-safe, first-writer-wins result cache.

    Attributes:
        max_entries: Maximum number of entries kept (oldest evicted first).
            None keeps everything.
        hits: Number of lookups served from the cache.
        misses: Number of lookups that had to compute.
    """

    def __init__(self, max_entries: Optional[int] = 1024):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing it on a miss.

        Args:
            key: Cache key, normally from ``fingerprint``.
            compute: Zero-argument function producing the value.

        Returns:
            The value stored under ``key``. When two callers miss at the
            same time both compute, and both get the first stored value.
        """
        with self._lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]
            self.misses += 1

        value = compute()

        with self._lock:
            if key in self._entries:
                logger.debug(f"Discarding concurrently computed value for {key[:12]}")
                return self._entries[key]
            self._entries[key] = value
            if self.max_entries is not None and len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


# Made with Bob

# File: src/bigfile_explorer/explorer/cache.py

import time
from typing import Callable, Generic, Optional, TypeVar

from ..utils.config import Config

T = TypeVar("T")

class DashboardCache(Generic[T]):
    """Single-entry cache that holds one value for ``ttl`` seconds.

    The entry is either empty or a complete value; ``set`` replaces it whole.
    """

    def __init__(self, ttl: float = Config.CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self.data: Optional[T] = None
        self.last_updated: float = 0.0

    def is_expired(self) -> bool:
        if self.data is None:
            return True
        return self.clock() - self.last_updated >= self.ttl

    def get(self) -> Optional[T]:
        """Return the cached value while it is fresh, otherwise None."""
        if self.is_expired():
            return None
        return self.data

    def set(self, data: T) -> T:
        self.data = data
        self.last_updated = self.clock()
        return data

import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

# seconds a cached GET stays fresh, by path prefix
STALE_TIMES = {
    "/api/auth/me": 5 * 60,
    "/api/cart": 30,
}
DEFAULT_STALE_TIME = 60

QueryKey = Tuple[str, Tuple[Tuple[str, Hashable], ...]]


def make_key(path: str, params: Optional[Dict[str, Any]] = None) -> QueryKey:
    return path, tuple(sorted((params or {}).items()))


def stale_time_for(path: str) -> float:
    for prefix, seconds in STALE_TIMES.items():
        if path.startswith(prefix):
            return seconds
    return DEFAULT_STALE_TIME


class QueryCache:
    """Results of GET requests, invalidated by path prefix."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[QueryKey, Tuple[Any, float]] = {}

    def get(self, key: QueryKey) -> Tuple[bool, Any]:
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return False, None
        return True, value

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = (value, self._clock() + stale_time_for(key[0]))

    def invalidate(self, prefix: str) -> None:
        for key in [k for k in self._entries if k[0].startswith(prefix)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: QueryKey) -> bool:
        return self.get(key)[0]

    def __len__(self) -> int:
        return len(self._entries)

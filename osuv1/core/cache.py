import asyncio
import logging
from enum import IntFlag
from time import monotonic
from typing import Optional

logger = logging.getLogger(__name__)


class OsuCached(IntFlag):
    """Which entity kinds have their response bodies cached."""

    NONE = 0
    USER = 1 << 0
    SCORE = 1 << 1
    BEATMAP = 1 << 2
    MATCH = 1 << 3
    ALL = USER | SCORE | BEATMAP | MATCH


class ResponseCache:
    """\
    In-memory store of raw response bodies with a fixed time to live.

    Keys are the rendered request descriptors, which never contain the
    api key. Expired entries are dropped lazily when read.
    """

    def __init__(self, ttl_seconds: float, maxsize: int = 1024) -> None:
        self.ttl_seconds = ttl_seconds
        self.maxsize = maxsize
        self._entries: dict[str, tuple[float, bytes]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[bytes]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, body = entry
            if monotonic() >= expires_at:
                del self._entries[key]
                return None

        logger.debug(f"Cache hit for {key}")
        return body

    async def set(self, key: str, body: bytes) -> None:
        async with self._lock:
            if key not in self._entries and len(self._entries) >= self.maxsize:
                self._evict_oldest()
            self._entries[key] = (monotonic() + self.ttl_seconds, body)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def _evict_oldest(self) -> None:
        oldest = min(self._entries, key=lambda k: self._entries[k][0])
        del self._entries[oldest]

    def __len__(self) -> int:
        return len(self._entries)

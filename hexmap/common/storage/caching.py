import threading
from typing import Callable, Sequence

from loguru import logger

from hexmap.common.storage.interfaces import Cacheable
from hexmap.routers.hex.dto.viewport_dto import Viewport
from hexmap.routers.hex.hex_models import CacheKey, HexagonPolygon
from hexmap.routers.hex.services.constants import CACHE_SIZE_WARNING


class ViewportCache(Cacheable):
    """
    In-memory hexagon cache keyed by resolution and the quantized buffered viewport origin.

    Viewports sharing a key share an entry even when their extents differ.
    Entries are never replaced or evicted, so the cache grows with every
    distinct key visited during the session. Lookups and computations are
    serialized by a lock, so callers on several threads compute a key once.
    """

    def __init__(self, compute: Callable[[int, Viewport], Sequence[HexagonPolygon]]):
        self.compute = compute
        self.hits = 0
        self.misses = 0
        self._entries: dict[CacheKey, tuple[HexagonPolygon, ...]] = {}
        self._lock = threading.RLock()

    @staticmethod
    def key_for(resolution: int, viewport: Viewport) -> CacheKey:
        return CacheKey.from_bounds(resolution, viewport.buffered())

    def get_or_compute(self, resolution: int, viewport: Viewport) -> tuple[HexagonPolygon, ...]:
        key = self.key_for(resolution, viewport)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self.hits += 1
                logger.debug(f"Cache hit for {key}")
                return cached

            self.misses += 1
            hexagons = tuple(self.compute(resolution, viewport))
            self._entries[key] = hexagons
            logger.info(f"Cached {len(hexagons)} hexagons for {key}")
            if len(self._entries) % CACHE_SIZE_WARNING == 0:
                logger.warning(f"Viewport cache holds {len(self._entries)} entries and is never pruned")
            return hexagons

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
            }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

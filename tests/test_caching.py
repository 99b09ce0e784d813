import threading
import time

from loguru import logger

from hexmap.common.storage import caching
from hexmap.common.storage.caching import ViewportCache
from hexmap.routers.hex.dto import Viewport
from hexmap.routers.hex.hex_models import Bounds, CacheKey, HexagonPolygon


def counting_compute(calls: list):
    def compute(resolution, viewport):
        calls.append((resolution, viewport))
        ring = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0))
        return [HexagonPolygon(cell=f"cell-{len(calls)}", boundary=ring, color="#ff0000")]
    return compute


def test_key_quantizes_buffered_origin():
    viewport = Viewport(min_lat=10.0, max_lat=11.0, min_lng=20.0, max_lng=21.0, zoom=10)
    assert ViewportCache.key_for(5, viewport) == CacheKey(resolution=5, min_lat=95, min_lng=195)


def test_key_rounds_half_up():
    bounds = Bounds(min_lat=0.25, max_lat=1.0, min_lng=-0.25, max_lng=1.0)
    assert CacheKey.from_bounds(3, bounds) == CacheKey(resolution=3, min_lat=3, min_lng=-2)


def test_viewports_with_same_key_share_entry():
    calls = []
    cache = ViewportCache(counting_compute(calls))
    v1 = Viewport(min_lat=10.0, max_lat=11.0, min_lng=20.0, max_lng=21.0, zoom=10)
    v2 = Viewport(min_lat=10.04, max_lat=12.5, min_lng=20.03, max_lng=23.0, zoom=10)

    first = cache.get_or_compute(5, v1)
    second = cache.get_or_compute(5, v2)

    assert second is first
    assert len(calls) == 1
    assert cache.stats() == {"entries": 1, "hits": 1, "misses": 1}


def test_resolution_is_part_of_key():
    calls = []
    cache = ViewportCache(counting_compute(calls))
    viewport = Viewport(min_lat=10.0, max_lat=11.0, min_lng=20.0, max_lng=21.0, zoom=10)

    cache.get_or_compute(5, viewport)
    cache.get_or_compute(6, viewport)

    assert len(calls) == 2
    assert len(cache) == 2
    assert CacheKey(resolution=6, min_lat=95, min_lng=195) in cache


def test_entries_are_never_replaced():
    calls = []
    cache = ViewportCache(counting_compute(calls))
    viewport = Viewport(min_lat=10.0, max_lat=11.0, min_lng=20.0, max_lng=21.0, zoom=10)

    stored = cache.get_or_compute(5, viewport)
    for _ in range(3):
        assert cache.get_or_compute(5, viewport) == stored

    assert isinstance(stored, tuple)
    assert stored[0].cell == "cell-1"
    assert len(calls) == 1


def test_empty_result_is_cached():
    calls = []

    def compute(resolution, viewport):
        calls.append(resolution)
        return []

    cache = ViewportCache(compute)
    viewport = Viewport(min_lat=0.0, max_lat=1.0, min_lng=49.5, max_lng=50.5, zoom=10)

    assert cache.get_or_compute(5, viewport) == ()
    assert cache.get_or_compute(5, viewport) == ()
    assert calls == [5]


def test_concurrent_callers_compute_once():
    calls = []
    compute = counting_compute(calls)

    def slow_compute(resolution, viewport):
        time.sleep(0.05)
        return compute(resolution, viewport)

    cache = ViewportCache(slow_compute)
    viewport = Viewport(min_lat=10.0, max_lat=11.0, min_lng=20.0, max_lng=21.0, zoom=10)
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(cache.get_or_compute(5, viewport))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)
    assert cache.stats() == {"entries": 1, "hits": 7, "misses": 1}


def test_growth_warning_is_logged(monkeypatch):
    monkeypatch.setattr(caching, "CACHE_SIZE_WARNING", 2)
    messages = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        cache = ViewportCache(counting_compute([]))
        for min_lat in (10.0, 20.0, 30.0):
            cache.get_or_compute(5, Viewport(min_lat=min_lat, max_lat=min_lat + 1, min_lng=20.0, max_lng=21.0))
    finally:
        logger.remove(sink_id)

    assert len(messages) == 1
    assert "2 entries" in messages[0]

import asyncio
from contextlib import suppress
from pathlib import Path
from typing import Callable, Sequence

from loguru import logger

from hexmap.common.storage.caching import ViewportCache
from hexmap.common.storage.implementations.disposable_geojson import DisposableFeatureCollection
from ..dto.viewport_dto import Viewport
from ..hex_models import HexagonPolygon
from .constants import DEBOUNCE_MS
from .resolution_selector import select_resolution
from .update_scheduler import UpdateScheduler
from .viewport_hexagonizer import ViewportHexagonizer, hexagonizer

Renderer = Callable[[Sequence[HexagonPolygon]], None]


class HexService:
    """Class for handling viewport hexagons of a single map session"""

    def __init__(
            self,
            renderer: Renderer | None = None,
            debounce_ms: int = DEBOUNCE_MS,
            viewport_hexagonizer: ViewportHexagonizer = hexagonizer,
    ):
        self.renderer = renderer
        self.debounce_ms = debounce_ms
        self.hexagonizer = viewport_hexagonizer
        self.source = DisposableFeatureCollection()
        self.cache = ViewportCache(self._compute)
        self.scheduler = UpdateScheduler(self.update_hexagons, debounce_ms)
        self.viewport: Viewport | None = None
        self.visible: tuple[HexagonPolygon, ...] = ()
        self._task: asyncio.Task | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.source.features)

    def load(self, source_path: str | Path) -> None:
        """
        Load the geometry source and start over with an empty cache.
        A failed load leaves the service without data.

        Raises:
            SourceLoadFailureError: if the file can't be read as a FeatureCollection
            UnsupportedProjectionError: if the configured CRS pair is not supported
        """
        self.source = DisposableFeatureCollection()
        self.cache = ViewportCache(self._compute)
        self.visible = ()
        self.source.try_init(source_path)
        if self.viewport is not None:
            self.scheduler.notify()

    def _compute(self, resolution: int, viewport: Viewport) -> list[HexagonPolygon]:
        return self.hexagonizer.run(self.source.features or [], viewport, resolution)

    def get_hexagons(self, viewport: Viewport) -> tuple[HexagonPolygon, ...]:
        if not self.has_data:
            return ()
        resolution = select_resolution(viewport.zoom)
        return self.cache.get_or_compute(resolution, viewport)

    def on_viewport_changed(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self.scheduler.notify()

    def update_hexagons(self) -> None:
        if self.viewport is None:
            return
        hexagons = self.get_hexagons(self.viewport)
        logger.info(f"Rendering {len(hexagons)} hexagons at zoom {self.viewport.zoom}")
        self.visible = hexagons
        if self.renderer is not None:
            self.renderer(hexagons)

    def initial_center(self) -> dict[str, float] | None:
        """
        Center of the first feature's outer ring, used to position the map on first load
        """
        if not self.has_data:
            return None
        geometry = self.source.features[0].get("geometry") or {}
        coordinates = geometry.get("coordinates")
        if not coordinates:
            return None
        if geometry.get("type") == "Polygon":
            polygons = [coordinates]
        elif geometry.get("type") == "MultiPolygon":
            polygons = coordinates
        else:
            return None
        try:
            ring = polygons[0][0]
            lngs = [float(vertex[0]) for vertex in ring]
            lats = [float(vertex[1]) for vertex in ring]
        except (TypeError, IndexError, ValueError, KeyError):
            return None
        if not ring:
            return None
        return {"lat": sum(lats) / len(lats), "lng": sum(lngs) / len(lngs)}

    def start(self) -> None:
        if self._task is not None and not self._task.done():
            return
        if self.scheduler.closed:
            self.scheduler = UpdateScheduler(self.update_hexagons, self.debounce_ms)
        self._task = asyncio.create_task(self.scheduler.run())

    async def stop(self) -> None:
        self.scheduler.shutdown()
        if self._task is not None:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            self._task = None

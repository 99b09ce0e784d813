from typing import Annotated

from fastapi import APIRouter, Query
from loguru import logger

from hexmap.common.config.config import config
from hexmap.common.exceptions.exceptions import SourceLoadFailureError, UnsupportedProjectionError
from hexmap.common.exceptions.http_exception_wrapper import http_exception
from hexmap.common.utils import decorators
from . import hex_models
from .dto import Viewport
from .services.constants import GEOMETRY_SOURCE_PATH, UPDATE_SCHEDULED_MESSAGE
from .services.hex_service import HexService
from .services.resolution_selector import select_resolution


hex_service = HexService()


async def on_startup():
    source_path = config.get("GEOMETRY_SOURCE_PATH", GEOMETRY_SOURCE_PATH)
    logger.info(f'Loading geometry source {source_path}')
    try:
        hex_service.load(source_path)
    except (SourceLoadFailureError, UnsupportedProjectionError) as e:
        logger.error(e)
    hex_service.start()

async def on_shutdown():
    await hex_service.stop()

router = APIRouter(prefix='/hex', tags=['Viewport hexagons'])

@router.get('/resolution')
async def get_resolution(zoom : float) -> int:
    return select_resolution(zoom)

@router.get('/hexagons')
@decorators.hexagons_to_geojson
async def get_hexagons(viewport : Annotated[Viewport, Query()]) -> hex_models.HexagonGridModel:
    """
    Calculate hexagons visible in the viewport, served from cache when possible
    """
    return hex_service.get_hexagons(viewport)

@router.post('/viewport')
async def notify_viewport(viewport : Viewport) -> str:
    """
    Report a viewport change, hexagons are recalculated once the map stops moving
    """
    hex_service.on_viewport_changed(viewport)
    return UPDATE_SCHEDULED_MESSAGE

@router.get('/visible')
@decorators.hexagons_to_geojson
async def get_visible() -> hex_models.HexagonGridModel:
    return hex_service.visible

@router.get('/center')
async def get_center() -> dict[str, float]:
    center = hex_service.initial_center()
    if center is None:
        raise http_exception(404, "No geometry loaded to center the map on")
    return center

@router.get('/cache')
async def get_cache_stats() -> dict[str, int]:
    return hex_service.cache.stats()

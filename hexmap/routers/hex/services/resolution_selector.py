import math

from .constants import MIN_ZOOM, MAX_ZOOM, ZOOM_TO_RESOLUTION, DEFAULT_RESOLUTION


def select_resolution(zoom: float) -> int:
    """
    Map a continuous zoom level to an H3 resolution, finer grid for closer zoom
    """
    if math.isnan(zoom):
        return DEFAULT_RESOLUTION
    clamped = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
    z = math.floor(clamped + 0.5)
    return ZOOM_TO_RESOLUTION.get(z, DEFAULT_RESOLUTION)

import json
import geopandas as gpd
from functools import wraps
from shapely import Polygon

from hexmap.routers.hex.services.constants import WORKING_CRS


def hexagons_to_gdf(hexagons) -> gpd.GeoDataFrame:
    return gpd.GeoDataFrame(
        {
            'cell': [h.cell for h in hexagons],
            'color': [h.color for h in hexagons],
        },
        geometry=[Polygon(h.boundary) for h in hexagons],
        crs=WORKING_CRS,
    )

def hexagons_to_geojson(func):
    @wraps(func)
    async def process(*args, **kwargs):
        gdf = hexagons_to_gdf(await func(*args, **kwargs))
        return json.loads(gdf.to_json())
    return process

import math

from pydantic import BaseModel, ConfigDict
from pydantic_geojson import FeatureCollectionModel, FeatureModel, PolygonModel

from .services.constants import CACHE_KEY_PRECISION


def _quantize(value: float) -> int:
    # .5 rounds up for negative values too
    return math.floor(value * CACHE_KEY_PRECISION + 0.5)


class Bounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lng: float, lat: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


class CacheKey(BaseModel):
    """Buffered viewport origin quantized to one decimal degree, stored as integer tenths"""
    model_config = ConfigDict(frozen=True)

    resolution: int
    min_lat: int
    min_lng: int

    @classmethod
    def from_bounds(cls, resolution: int, bounds: Bounds) -> "CacheKey":
        return cls(
            resolution=resolution,
            min_lat=_quantize(bounds.min_lat),
            min_lng=_quantize(bounds.min_lng),
        )


class HexagonPolygon(BaseModel):
    model_config = ConfigDict(frozen=True)

    cell: str
    boundary: tuple[tuple[float, float], ...]
    color: str


class HexagonProperties(BaseModel):
    cell: str
    color: str


class HexagonGridModel(FeatureCollectionModel):

    class HexagonFeature(FeatureModel):
        geometry : PolygonModel
        properties : HexagonProperties

    features : list[HexagonFeature]

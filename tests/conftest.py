import json

import pytest
from pyproj import Transformer

from hexmap.routers.hex.dto import Viewport


def square_feature(min_lng: float, min_lat: float, size: float = 1.0, color: str | None = "ff0000") -> dict:
    ring = [
        [min_lng, min_lat],
        [min_lng + size, min_lat],
        [min_lng + size, min_lat + size],
        [min_lng, min_lat + size],
        [min_lng, min_lat],
    ]
    properties = {"COLOR_HEX": color} if color is not None else {}
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": properties,
    }


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def square_collection() -> dict:
    """1x1 degree red square at lng 0..1, lat 0..1"""
    return {"type": "FeatureCollection", "features": [square_feature(0.0, 0.0)]}


@pytest.fixture
def mercator_collection(square_collection) -> dict:
    to_mercator = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)
    features = []
    for feature in square_collection["features"]:
        ring = feature["geometry"]["coordinates"][0]
        projected = [list(to_mercator.transform(lng, lat)) for lng, lat in ring]
        features.append({**feature, "geometry": {"type": "Polygon", "coordinates": [projected]}})
    return {"type": "FeatureCollection", "features": features}


@pytest.fixture
def source_file(tmp_path, mercator_collection):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(mercator_collection), encoding="utf-8")
    return path


@pytest.fixture
def square_viewport() -> Viewport:
    return Viewport(min_lat=0.0, max_lat=1.0, min_lng=0.0, max_lng=1.0, zoom=10)


@pytest.fixture
def far_viewport() -> Viewport:
    return Viewport(min_lat=0.0, max_lat=1.0, min_lng=49.5, max_lng=50.5, zoom=10)

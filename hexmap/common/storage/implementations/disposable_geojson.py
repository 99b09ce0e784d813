import json
from pathlib import Path

from loguru import logger

from hexmap.common.exceptions.exceptions import SourceLoadFailureError
from hexmap.common.storage.interfaces.disposable_interface import IDisposable
from hexmap.routers.hex.services.constants import SOURCE_CRS, WORKING_CRS
from hexmap.routers.hex.services.projection_transformer import projection_transformer


class DisposableFeatureCollection(IDisposable):
    features: list[dict] | None = None

    def __init__(self, source_crs: str = SOURCE_CRS, working_crs: str = WORKING_CRS):
        self.source_crs = source_crs
        self.working_crs = working_crs

    def try_init(self, source_path: str | Path):
        logger.info(f"Trying to initialize FeatureCollection with {source_path}")
        try:
            with open(source_path, encoding="utf-8") as fin:
                geojson = json.load(fin)
        except (OSError, ValueError) as e:
            raise SourceLoadFailureError(f"{source_path}: {e}") from e
        if not isinstance(geojson, dict) or geojson.get("type") != "FeatureCollection" \
                or not isinstance(geojson.get("features"), list):
            raise SourceLoadFailureError(f"{source_path} is not a GeoJSON FeatureCollection")

        logger.info(f"Transforming {len(geojson['features'])} features from {self.source_crs} to {self.working_crs}")
        transformed = projection_transformer.transform(geojson, self.source_crs, self.working_crs)
        self.features = transformed["features"]
        logger.info(f"FeatureCollection initialized with {source_path}")

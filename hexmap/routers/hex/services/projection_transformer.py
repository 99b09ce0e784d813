import copy
from functools import lru_cache

from pyproj import Transformer

from hexmap.common.exceptions.exceptions import UnsupportedProjectionError
from .constants import SUPPORTED_CRS


def _normalize_crs(crs: str | int) -> str:
    if isinstance(crs, int):
        return f"EPSG:{crs}"
    return str(crs).strip().upper()


def is_position(value) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) >= 2
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value[:2])
    )


@lru_cache(maxsize=None)
def _build_transformer(from_crs: str, to_crs: str) -> Transformer:
    return Transformer.from_crs(from_crs, to_crs, always_xy=True)


class ProjectionTransformer:
    """
    Class for moving GeoJSON structures between Web Mercator and WGS84.
    Every transform builds a new structure, the input is left untouched.
    """

    @staticmethod
    def get_transformer(from_crs: str | int, to_crs: str | int) -> Transformer:
        """
        Function returns a memoized pyproj transformer for the CRS pair

        Args:
            from_crs (str | int): source CRS, e.g. "EPSG:3857" or 3857
            to_crs (str | int): target CRS

        Returns:
            Transformer: transformer with (x, y) = (lng, lat) axis order

        Raises:
            UnsupportedProjectionError: if either CRS is not supported
        """

        from_crs, to_crs = _normalize_crs(from_crs), _normalize_crs(to_crs)
        if from_crs not in SUPPORTED_CRS or to_crs not in SUPPORTED_CRS:
            raise UnsupportedProjectionError(f"{from_crs} -> {to_crs}")
        return _build_transformer(from_crs, to_crs)

    def transform_coordinate(
            self,
            coordinate: list | tuple,
            from_crs: str | int,
            to_crs: str | int,
    ) -> list[float]:
        transformer = self.get_transformer(from_crs, to_crs)
        return self._transform_position(coordinate, transformer)

    def transform(self, geojson: dict, from_crs: str | int, to_crs: str | int) -> dict:
        """
        Function transforms a FeatureCollection, Feature or geometry into another CRS

        Args:
            geojson (dict): GeoJSON structure
            from_crs (str | int): source CRS
            to_crs (str | int): target CRS

        Returns:
            dict: new GeoJSON structure with transformed coordinates and copied properties
        """

        transformer = self.get_transformer(from_crs, to_crs)
        return self._transform_object(geojson, transformer)

    @staticmethod
    def _transform_position(position: list | tuple, transformer: Transformer) -> list[float]:
        x, y = transformer.transform(position[0], position[1])
        return [float(x), float(y), *position[2:]]

    def _transform_positions(self, positions, transformer: Transformer):
        if is_position(positions):
            return self._transform_position(positions, transformer)
        if not isinstance(positions, (list, tuple)):
            # left for the hexagonizer to reject
            return copy.deepcopy(positions)
        return [self._transform_positions(p, transformer) for p in positions]

    def _transform_object(self, geojson, transformer: Transformer):
        if not isinstance(geojson, dict):
            return copy.deepcopy(geojson)

        transformed = {
            key: copy.deepcopy(value)
            for key, value in geojson.items()
            if key not in ("features", "geometry", "geometries", "coordinates")
        }
        if "features" in geojson:
            features = geojson["features"]
            transformed["features"] = (
                [self._transform_object(f, transformer) for f in features]
                if isinstance(features, list) else copy.deepcopy(features)
            )
        if "geometry" in geojson:
            transformed["geometry"] = self._transform_object(geojson["geometry"], transformer)
        if "geometries" in geojson:
            geometries = geojson["geometries"]
            transformed["geometries"] = (
                [self._transform_object(g, transformer) for g in geometries]
                if isinstance(geometries, list) else copy.deepcopy(geometries)
            )
        if "coordinates" in geojson:
            transformed["coordinates"] = self._transform_positions(geojson["coordinates"], transformer)
        return transformed


projection_transformer = ProjectionTransformer()

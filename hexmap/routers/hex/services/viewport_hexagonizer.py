import re
from typing import Iterable

import h3
from loguru import logger

from hexmap.common.exceptions.exceptions import MalformedGeometryError
from ..dto.viewport_dto import Viewport
from ..hex_models import HexagonPolygon
from .constants import COLOR_PROPERTIES, DEFAULT_COLOR
from .projection_transformer import is_position

COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


class ViewportHexagonizer:
    """
    Class for turning polygon vertices visible in a viewport into H3 hexagons.

    The indexer is any object exposing the h3 v4 functions ``latlng_to_cell`` and
    ``cell_to_boundary``; the ``h3`` module is used by default.
    """

    def __init__(self, indexer=h3):
        self.indexer = indexer

    @staticmethod
    def extract_color(properties: dict | None) -> str:
        """
        Function reads a feature fill color

        Args:
            properties (dict | None): feature properties

        Returns:
            str: color as #rrggbb, gray if no usable color property is present
        """

        if isinstance(properties, dict):
            for key in COLOR_PROPERTIES:
                value = properties.get(key)
                if not isinstance(value, str):
                    continue
                match = COLOR_PATTERN.match(value.strip())
                if match:
                    return f"#{match.group(1).lower()}"
        return DEFAULT_COLOR

    @staticmethod
    def outer_ring_vertices(geometry: dict | None) -> list[tuple[float, float]]:
        """
        Function flattens outer ring vertices of a Polygon or MultiPolygon

        Args:
            geometry (dict | None): GeoJSON geometry

        Returns:
            list[tuple[float, float]]: (lng, lat) vertices in ring order

        Raises:
            MalformedGeometryError: if the geometry has no usable coordinates
        """

        if not isinstance(geometry, dict) or not geometry.get("coordinates"):
            raise MalformedGeometryError("no coordinates")
        geometry_type = geometry.get("type")
        if geometry_type == "Polygon":
            polygons = [geometry["coordinates"]]
        elif geometry_type == "MultiPolygon":
            polygons = geometry["coordinates"]
        else:
            raise MalformedGeometryError(f"unsupported geometry type {geometry_type}")

        vertices = []
        try:
            for polygon in polygons:
                for vertex in polygon[0]:
                    if not is_position(vertex):
                        raise MalformedGeometryError(f"invalid vertex {vertex!r}")
                    vertices.append((float(vertex[0]), float(vertex[1])))
        except (TypeError, IndexError, KeyError) as e:
            raise MalformedGeometryError(str(e)) from e
        return vertices

    def hexagon_polygon(self, cell: str, color: str) -> HexagonPolygon:
        boundary = [(lng, lat) for lat, lng in self.indexer.cell_to_boundary(cell)]
        boundary.append(boundary[0])
        return HexagonPolygon(cell=cell, boundary=tuple(boundary), color=color)

    def run(self, features: Iterable[dict], viewport: Viewport, resolution: int) -> list[HexagonPolygon]:
        """
        Function builds hexagons for feature vertices inside the buffered viewport

        A cell is emitted once per pass and keeps the color of the feature that
        reached it first, so the result depends on feature order.

        Args:
            features (Iterable[dict]): GeoJSON features in EPSG:4326
            viewport (Viewport): visible map area
            resolution (int): H3 resolution

        Returns:
            list[HexagonPolygon]: hexagons in discovery order
        """

        bounds = viewport.buffered()
        hexagons = []
        seen_cells = set()
        for index, feature in enumerate(features):
            if not isinstance(feature, dict):
                logger.debug(f"Skipping feature {index}: not a mapping")
                continue
            try:
                vertices = self.outer_ring_vertices(feature.get("geometry"))
            except MalformedGeometryError as e:
                logger.debug(f"Skipping feature {index}: {e}")
                continue
            color = self.extract_color(feature.get("properties"))
            for lng, lat in vertices:
                if not bounds.contains(lng, lat):
                    continue
                cell = self.indexer.latlng_to_cell(lat, lng, resolution)
                if cell in seen_cells:
                    continue
                seen_cells.add(cell)
                hexagons.append(self.hexagon_polygon(cell, color))
        return hexagons


hexagonizer = ViewportHexagonizer()

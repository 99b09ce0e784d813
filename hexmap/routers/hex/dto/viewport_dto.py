from pydantic import BaseModel, Field, model_validator

from ..hex_models import Bounds
from ..services.constants import DEFAULT_ZOOM, VIEWPORT_BUFFER


class Viewport(BaseModel):

    min_lat: float = Field(
        ...,
        ge=-90,
        le=90,
        examples=[59.8],
        description="South edge of the visible map area"
    )
    max_lat: float = Field(
        ...,
        ge=-90,
        le=90,
        examples=[60.1],
        description="North edge of the visible map area"
    )
    min_lng: float = Field(
        ...,
        ge=-180,
        le=180,
        examples=[30.1],
        description="West edge of the visible map area"
    )
    max_lng: float = Field(
        ...,
        ge=-180,
        le=180,
        examples=[30.6],
        description="East edge of the visible map area"
    )
    zoom: float = Field(
        DEFAULT_ZOOM,
        examples=[10],
        description="Map zoom level, usually between 2 and 18"
    )

    @model_validator(mode="after")
    def check_extent(self) -> "Viewport":
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must not exceed max_lat")
        if self.min_lng > self.max_lng:
            raise ValueError("min_lng must not exceed max_lng")
        return self

    def buffered(self, buffer: float = VIEWPORT_BUFFER) -> Bounds:
        return Bounds(
            min_lat=self.min_lat - buffer,
            max_lat=self.max_lat + buffer,
            min_lng=self.min_lng - buffer,
            max_lng=self.max_lng + buffer,
        )

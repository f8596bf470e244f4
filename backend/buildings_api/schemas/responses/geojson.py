from typing import Literal
from pydantic import BaseModel

COORDINATES_TYPE = tuple[float, float] | tuple[float, float, float]


class Point(BaseModel):
    type: Literal["Point"]
    # [longitude, latitude] in EPSG:4326
    coordinates: COORDINATES_TYPE

from buildings_api.core.models import Building
from buildings_api.schemas.responses.geojson import Point
from datetime import datetime
from geoalchemy2.shape import to_shape
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from shapely.geometry import mapping
from typing import Any


class BuildingRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    cadastral_code: str
    municipality_code: str
    name: str | None
    building_type: str
    address: str
    geometry: Point | None
    basic_data: dict[str, Any]
    visible: bool
    created_at: datetime
    updated_at: datetime | None
    updated_by: str | None

    @classmethod
    def from_model(cls, building: Building) -> 'BuildingRecord':
        geometry = None
        if building.geom is not None:
            geometry = mapping(to_shape(building.geom))
        return cls(
            id=str(building.id),
            cadastral_code=building.cadastral_code,
            municipality_code=building.municipality_code,
            name=building.name,
            building_type=building.building_type,
            address=building.address,
            geometry=geometry,
            basic_data=building.basic_data or {},
            visible=building.visible,
            created_at=building.created_at,
            updated_at=building.updated_at,
            updated_by=building.updated_by,
        )


class PaginationMeta(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total: int = Field(ge=0, description='Number of buildings matching the filters, ignoring limit and offset')
    limit: int = Field(ge=1)
    offset: int = Field(ge=0)
    has_next: bool = Field(description='Whether buildings exist beyond this page')
    has_previous: bool = Field(description='Whether buildings exist before this page')


class ResultPage(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    records: list[BuildingRecord] = Field(alias='data')
    meta: PaginationMeta

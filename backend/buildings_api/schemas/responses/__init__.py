from buildings_api.schemas.responses.building import BuildingRecord, PaginationMeta, ResultPage
from buildings_api.schemas.responses.geojson import Point

from buildings_api.core.constants import POLYGON_PLACEHOLDER, WGS_84_SRID
from buildings_api.core.models import Building
from buildings_api.query.polygon import parse_polygon
from buildings_api.schemas.requests import FilterRequest
from dataclasses import dataclass
from geoalchemy2.functions import ST_GeomFromText, ST_Intersects
from sqlalchemy import ColumnElement, true
from typing import Any


LIKE_ESCAPE = '\\'

EXACT_FIELDS = ('cadastral_code', 'municipality_code', 'building_type')
PARTIAL_FIELDS = ('name', 'address')


def escape_like(value: str) -> str:
    return (
        value
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )


@dataclass(frozen=True, eq=False)
class CompiledFilter:
    """Predicates shared by the count query and the data query of one page.

    ``visibility`` is always first and ``predicates`` follow in field order.
    ``params`` is descriptive only: it lists the values bound by the
    predicates, in predicate order, and holds the polygon WKT, so it is not
    logged. SQLAlchemy binds the values carried by the expressions
    themselves, never this tuple.
    Placeholders are only rendered when a statement using :attr:`clauses` is
    compiled, so the list can be reused as is for both queries.
    """
    visibility: ColumnElement[bool]
    predicates: tuple[ColumnElement[bool], ...] = ()
    params: tuple[Any, ...] = ()
    fields: tuple[str, ...] = ()

    @property
    def clauses(self) -> tuple[ColumnElement[bool], ...]:
        return (self.visibility, *self.predicates)

    def describe(self) -> dict[str, Any]:
        shape = {'filters': list(self.fields)}
        if 'polygon' in self.fields:
            shape['polygon'] = POLYGON_PLACEHOLDER
        return shape


class _FilterBuilder:
    def __init__(self):
        self.predicates: list[ColumnElement[bool]] = []
        self.params: list[Any] = []
        self.fields: list[str] = []

    def append(self, field_name: str, predicate: ColumnElement[bool], *params: Any) -> None:
        self.fields.append(field_name)
        self.predicates.append(predicate)
        self.params.extend(params)

    def build(self) -> CompiledFilter:
        return CompiledFilter(
            visibility=Building.visible == true(),
            predicates=tuple(self.predicates),
            params=tuple(self.params),
            fields=tuple(self.fields),
        )


def compile_filters(request: FilterRequest) -> CompiledFilter:
    builder = _FilterBuilder()

    # None means "not supplied"; an empty string is a value like any other.
    for field_name in EXACT_FIELDS:
        value = getattr(request, field_name)
        if value is not None:
            builder.append(field_name, getattr(Building, field_name) == value, value)

    for field_name in PARTIAL_FIELDS:
        value = getattr(request, field_name)
        if value is not None:
            pattern = f'%{escape_like(value)}%'
            builder.append(field_name, getattr(Building, field_name).ilike(pattern, escape=LIKE_ESCAPE), pattern)

    if request.polygon is not None:
        polygon_wkt = parse_polygon(request.polygon).wkt
        builder.append(
            'polygon',
            ST_Intersects(Building.geom, ST_GeomFromText(polygon_wkt, WGS_84_SRID)),
            polygon_wkt,
            WGS_84_SRID,
        )

    return builder.build()

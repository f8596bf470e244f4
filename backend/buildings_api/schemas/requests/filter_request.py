from buildings_api.core.constants import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT, MIN_LIMIT
from buildings_api.core.errors import ValidationError
from collections.abc import Mapping
from pydantic import BaseModel, ConfigDict, Field
from typing import Any
import pydantic


class FilterRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    cadastral_code: str | None = Field(None, description='Cadastral code, exact match')
    municipality_code: str | None = Field(None, description='Municipality code, exact match')
    building_type: str | None = Field(None, description='Building type, exact match')
    name: str | None = Field(None, description='Building name, case-insensitive partial match')
    address: str | None = Field(None, description='Address, case-insensitive partial match')
    polygon: str | None = Field(
        None,
        description='WKT POLYGON in EPSG:4326 (longitude latitude), e.g. POLYGON((x1 y1, x2 y2, x3 y3, x1 y1))',
    )

    limit: int = Field(DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT, description='Maximum number of buildings to return')
    offset: int = Field(DEFAULT_OFFSET, ge=0, description='Number of buildings to skip')

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any] | None) -> 'FilterRequest':
        """Convert untyped adapter input (tool arguments, decoded JSON) into a request.

        Unknown keys and values of the wrong type are rejected here, with the
        offending field named in the raised :class:`ValidationError`.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ValidationError('arguments', f'expected an object, got {type(arguments).__name__}')
        try:
            return cls.model_validate(dict(arguments))
        except pydantic.ValidationError as e:
            error = e.errors()[0]
            field = '.'.join(str(part) for part in error['loc']) or 'arguments'
            raise ValidationError(field, error['msg']) from e

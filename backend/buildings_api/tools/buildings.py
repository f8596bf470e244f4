"""Building search tools for AI agents.

Tool calls carry untyped JSON arguments. They are converted once with
:meth:`FilterRequest.from_arguments` and then run through the same engine as
the HTTP endpoints. Failures are reported back to the agent as error tool
results rather than raised, so the agent can correct its arguments.
"""
from buildings_api.core.constants import DEFAULT_LIMIT, MAX_LIMIT
from buildings_api.core.errors import BuildingsError, QueryError, ValidationError
from buildings_api.query import executor
from buildings_api.query.pagination import clamp_pagination
from buildings_api.schemas.requests import FilterRequest
from collections.abc import Mapping
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
import json
import logging
import pydantic


logger = logging.getLogger(__name__)

SEARCH_BUILDINGS_BASIC = 'search_buildings_basic'
SEARCH_BUILDINGS_SPATIAL = 'search_buildings_spatial'
TOOL_NAMES = (SEARCH_BUILDINGS_BASIC, SEARCH_BUILDINGS_SPATIAL)

_TEXT_FILTER_PROPERTIES = {
    'cadastral_code': {
        'type': 'string',
        'description': 'Exact cadastral code for building identification',
    },
    'municipality_code': {
        'type': 'string',
        'description': 'Exact municipality code for location filtering',
    },
    'building_type': {
        'type': 'string',
        'description': 'Exact building type classification, e.g. residential or commercial',
    },
    'name': {
        'type': 'string',
        'description': 'Partial building name search (case-insensitive)',
    },
    'address': {
        'type': 'string',
        'description': 'Partial address search (case-insensitive)',
    },
}

_PAGINATION_PROPERTIES = {
    'limit': {
        'type': 'integer',
        'minimum': 1,
        'maximum': MAX_LIMIT,
        'default': DEFAULT_LIMIT,
        'description': f'Maximum number of buildings to return (default {DEFAULT_LIMIT}, max {MAX_LIMIT})',
    },
    'offset': {
        'type': 'integer',
        'minimum': 0,
        'default': 0,
        'description': 'Number of buildings to skip, use meta.hasNext to know whether to continue',
    },
}

_POLYGON_PROPERTY = {
    'type': 'string',
    'description': 'WKT POLYGON in EPSG:4326 (longitude latitude), '
                   'e.g. POLYGON((4.35 50.84, 4.36 50.84, 4.36 50.85, 4.35 50.84))',
    'pattern': r'^\s*POLYGON\s*\(\(.+\)\)\s*$',
}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        'name': SEARCH_BUILDINGS_BASIC,
        'description': (
            'Search visible buildings with text filters. cadastral_code, municipality_code and '
            'building_type match exactly, name and address match partially and case-insensitively. '
            'Filters are combined with AND. Results are ordered by creation date, newest first, and '
            'paginated with limit/offset; meta.total is the number of matching buildings.'
        ),
        'inputSchema': {
            'type': 'object',
            'properties': {**_TEXT_FILTER_PROPERTIES, **_PAGINATION_PROPERTIES},
            'required': [],
            'additionalProperties': False,
        },
    },
    {
        'name': SEARCH_BUILDINGS_SPATIAL,
        'description': (
            'Search visible buildings whose location intersects a WKT polygon given in EPSG:4326 '
            '(WGS84 longitude/latitude, no reprojection). The ring must be closed and have at least '
            'four coordinate pairs. Text filters of search_buildings_basic can be combined with it.'
        ),
        'inputSchema': {
            'type': 'object',
            'properties': {'polygon': _POLYGON_PROPERTY, **_TEXT_FILTER_PROPERTIES, **_PAGINATION_PROPERTIES},
            'required': ['polygon'],
            'additionalProperties': False,
        },
    },
]


def _text_result(payload: dict[str, Any], is_error: bool = False) -> dict[str, Any]:
    return {
        'content': [{'type': 'text', 'text': json.dumps(payload, indent=2, default=str)}],
        'isError': is_error,
    }


def _error_result(error: BuildingsError) -> dict[str, Any]:
    payload: dict[str, Any] = {'error': type(error).__name__, 'message': str(error)}
    if isinstance(error, ValidationError):
        payload['field'] = error.field
    elif isinstance(error, QueryError):
        payload['phase'] = error.phase
    return _text_result(payload, is_error=True)


_INT = pydantic.TypeAdapter(int)


def _as_int(value: Any) -> Any:
    """``'500'`` and ``500.0`` become ``500``, anything else is left to :class:`FilterRequest` to reject."""
    if value is None or isinstance(value, bool):
        return value
    try:
        return _INT.validate_python(value)
    except pydantic.ValidationError:
        return value


def _lenient_pagination(arguments: Mapping[str, Any]) -> dict[str, Any]:
    arguments = dict(arguments)
    limit, offset = _as_int(arguments.get('limit')), _as_int(arguments.get('offset'))
    if all(value is None or (isinstance(value, int) and not isinstance(value, bool)) for value in (limit, offset)):
        arguments['limit'], arguments['offset'] = clamp_pagination(limit, offset)
    return arguments


def to_filter_request(name: str, arguments: Mapping[str, Any] | None) -> FilterRequest:
    if name not in TOOL_NAMES:
        raise ValueError(f'Unknown tool: {name}')
    if arguments is not None and not isinstance(arguments, Mapping):
        raise ValidationError('arguments', f'expected an object, got {type(arguments).__name__}')
    arguments = _lenient_pagination(arguments or {})
    if name == SEARCH_BUILDINGS_BASIC and 'polygon' in arguments:
        raise ValidationError('polygon', f'not accepted by {SEARCH_BUILDINGS_BASIC}, use {SEARCH_BUILDINGS_SPATIAL}')
    if name == SEARCH_BUILDINGS_SPATIAL and not isinstance(arguments.get('polygon'), str):
        raise ValidationError('polygon', 'required and must be a WKT POLYGON string')
    return FilterRequest.from_arguments(arguments)


async def call_tool(
    db: AsyncSession,
    name: str,
    arguments: Mapping[str, Any] | None,
    correlation_id: str | None = None,
) -> dict[str, Any]:
    try:
        request = to_filter_request(name, arguments)
        page = await executor.execute(db, request, correlation_id=correlation_id)
    except BuildingsError as e:
        logger.warning('tool %s failed: %s', name, e, extra={'correlation_id': correlation_id})
        return _error_result(e)

    return _text_result(page.model_dump(mode='json', by_alias=True))

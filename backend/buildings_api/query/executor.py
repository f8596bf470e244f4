"""Paginated building queries.

A page is produced by two independent queries sharing one compiled filter:
a count of every matching row, then the ordered window of rows. They do not
run in a single snapshot, so a concurrent write may be counted but not
returned (or the reverse). The page is cut down to what the count allows.
"""
from buildings_api.core.constants import POLYGON_PLACEHOLDER
from buildings_api.core.errors import QueryError, QueryPhase
from buildings_api.core.models import Building
from buildings_api.query.filters import CompiledFilter, compile_filters
from buildings_api.query.pagination import build_pagination_meta, normalize_pagination, page_size
from buildings_api.schemas.requests import FilterRequest
from buildings_api.schemas.responses import BuildingRecord, ResultPage
from sqlalchemy import Select, func, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import re
import time


logger = logging.getLogger(__name__)

DB_ERRORS = (SQLAlchemyError, OSError)

# PostGIS parse errors quote the offending geometry
_POLYGON_TEXT = re.compile(r"POLYGON\s*\(.*?(?:\)\)|$)", re.IGNORECASE | re.DOTALL)


def build_count_statement(compiled: CompiledFilter) -> Select:
    return select(func.count()).select_from(Building).where(*compiled.clauses)


def build_data_statement(compiled: CompiledFilter, limit: int, offset: int) -> Select:
    return (
        select(Building)
        .where(*compiled.clauses)
        .order_by(Building.created_at.desc(), Building.id.desc())
        .limit(limit)
        .offset(offset)
    )


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def describe_db_error(error: Exception) -> str:
    """Name the failure without the SQL, its parameters or any polygon text."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        reason = _POLYGON_TEXT.sub(POLYGON_PLACEHOLDER, str(error.orig))
        return f'{type(error).__name__} ({type(error.orig).__name__}: {reason})'
    return type(error).__name__


async def _run(db: AsyncSession, phase: QueryPhase, stmt: Select, correlation_id: str | None):
    try:
        return await db.execute(stmt)
    except DB_ERRORS as e:
        detail = describe_db_error(e)
        logger.error(
            'building %s query failed: %s', phase, detail,
            extra={'correlation_id': correlation_id, 'phase': phase},
        )
        raise QueryError(phase, detail) from e


async def count_buildings(db: AsyncSession, compiled: CompiledFilter, correlation_id: str | None = None) -> int:
    start = time.perf_counter()
    result = await _run(db, 'count', build_count_statement(compiled), correlation_id)
    total = int(result.scalar_one())
    logger.debug(
        'building count query returned %d', total,
        extra={'correlation_id': correlation_id, 'phase': 'count', 'total': total, 'elapsed_ms': _elapsed_ms(start)},
    )
    return total


async def fetch_buildings(
    db: AsyncSession,
    compiled: CompiledFilter,
    limit: int,
    offset: int,
    correlation_id: str | None = None,
) -> list[Building]:
    start = time.perf_counter()
    result = await _run(db, 'data', build_data_statement(compiled, limit, offset), correlation_id)
    buildings = list(result.scalars().all())
    logger.debug(
        'building data query returned %d rows', len(buildings),
        extra={
            'correlation_id': correlation_id,
            'phase': 'data',
            'count': len(buildings),
            'elapsed_ms': _elapsed_ms(start),
        },
    )
    return buildings


async def execute(db: AsyncSession, request: FilterRequest, correlation_id: str | None = None) -> ResultPage:
    """Return one page of visible buildings matching ``request``.

    Raises :class:`~buildings_api.core.errors.ValidationError` before touching
    the database when pagination or the polygon is invalid, and
    :class:`~buildings_api.core.errors.QueryError` tagged with the failing
    phase when either query fails. An offset past the last match is not an
    error, it yields an empty page.
    """
    limit, offset = normalize_pagination(request.limit, request.offset)
    compiled = compile_filters(request)

    logger.debug(
        'querying buildings',
        extra={'correlation_id': correlation_id, 'limit': limit, 'offset': offset, **compiled.describe()},
    )

    total = await count_buildings(db, compiled, correlation_id)
    buildings = await fetch_buildings(db, compiled, limit, offset, correlation_id)

    expected = page_size(total, limit, offset)
    if len(buildings) > expected:
        logger.debug(
            'data page larger than count allows, dropping %d rows', len(buildings) - expected,
            extra={'correlation_id': correlation_id},
        )
        buildings = buildings[:expected]

    return ResultPage(
        records=[BuildingRecord.from_model(building) for building in buildings],
        meta=build_pagination_meta(total, limit, offset),
    )

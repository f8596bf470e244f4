from buildings_api.core.constants import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT, MIN_LIMIT
from buildings_api.core.errors import ValidationError
from buildings_api.schemas.responses.building import PaginationMeta


def _as_int(field: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, f'must be an integer, got {value!r}')
    return value


def normalize_pagination(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Apply defaults and reject values outside ``[1, 100]`` / ``>= 0``."""
    limit = DEFAULT_LIMIT if limit is None else _as_int('limit', limit)
    offset = DEFAULT_OFFSET if offset is None else _as_int('offset', offset)

    if not MIN_LIMIT <= limit <= MAX_LIMIT:
        raise ValidationError('limit', f'must be between {MIN_LIMIT} and {MAX_LIMIT}, got {limit}')
    if offset < 0:
        raise ValidationError('offset', f'must be greater than or equal to 0, got {offset}')
    return limit, offset


def clamp_pagination(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Lenient variant of :func:`normalize_pagination` that pulls values back into range."""
    limit = DEFAULT_LIMIT if limit is None else _as_int('limit', limit)
    offset = DEFAULT_OFFSET if offset is None else _as_int('offset', offset)
    return min(max(limit, MIN_LIMIT), MAX_LIMIT), max(offset, 0)


def build_pagination_meta(total: int, limit: int, offset: int) -> PaginationMeta:
    # Derived from the count only, a short final page must not end pagination early.
    return PaginationMeta(
        total=total,
        limit=limit,
        offset=offset,
        has_next=offset + limit < total,
        has_previous=offset > 0,
    )


def page_size(total: int, limit: int, offset: int) -> int:
    return min(limit, max(0, total - offset))

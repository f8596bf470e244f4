from buildings_api.core.errors import ValidationError
from shapely import Polygon
import math
import re


FIELD = 'polygon'

MIN_RING_PAIRS = 4

_POLYGON_PREFIX = re.compile(r'^\s*POLYGON\s*', re.IGNORECASE)
_RING = re.compile(r'\(([^()]*)\)')
_NUMBER = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')

Coordinates = list[tuple[float, float]]


def parse_polygon(text: str) -> Polygon:
    """Validate a WKT ``POLYGON`` and return it as a Shapely polygon.

    The first ring is the exterior boundary, any following ring is a hole.
    Each ring needs at least four ``x y`` pairs of finite numbers and must
    end on the pair it starts with. Every failure raises a
    :class:`ValidationError` on the ``polygon`` field naming what is wrong.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(FIELD, 'empty polygon')

    match = _POLYGON_PREFIX.match(text)
    if match is None:
        raise ValidationError(FIELD, 'expected a POLYGON geometry, e.g. POLYGON((x1 y1, x2 y2, x3 y3, x1 y1))')

    rings = [
        _parse_ring(ring, ring_number)
        for ring_number, ring in enumerate(_split_rings(text[match.end():].strip()), start=1)
    ]
    return Polygon(rings[0], rings[1:])


def _split_rings(body: str) -> list[str]:
    depth = 0
    for char in body:
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth < 0:
                raise ValidationError(FIELD, 'unbalanced parentheses')
    if depth != 0:
        raise ValidationError(FIELD, 'unbalanced parentheses')

    if not (body.startswith('(') and body.endswith(')')):
        raise ValidationError(FIELD, 'expected a parenthesised list of rings after POLYGON')

    inner = body[1:-1].strip()
    rings = _RING.findall(inner)
    leftover = _RING.sub('', inner).replace(',', '').strip()
    if not rings or leftover:
        raise ValidationError(FIELD, 'malformed ring list, expected POLYGON((x1 y1, ..., x1 y1))')
    return rings


def _parse_ring(ring: str, ring_number: int) -> Coordinates:
    where = '' if ring_number == 1 else f' of ring {ring_number}'
    pairs = [pair.strip() for pair in ring.split(',')]

    if len(pairs) < MIN_RING_PAIRS:
        raise ValidationError(
            FIELD,
            f'insufficient coordinate pairs{where}: got {len(pairs)}, a closed polygon needs at least {MIN_RING_PAIRS}',
        )

    coordinates: Coordinates = []
    for index, pair in enumerate(pairs, start=1):
        values = pair.split()
        if len(values) != 2:
            raise ValidationError(
                FIELD,
                f'coordinate pair {index}{where} must have exactly 2 values, got {len(values)}',
            )
        for value in values:
            if not _NUMBER.match(value):
                raise ValidationError(FIELD, f'non-numeric coordinate at pair {index}{where}: {value!r}')
        x, y = float(values[0]), float(values[1])
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValidationError(FIELD, f'non-finite coordinate at pair {index}{where}')
        coordinates.append((x, y))

    if coordinates[0] != coordinates[-1]:
        raise ValidationError(FIELD, f'unclosed polygon{where}: first and last coordinate pairs must be equal')

    return coordinates

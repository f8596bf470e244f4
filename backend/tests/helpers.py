"""Builders and fakes shared by the test modules."""
from buildings_api.core.constants import WGS_84_SRID
from buildings_api.core.models import Building
from datetime import datetime, timedelta, timezone
from geoalchemy2.shape import from_shape
from shapely.geometry import Point
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError
import itertools
import uuid


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

_sequence = itertools.count()


def make_building(**overrides) -> Building:
    n = next(_sequence)
    values = {
        'id': str(uuid.uuid4()),
        'cadastral_code': f'CAD-{n:04d}',
        'municipality_code': '21004',
        'name': f'Building {n}',
        'building_type': 'residential',
        'address': f'Rue de la Loi {n}, Bruxelles',
        'geom': from_shape(Point(4.35 + n / 1000, 50.85), srid=WGS_84_SRID),
        'basic_data': {'floors': 3},
        'visible': True,
        'created_at': BASE_TIME - timedelta(minutes=n),
        'updated_at': None,
        'updated_by': None,
    }
    values.update(overrides)
    return Building(**values)


def compile_sql(stmt) -> tuple[str, dict]:
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


class FakeResult:
    def __init__(self, scalar=None, rows=()):
        self._scalar = scalar
        self._rows = list(rows)

    def scalar_one(self):
        return self._scalar

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    """Stands in for an ``AsyncSession``: the first statement is the count, the second the data page."""

    def __init__(self, total: int = 0, rows=(), fail_on: str | None = None):
        self.total = total
        self.rows = list(rows)
        self.fail_on = fail_on
        self.statements = []

    @property
    def phases(self) -> list[str]:
        return ['count', 'data'][:len(self.statements)]

    async def execute(self, stmt):
        self.statements.append(stmt)
        phase = 'count' if len(self.statements) == 1 else 'data'
        if self.fail_on == phase:
            # wrapped the way SQLAlchemy wraps driver errors, statement and parameters included
            sql, params = compile_sql(stmt)
            raise OperationalError(sql, params, ConnectionResetError('connection reset by peer'))
        if phase == 'count':
            return FakeResult(scalar=self.total)
        return FakeResult(rows=self.rows)



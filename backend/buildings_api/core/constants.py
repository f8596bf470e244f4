WGS_84_SRID = 4326

SCHEMA_BUILDINGS = 'public'
TABLE_BUILDINGS = 'buildings'

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_OFFSET = 0

POLYGON_PLACEHOLDER = '[WKT_POLYGON]'

CORRELATION_ID_HEADER = 'X-Correlation-ID'

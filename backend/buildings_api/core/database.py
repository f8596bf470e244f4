from buildings_api.core.settings import settings
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker


# bound values (polygon WKT among them) stay out of SQLAlchemy error messages
async_engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    hide_parameters=True,
    pool_pre_ping=True,
)
AsyncSessionLocal = async_sessionmaker(async_engine, expire_on_commit=False)

from buildings_api.core.constants import CORRELATION_ID_HEADER
from buildings_api.core.database import AsyncSessionLocal
from collections.abc import AsyncIterator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
import uuid


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session


def get_correlation_id(request: Request) -> str:
    correlation_id = getattr(request.state, 'correlation_id', None)
    return correlation_id or request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())

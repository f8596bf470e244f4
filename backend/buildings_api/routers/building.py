from buildings_api.core.deps import get_correlation_id, get_db
from buildings_api.query import executor
from buildings_api.schemas import requests, responses
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated


api_router = APIRouter(prefix='')


@api_router.get('', response_model=responses.ResultPage)
async def list_buildings(
    filters: Annotated[requests.FilterRequest, Query()],
    db: AsyncSession = Depends(get_db),
    correlation_id: str = Depends(get_correlation_id),
) -> responses.ResultPage:
    return await executor.execute(db, filters, correlation_id=correlation_id)


@api_router.post('/search', response_model=responses.ResultPage)
async def search_buildings(
    filters: requests.FilterRequest,
    db: AsyncSession = Depends(get_db),
    correlation_id: str = Depends(get_correlation_id),
) -> responses.ResultPage:
    return await executor.execute(db, filters, correlation_id=correlation_id)

from buildings_api.core.deps import get_correlation_id, get_db
from buildings_api.tools import buildings as building_tools
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any


api_router = APIRouter(prefix='')


@api_router.get('')
async def list_tools() -> dict[str, list[dict[str, Any]]]:
    return {'tools': building_tools.TOOL_DEFINITIONS}


@api_router.post('/{tool_name}')
async def call_tool(
    tool_name: str,
    arguments: Any = Body(default=None),
    db: AsyncSession = Depends(get_db),
    correlation_id: str = Depends(get_correlation_id),
) -> dict[str, Any]:
    if tool_name not in building_tools.TOOL_NAMES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f'Tool not found: {tool_name}')
    return await building_tools.call_tool(db, tool_name, arguments, correlation_id=correlation_id)

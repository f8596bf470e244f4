from buildings_api.core.constants import CORRELATION_ID_HEADER
from buildings_api.core.database import async_engine
from buildings_api.core.errors import QueryError, ValidationError
from buildings_api.core.logging import configure_logging
from buildings_api.core.settings import settings
from buildings_api.routers import (
    building as building_router,
    tools as tools_router,
)
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import uuid


logger = logging.getLogger(__name__)


async def lifespan(app: FastAPI):
    configure_logging()
    yield
    await async_engine.dispose()


app = FastAPI(title='Buildings API', lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=['GET', 'POST'],
    allow_headers=['*'],
    expose_headers=[CORRELATION_ID_HEADER],
)

app.include_router(building_router.api_router, prefix='/buildings', tags=['building'])
app.include_router(tools_router.api_router, prefix='/tools', tags=['tools'])


@app.middleware('http')
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id
    response = await call_next(request)
    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info('rejected building query: %s', exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'error': 'validation_error', 'field': exc.field, 'message': exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    error = exc.errors()[0]
    # FastAPI prefixes the location with 'query' or 'body'
    field = '.'.join(str(part) for part in error['loc'][1:]) or 'request'
    logger.info('rejected building request: %s %s', field, error['msg'])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'error': 'validation_error', 'field': field, 'message': error['msg']},
    )


@app.exception_handler(QueryError)
async def query_error_handler(request: Request, exc: QueryError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={'error': 'query_error', 'phase': exc.phase, 'message': 'Building data is temporarily unavailable'},
    )

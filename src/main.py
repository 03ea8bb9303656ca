"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 5000
      or: python -m src.main
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.cf_common import database
from src.cf_common.errors import AppError, StoreUnavailableError, ValidationFailedError
from src.cf_common.response import error_response
from src.cf_common.validation import field_errors
from src.cf_cow_purchase.api.router import router as cow_purchase_router
from src.cf_deposit.api.router import router as deposit_router
from src.cf_gateway.api.router import get_request_id
from src.cf_gateway.api.router import router as auth_router
from src.cf_gateway.middleware.request_log import RequestLogMiddleware
from src.cf_member.api.router import router as member_router

APP_VERSION = "0.1.0"

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: check the store (degraded on failure). Shutdown: dispose."""
    if database.engine is not None and await database.ping_store():
        logger.info("Record store reachable")
    elif database.engine is not None:
        logger.warning("Starting in degraded mode: record store did not answer SELECT 1")
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("ADMIN_PASSWORD_HASH is not set — admin login is disabled")
    yield
    if database.engine is not None:
        await database.engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=APP_VERSION,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(request: Request, http_status: int, code: int, message: str, data: object = None) -> JSONResponse:
    resp = error_response(code, message, data)
    resp.request_id = get_request_id(request)
    return JSONResponse(status_code=http_status, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error(request, exc.http_status, exc.code, exc.message, exc.data)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationFailedError(field_errors(exc.errors()))
    return _error(request, err.http_status, err.code, err.message, err.data)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Record store failure on %s %s", request.method, request.url.path)
    err = StoreUnavailableError()
    return _error(request, err.http_status, err.code, err.message)


@app.exception_handler(OSError)
async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
    # asyncpg surfaces refused/timed-out connections as OSError subclasses
    logger.exception("I/O failure on %s %s", request.method, request.url.path)
    err = StoreUnavailableError()
    return _error(request, err.http_status, err.code, err.message)


app.include_router(auth_router, prefix="/api/v1")
app.include_router(member_router, prefix="/api/v1")
app.include_router(deposit_router, prefix="/api/v1")
app.include_router(cow_purchase_router, prefix="/api/v1")

Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/health")
async def health() -> dict[str, str]:
    store = "up" if await database.ping_store() else "down"
    return {"status": "ok", "version": APP_VERSION, "store": store}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=settings.PORT)

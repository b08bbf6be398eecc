"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.kb_common.errors import AppError
from src.kb_common.response import error_response_for
from src.kb_gateway.middleware.request_log import RequestLogMiddleware
from src.kb_session.api.router import get_service
from src.kb_session.api.router import router as session_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: log match configuration. Shutdown: cancel match timers."""
    logger.info(
        "%s up: match=%dms, dwell=%dms, tick=%dms, line=%s",
        settings.APP_NAME,
        settings.MATCH_DURATION_MS,
        settings.GOAL_DWELL_MS,
        settings.TICK_INTERVAL_MS,
        settings.TOTAL_GOALS_LINE,
    )
    yield
    get_service().shutdown()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response_for(exc, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(session_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}

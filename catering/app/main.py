# main.py

"""FastAPI application for the d'sis Catering booking backend."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings

from . import db as app_db
from .config.cors import allowed_origins
from .config.validate import validate_on_boot
from .domain.errors import CateringError
from .middlewares import LoggingMiddleware, PrometheusMiddleware, RequestIdMiddleware
from .obs import capture_exception, init_sentry
from .obs.logging import configure_logging
from .routes_auth import router as auth_router
from .routes_bookings import router as bookings_router
from .routes_menu import router as menu_router
from .routes_metrics import router as metrics_router
from .routes_offers import router as offers_router
from .routes_promo_codes import router as promo_codes_router
from .routes_receipts import router as receipts_router
from .utils.responses import err, ok

LOG_LEVEL = os.getenv("LOG_LEVEL", get_settings().log_level).upper()
configure_logging(getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger("api")
init_sentry(env=os.getenv("APP_ENV"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_settings().auto_create_schema:
        await app_db.create_schema()
    yield
    await app_db.dispose()


validate_on_boot()
settings = get_settings()
app = FastAPI(
    title="d'sis Catering API",
    version="1.0.0",
    servers=[{"url": "/"}],
    lifespan=lifespan,
)

app.add_middleware(PrometheusMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(settings),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _log_extra(request: Request, status: int) -> dict:
    return {
        "status": status,
        "route": request.url.path,
        "user": getattr(request.state, "user_id", None),
    }


@app.exception_handler(CateringError)
async def catering_error_handler(request: Request, exc: CateringError):
    logger.warning(exc.message, extra=_log_extra(request, exc.status_code))
    return JSONResponse(
        err(exc.status_code, exc.message, hint=exc.hint),
        status_code=exc.status_code,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(exc.detail, extra=_log_extra(request, exc.status_code))
    return JSONResponse(
        err(exc.status_code, exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()
    ]
    logger.info("validation_error", extra=_log_extra(request, 400))
    return JSONResponse(
        err(400, "Validation error", details=details), status_code=400
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "storage_error: %s", exc.__class__.__name__, extra=_log_extra(request, 500)
    )
    capture_exception(exc)
    return JSONResponse(err(500, "Storage error"), status_code=500)


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", extra=_log_extra(request, 500))
    capture_exception(exc)
    return JSONResponse(err(500, "Internal Server Error"), status_code=500)


@app.get("/health")
async def health() -> dict:
    return ok({"status": "ok"})


app.include_router(auth_router)
app.include_router(menu_router)
app.include_router(offers_router)
app.include_router(promo_codes_router)
app.include_router(bookings_router)
app.include_router(receipts_router)
app.include_router(metrics_router)

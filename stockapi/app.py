"""FastAPI application factory for the stock backend."""
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from stockapi.core.config import Settings, get_settings
from stockapi.core.logs import configure_logging
from stockapi.core.responses import ResponseCode, failure_response, success_response
from stockapi.db.database import Database
from stockapi.repositories import Repositories
from stockapi.routers import business as business_router
from stockapi.routers import imports as imports_router
from stockapi.routers import item as item_router
from stockapi.routers import partner as partner_router
from stockapi.routers import storehouse as storehouse_router
from stockapi.routers import transaction as transaction_router
from stockapi.routers import user as user_router

logger = logging.getLogger(__name__)

DEV_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every API response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the app; the database is connected on startup and closed on shutdown."""
    settings = settings or get_settings()
    configure_logging(settings)
    db = database or Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.connect()
        app.state.db = db
        app.state.repositories = Repositories.from_database(db)
        logger.info("stockapi started (env=%s, mode=%s)", settings.app_env, db.mode.value)
        try:
            yield
        finally:
            db.close()

    app = FastAPI(title="Stock API", lifespan=lifespan)

    allowed_cors = set(settings.cors_origins)
    if not settings.is_production:
        allowed_cors.update(DEV_ORIGINS)
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_production)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return failure_response(ResponseCode.INVALID_REQUEST_INPUT, {"message": "Invalid request", "errors": exc.errors()})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return failure_response(ResponseCode.SERVER_ERROR, exc)

    @app.get("/")
    def health():
        return success_response(
            ResponseCode.OK,
            {"status": "ok", "env": settings.app_env, "dbMode": db.mode.value},
        )

    app.include_router(item_router.router)
    app.include_router(partner_router.router)
    app.include_router(transaction_router.router)
    app.include_router(imports_router.router)
    app.include_router(user_router.router)
    app.include_router(business_router.router)
    app.include_router(storehouse_router.router)
    return app


app = create_app()

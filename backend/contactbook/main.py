"""
FastAPI main application module for the contact book service
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from contactbook.api.api import api_router
from contactbook.core.config import Settings, get_settings
from contactbook.core.database import Database
from contactbook.core.database_utils import check_database_connection, create_all_tables, seed_license_key
from contactbook.core.exceptions import ContactBookError
from contactbook.core.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "script-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:"
    ),
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database on startup and release the pool on shutdown"""
    logger.info("Starting contact book API...")
    database: Database = app.state.db

    if not check_database_connection(database):
        logger.error("Failed to connect to database")
        raise RuntimeError("Database connection failed")

    create_all_tables(database)
    seed_license_key(database, app.state.settings.DEMO_LICENSE_KEY)
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down contact book API...")
    database.dispose()


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build an application instance with its own settings, connection pool
    and rate limiter.
    """
    settings = settings or get_settings()
    settings.validate_production()

    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="Contact Book API",
        description="Multi-tenant address book with tags and contact connections",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database or Database(settings.database_url, echo=settings.DEBUG, ssl=settings.DATABASE_SSL)
    app.state.rate_limiter = FixedWindowRateLimiter(
        settings.API_RATE_LIMIT, settings.API_RATE_LIMIT_WINDOW_SECONDS
    )

    # Coarse per-IP limit on the API surface
    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path.startswith("/api/"):
            limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
            client = request.client.host if request.client else "unknown"
            if not limiter.hit(client):
                logger.warning(f"Rate limit exceeded for {client}")
                response = _error(429, "Too many requests, please try again later.")
                response.headers["Retry-After"] = str(limiter.retry_after(client))
                return response
        return await call_next(request)

    # Request timing and security headers
    @app.middleware("http")
    async def add_response_headers(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    # CORS middleware, outermost so rate-limited responses carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ContactBookError)
    async def contact_book_error_handler(request: Request, exc: ContactBookError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected request body for {request.url.path}: {exc.errors()}")
        return _error(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(404, "Route not found")
        if exc.status_code == 405:
            return _error(405, "Method not allowed")
        return _error(exc.status_code, str(exc.detail))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return _error(500, "Internal server error")

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring"""
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    static_dir = Path(settings.STATIC_DIR)

    @app.get("/", include_in_schema=False)
    async def root():
        """Single-page front end"""
        index = static_dir / "index.html"
        if not index.is_file():
            return _error(404, "Route not found")
        return FileResponse(index)

    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "contactbook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )

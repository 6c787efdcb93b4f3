"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.errors import APIError
from .api.routers import appointments, consultations, contact, doctors, health, payments
from .api.utils.responses import fail
from .core.config import get_settings
from .core.structured_logger import configure_logging
from .domain.errors import DomainError
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware
from .middleware.security_headers_middleware import SecurityHeadersMiddleware

logger = logging.getLogger("amrutam")

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB and register the Beanie documents for the app's lifetime."""
    from beanie import init_beanie
    from motor.motor_asyncio import AsyncIOMotorClient
    import certifi

    from .adapters.db.mongo.models import DOCUMENT_MODELS

    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.app_env})")

    mongo_uri = settings.database.uri
    timeout_ms = settings.database.server_selection_timeout_ms
    # Enable TLS only for Atlas SRV URIs
    if mongo_uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            mongo_uri,
            serverSelectionTimeoutMS=timeout_ms,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=timeout_ms)

    try:
        await init_beanie(database=client[settings.database.db_name], document_models=DOCUMENT_MODELS)
    except Exception:
        logger.exception("Database connection failed")
        client.close()
        raise
    app.state.mongo_client = client
    logger.info(f"Database connection established: db={settings.database.db_name}")

    yield

    client.close()
    app.state.mongo_client = None
    logger.info("Database connection closed")


def _validation_messages(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", []) if part != "body")
        msg = error.get("msg", "Validation error")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages)


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    ``use_lifespan=False`` builds the app without connecting to MongoDB;
    callers then supply repositories through dependency overrides.
    """
    settings = get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="REST API for the Amrutam Ayurvedic doctor portal",
        debug=settings.debug,
        lifespan=lifespan if use_lifespan else None,
    )

    # Starlette runs the last added middleware first
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
    )
    app.add_middleware(PerformanceMiddleware)
    app.add_middleware(RequestIDMiddleware)

    for module in (health, doctors, appointments, consultations, contact, payments):
        app.include_router(module.router, prefix=API_PREFIX)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logger.info(
            f"DomainError: {exc.error_code} ({exc.http_status}) {exc.message} "
            f"| request_id={getattr(request.state, 'request_id', None)}"
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=fail(exc.message, exc.error_code or "DOMAIN_ERROR").model_dump(),
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.info(
            f"APIError: {exc.code} ({exc.http_status}) {exc.message} "
            f"| request_id={getattr(request.state, 'request_id', None)}"
        )
        return JSONResponse(status_code=exc.http_status, content=fail(exc.message, exc.code).model_dump())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = _validation_messages(exc)
        logger.info(f"ValidationError on {request.method} {request.url.path}: {details}")
        return JSONResponse(status_code=400, content=fail("Validation failed", details).model_dump())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Route {request.url.path} not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(message).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled error on {request.method} {request.url.path} "
            f"| request_id={getattr(request.state, 'request_id', None)}"
        )
        error = str(exc) if get_settings().debug else None
        return JSONResponse(status_code=500, content=fail("Internal server error", error).model_dump())

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": f"{API_PREFIX}/health",
                "doctors": f"{API_PREFIX}/doctors",
                "appointments": f"{API_PREFIX}/appointments",
                "consultations": f"{API_PREFIX}/consultations",
                "contact": f"{API_PREFIX}/contact",
                "payments": f"{API_PREFIX}/payments",
            },
        }

    return app


# Create the app instance
app = create_app()

"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware, exception handlers and the database on startup.
"""

import time
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.api.routes.redirect import get_index_file
from app.core.config import settings
from app.core.logging import setup_logging
from app.db import SessionManager, get_engine, get_session_factory, init_models
from app.middleware.logging import LoggingMiddleware
from app.repositories.mapping_repository import MappingRepository

# Setup logging
logger = setup_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(LoggingMiddleware)


def mount_static(application: FastAPI) -> bool:
    """Mount STATIC_DIR at /static when it names an existing directory."""
    if not settings.STATIC_DIR:
        return False
    if not Path(settings.STATIC_DIR).is_dir():
        logger.warning(f"STATIC_DIR {settings.STATIC_DIR!r} is not a directory; client assets disabled")
        return False
    application.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")
    return True


# Client assets; must be registered before the catch-all redirect route
mount_static(app)


@app.get("/", include_in_schema=False)
async def index():
    """Serve the client page when one is configured."""
    index_file = get_index_file()
    if index_file is None:
        return JSONResponse({"name": settings.APP_NAME, "version": settings.APP_VERSION})
    return FileResponse(index_file, media_type="text/html")


# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 with details."""
    logger.warning(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "errors": jsonable_errors(exc)}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"

    logger.bind(error_id=error_id).opt(exception=exc).error(
        f"Unhandled exception in {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) if settings.DEBUG else "Internal server error",
            "error_id": error_id,
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input, which may not be serializable."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


@app.on_event("startup")
async def startup_event():
    """Create the database engine and the mapping store."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    engine = get_engine()
    await init_models(engine)

    app.state.engine = engine
    app.state.mapping_repository = MappingRepository(
        SessionManager(get_session_factory(engine))
    )
    logger.info("Mapping store ready")


@app.on_event("shutdown")
async def shutdown_event():
    """Run cleanup tasks."""
    logger.info(f"Shutting down {settings.APP_NAME}")

    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()


def run() -> None:
    """Run the service with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()

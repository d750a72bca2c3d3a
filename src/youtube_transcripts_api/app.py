"""Main FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from youtube_transcripts.core.rate_limiter import KeyedRateLimiter

from .config import get_api_config
from .middleware import setup_middleware
from .api.models.base import HealthResponse, HealthStatus
from .exceptions import APIError, ValidationError


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Args:
        app: FastAPI application instance
    """
    logger.info("Starting YouTube Transcripts API...")
    config = get_api_config()
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Debug mode: {config.debug}")

    yield

    logger.info("Shutting down YouTube Transcripts API...")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app(rate_limiter: Optional[KeyedRateLimiter] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        rate_limiter: Per-client limiter for the transcript routes; built from config when omitted

    Returns:
        Configured FastAPI application instance
    """
    config = get_api_config()

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=config.version,
        debug=config.debug,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None
    )

    setup_middleware(app, rate_limiter=rate_limiter)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(data=HealthStatus(
            status="healthy",
            message="YouTube Transcripts API is running",
            version=config.version
        ))

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": config.title,
            "version": config.version,
            "docs": "/docs" if config.debug else "Documentation disabled in production"
        }

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle API errors."""
        logger.warning(f"API Error on {request.url.path}: {exc.message} (Code: {exc.error_code})")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies in the standard error envelope."""
        error = ValidationError(_validation_message(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    from .api.routers import health, transcript

    app.include_router(
        health.router,
        prefix="/api/v1",
        tags=["Health"]
    )

    app.include_router(
        transcript.router,
        prefix="/api/v1/transcript",
        tags=["Transcripts"]
    )

    logger.info("FastAPI application created successfully")
    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    config = get_api_config()
    uvicorn.run(
        "youtube_transcripts_api.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    run()

"""Middleware for the FastAPI application."""

import time
import uuid
import logging
from typing import Optional
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from youtube_transcripts.core.rate_limiter import KeyedRateLimiter

from .config import get_api_config
from .exceptions import APIError, InternalServerError, RateLimitError


logger = logging.getLogger(__name__)


def client_ip(request: Request) -> str:
    """Best-effort caller address, honouring proxy headers."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process request and log details.

        Args:
            request: FastAPI request object
            call_next: Next middleware/endpoint

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        logger.info(
            f"Request started - ID: {request_id}, "
            f"Method: {request.method}, "
            f"Path: {request.url.path}, "
            f"Client IP: {client_ip(request)}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed - ID: {request_id}, "
                f"Error: {str(e)}, "
                f"Duration: {process_time:.3f}s"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"Request completed - ID: {request_id}, "
            f"Status: {response.status_code}, "
            f"Duration: {process_time:.3f}s"
        )
        response.headers["X-Request-ID"] = request_id
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for handling and formatting errors."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)

        except APIError as e:
            logger.warning(f"API Error: {e.message} (Code: {e.error_code})")
            return JSONResponse(status_code=e.status_code, content=e.to_dict())

        except Exception:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception(f"Unexpected error in request {request_id}")

            error = InternalServerError("An unexpected error occurred")
            content = error.to_dict()
            content["request_id"] = request_id
            return JSONResponse(status_code=error.status_code, content=content)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client fixed-window rate limiting for paths under ``path_prefix``."""

    def __init__(
        self,
        app,
        limiter: Optional[KeyedRateLimiter] = None,
        path_prefix: Optional[str] = None
    ):
        super().__init__(app)
        config = get_api_config()
        self.limiter = limiter or KeyedRateLimiter(
            max_requests=config.rate_limit_requests,
            window_seconds=config.rate_limit_window
        )
        self.path_prefix = path_prefix if path_prefix is not None else config.rate_limit_path_prefix

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        ip = client_ip(request)
        if not self.limiter.allow(ip):
            logger.warning(f"Rate limit exceeded for {ip} on {request.url.path}")
            error = RateLimitError()
            return JSONResponse(status_code=error.status_code, content=error.to_dict())

        return await call_next(request)


def setup_cors_middleware(app) -> None:
    """
    Setup CORS middleware for the application.

    Args:
        app: FastAPI application instance
    """
    config = get_api_config()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"]
    )


def setup_middleware(app, rate_limiter: Optional[KeyedRateLimiter] = None) -> None:
    """
    Setup all middleware for the application.

    Args:
        app: FastAPI application instance
        rate_limiter: Limiter shared across requests; built from config when omitted
    """
    # Last added runs first: CORS, error handling, logging, then rate limiting
    app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    setup_cors_middleware(app)

    logger.info("Middleware setup completed")

"""Health check router."""

from fastapi import APIRouter

from ...api.models.base import HealthResponse, HealthStatus
from ...config import get_api_config

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status response
    """
    return HealthResponse(data=HealthStatus(
        status="healthy",
        message="YouTube Transcripts API is running",
        version=get_api_config().version
    ))

"""
YouTube Transcripts Package

Retrieves caption data and metadata for YouTube videos through the InnerTube
API and renders it as clean text, timestamped lines, SRT or chapter summaries.
"""

__version__ = "1.0.0"

from .utils.logging import get_logger
from .services.transcript_service import ResultStatus, ServiceResult, TranscriptService

__all__ = [
    'get_logger',
    'ResultStatus',
    'ServiceResult',
    'TranscriptService',
]

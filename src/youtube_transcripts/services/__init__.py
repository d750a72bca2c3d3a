"""Service layer for transcript operations."""

from .batch_service import BatchItem, BatchProcessor, BatchReport
from .transcript_service import ResultStatus, ServiceResult, TranscriptService

__all__ = [
    "BatchItem",
    "BatchProcessor",
    "BatchReport",
    "ResultStatus",
    "ServiceResult",
    "TranscriptService",
]

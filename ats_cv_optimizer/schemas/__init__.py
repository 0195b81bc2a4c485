"""Schema exports."""

from .cv_data import CV_RESPONSE_SCHEMA, ContactInfo, CvData, Education, WorkExperience
from .document import DocumentFormat, ExtractionResult, PageImage, SourceDocument
from .ingestion_state import (
    FileSelected,
    IngestionCleared,
    IngestionEvent,
    IngestionSnapshot,
    IngestionStatus,
)

__all__ = [
    "CV_RESPONSE_SCHEMA",
    "ContactInfo",
    "CvData",
    "Education",
    "WorkExperience",
    "DocumentFormat",
    "ExtractionResult",
    "PageImage",
    "SourceDocument",
    "FileSelected",
    "IngestionCleared",
    "IngestionEvent",
    "IngestionSnapshot",
    "IngestionStatus",
]

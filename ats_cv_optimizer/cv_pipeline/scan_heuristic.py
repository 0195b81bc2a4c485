"""Classify a PDF as text-native or image-scanned from its extracted text layer."""

from ats_cv_optimizer.config import SCAN_WORD_THRESHOLD
from ats_cv_optimizer.schemas.document import DocumentFormat, ExtractionResult
from ats_cv_optimizer.utils.helpers import count_words


def is_scanned(
    result: ExtractionResult,
    document_format: DocumentFormat = DocumentFormat.PDF,
    word_threshold: int = SCAN_WORD_THRESHOLD,
) -> bool:
    """
    A paged PDF whose text layer has fewer than word_threshold words is treated as a scan.
    DOCX is never scanned.
    """
    if document_format is not DocumentFormat.PDF:
        return False
    return result.page_count > 0 and count_words(result.text) < word_threshold

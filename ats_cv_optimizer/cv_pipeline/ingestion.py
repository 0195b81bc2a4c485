"""Ingestion orchestrator: file -> text, with OCR fallback for scanned PDFs.

Runs as an explicit state machine driven by events:

    IDLE -> EXTRACTING -> DONE
                       -> SCANNING -> DONE
                       -> FAILED

Every attempt gets a generation token. A result whose token is no longer
current is dropped, so an older, slower attempt can never overwrite the state
of a newer one or of a clear.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence

from ats_cv_optimizer.agents.ocr_agent import extract_text_from_page_images
from ats_cv_optimizer.config import OCR_MAX_PAGES
from ats_cv_optimizer.cv_pipeline.page_rasterizer import rasterize_pdf_pages
from ats_cv_optimizer.cv_pipeline.scan_heuristic import is_scanned
from ats_cv_optimizer.cv_pipeline.text_extractor import extract_text
from ats_cv_optimizer.errors import (
    CorruptDocumentError,
    GenerationFailureError,
    IngestionError,
    IngestionErrorKind,
    NoContentError,
    PasswordProtectedError,
    RenderFailureError,
    UnsupportedFormatError,
)
from ats_cv_optimizer.schemas.document import DocumentFormat, ExtractionResult, PageImage, SourceDocument
from ats_cv_optimizer.schemas.ingestion_state import (
    FileSelected,
    IngestionCleared,
    IngestionEvent,
    IngestionSnapshot,
    IngestionStatus,
)
from ats_cv_optimizer.services.generation_service import GenerationService
from ats_cv_optimizer.utils.helpers import resolve_document_format
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)

Extractor = Callable[[bytes, DocumentFormat], ExtractionResult]
Rasterizer = Callable[[bytes, int], Awaitable[List[PageImage]]]
OcrReader = Callable[[Sequence[PageImage], GenerationService], Awaitable[str]]
Listener = Callable[[IngestionSnapshot], None]


def map_extraction_error(exc: Exception, document_format: DocumentFormat) -> IngestionError:
    """Map an extractor failure to exactly one user-facing category."""
    if isinstance(exc, UnsupportedFormatError):
        kind = IngestionErrorKind.UNSUPPORTED_FORMAT
    elif isinstance(exc, PasswordProtectedError):
        kind = IngestionErrorKind.PASSWORD_PROTECTED
    elif document_format is DocumentFormat.DOCX:
        kind = IngestionErrorKind.DOCX_READ_FAILURE
    elif isinstance(exc, CorruptDocumentError):
        kind = IngestionErrorKind.CORRUPT_DOCUMENT
    else:
        kind = IngestionErrorKind.GENERIC_READ_FAILURE
    return IngestionError(kind, str(exc))


def map_scan_error(exc: Exception) -> IngestionError:
    """Map a rasterization / OCR failure to a user-facing category."""
    if isinstance(exc, IngestionError):
        return exc
    if isinstance(exc, (RenderFailureError, NoContentError)):
        kind = IngestionErrorKind.RENDER_FAILURE
    elif isinstance(exc, GenerationFailureError):
        kind = IngestionErrorKind.OCR_CAPABILITY_FAILURE
    else:
        kind = IngestionErrorKind.GENERIC_READ_FAILURE
    return IngestionError(kind, str(exc))


class IngestionOrchestrator:
    """Turns one selected file into CV text. Holds no state besides the current snapshot."""

    def __init__(
        self,
        generation_service: GenerationService,
        *,
        extractor: Extractor = extract_text,
        rasterizer: Rasterizer = rasterize_pdf_pages,
        ocr_reader: OcrReader = extract_text_from_page_images,
        max_ocr_pages: int = OCR_MAX_PAGES,
        listener: Optional[Listener] = None,
    ) -> None:
        self._service = generation_service
        self._extractor = extractor
        self._rasterizer = rasterizer
        self._ocr_reader = ocr_reader
        self._max_ocr_pages = max_ocr_pages
        self.listener = listener
        self._attempt = 0
        self._state = IngestionSnapshot()

    @property
    def state(self) -> IngestionSnapshot:
        return self._state

    async def handle(self, event: IngestionEvent) -> IngestionSnapshot:
        """Apply one event and return the resulting snapshot."""
        if isinstance(event, IngestionCleared):
            return self.clear()
        if isinstance(event, FileSelected):
            return await self.ingest(event.content, event.mime_type, event.filename)
        raise TypeError(f"Unknown ingestion event: {type(event).__name__}")

    def clear(self) -> IngestionSnapshot:
        """Reset to IDLE and invalidate any attempt still in flight."""
        self._attempt += 1
        return self._commit(self._attempt, IngestionSnapshot(attempt=self._attempt))

    async def ingest(self, content: bytes, mime_type: str, filename: str = "") -> IngestionSnapshot:
        """Run one ingestion attempt. Failures end in FAILED; they are not raised."""
        self._attempt += 1
        attempt = self._attempt
        base = IngestionSnapshot(attempt=attempt, filename=filename, file_size=len(content))

        document_format = resolve_document_format(mime_type, filename)
        if document_format is None:
            logger.warning("Unsupported file type: %s (%s)", filename, mime_type)
            return self._fail(base, IngestionError(IngestionErrorKind.UNSUPPORTED_FORMAT, mime_type))
        document = SourceDocument(content=content, format=document_format, filename=filename)

        self._commit(attempt, base.model_copy(update={"status": IngestionStatus.EXTRACTING}))
        try:
            extraction = await asyncio.to_thread(self._extractor, document.content, document.format)
        except Exception as e:
            logger.exception("Extraction failed for %s: %s", filename, e)
            return self._fail(base, map_extraction_error(e, document.format))
        if self._is_stale(attempt):
            return self._state

        warnings: List[str] = []
        if is_scanned(extraction, document.format):
            logger.info("%s looks scanned (%s page(s)); switching to OCR", filename, extraction.page_count)
            self._commit(attempt, base.model_copy(update={"status": IngestionStatus.SCANNING}))
            try:
                text = await self._scan(document)
            except Exception as e:
                # The near-empty text layer is discarded too
                logger.exception("OCR failed for %s: %s", filename, e)
                return self._fail(base, map_scan_error(e))
            if extraction.page_count > self._max_ocr_pages:
                warnings.append(
                    f"Only the first {self._max_ocr_pages} of {extraction.page_count} pages were scanned."
                )
        else:
            text = extraction.text

        return self._commit(
            attempt,
            base.model_copy(update={"status": IngestionStatus.DONE, "text": text, "warnings": warnings}),
        )

    async def _scan(self, document: SourceDocument) -> str:
        images = await self._rasterizer(document.content, self._max_ocr_pages)
        text = await self._ocr_reader(images, self._service)
        if not text or not text.strip():
            raise IngestionError(IngestionErrorKind.OCR_EMPTY_RESULT, "AI OCR returned no text")
        return text

    def _is_stale(self, attempt: int) -> bool:
        return attempt != self._attempt

    def _fail(self, base: IngestionSnapshot, error: IngestionError) -> IngestionSnapshot:
        return self._commit(
            base.attempt,
            base.model_copy(
                update={
                    "status": IngestionStatus.FAILED,
                    "error": error.kind,
                    "error_message": error.message,
                }
            ),
        )

    def _commit(self, attempt: int, snapshot: IngestionSnapshot) -> IngestionSnapshot:
        if self._is_stale(attempt):
            logger.info("Dropping result of stale ingestion attempt %s (current %s)", attempt, self._attempt)
            return self._state
        self._state = snapshot
        if self.listener is not None:
            self.listener(snapshot)
        return snapshot

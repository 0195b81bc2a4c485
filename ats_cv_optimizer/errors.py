"""Error taxonomy for ingestion and optimization.

Low-level errors are raised by the pipeline components and carry diagnostic
detail for the log. The orchestrator and the optimizer map them into
``IngestionError`` / ``OptimizationError``, whose ``message`` is the only text
shown to the user.
"""

from enum import Enum
from typing import Optional


class IngestionErrorKind(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    PASSWORD_PROTECTED = "password_protected"
    CORRUPT_DOCUMENT = "corrupt_document"
    DOCX_READ_FAILURE = "docx_read_failure"
    RENDER_FAILURE = "render_failure"
    OCR_EMPTY_RESULT = "ocr_empty_result"
    OCR_CAPABILITY_FAILURE = "ocr_capability_failure"
    GENERIC_READ_FAILURE = "generic_read_failure"


INGESTION_ERROR_MESSAGES = {
    IngestionErrorKind.UNSUPPORTED_FORMAT: "Invalid file type. Use PDF or DOCX.",
    IngestionErrorKind.PASSWORD_PROTECTED: "This PDF is password-protected. Please upload an unprotected file.",
    IngestionErrorKind.CORRUPT_DOCUMENT: "The uploaded PDF file appears to be invalid or corrupted.",
    IngestionErrorKind.DOCX_READ_FAILURE: "Could not read the DOCX file. It may be corrupted or in an old format.",
    IngestionErrorKind.RENDER_FAILURE: "Could not convert the PDF pages to images for OCR.",
    IngestionErrorKind.OCR_EMPTY_RESULT: "AI could not read any text from this document.",
    IngestionErrorKind.OCR_CAPABILITY_FAILURE: (
        "AI-powered text extraction failed. The document might be unreadable or a network issue occurred."
    ),
    IngestionErrorKind.GENERIC_READ_FAILURE: "Failed to read the contents of this file.",
}


class OptimizationErrorKind(str, Enum):
    MALFORMED_OUTPUT = "malformed_output"
    INVALID_CREDENTIAL = "invalid_credential"
    GENERATION_FAILURE = "generation_failure"


OPTIMIZATION_ERROR_MESSAGES = {
    OptimizationErrorKind.MALFORMED_OUTPUT: "The AI returned an invalid JSON format. Please try again.",
    OptimizationErrorKind.INVALID_CREDENTIAL: "The API key is invalid. Please check your configuration.",
    OptimizationErrorKind.GENERATION_FAILURE: "Failed to generate optimized CV due to an API error.",
}


class IngestionError(Exception):
    """Terminal, user-facing failure of one ingestion attempt."""

    def __init__(self, kind: IngestionErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.message = INGESTION_ERROR_MESSAGES[kind]
        self.detail = detail
        super().__init__(self.message)


class OptimizationError(Exception):
    """Terminal, user-facing failure of one optimization call."""

    def __init__(self, kind: OptimizationErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.message = OPTIMIZATION_ERROR_MESSAGES[kind]
        self.detail = detail
        super().__init__(self.message)


# Component-level errors


class DocumentError(Exception):
    """Base class for failures reading a source document."""


class UnsupportedFormatError(DocumentError):
    pass


class PasswordProtectedError(DocumentError):
    pass


class CorruptDocumentError(DocumentError):
    """The container could not be opened or read."""

    def __init__(self, document_format: str, detail: str = "") -> None:
        self.document_format = document_format
        super().__init__(f"Could not read {document_format} document: {detail}")


class RenderFailureError(DocumentError):
    """No page of the PDF could be rasterized."""


class NoContentError(ValueError):
    """An OCR request was made without any page images."""


class GenerationFailureError(Exception):
    """The generation capability failed while serving an OCR request."""

"""Service exports."""

from .cv_renderer import format_contact_line, render_cv_markdown, render_cv_text
from .generation_service import (
    GenerationCredentialError,
    GenerationService,
    GenerationServiceError,
    ImagePart,
    OpenAIGenerationService,
    TextPart,
    get_generation_service,
)
from .pdf_export import export_cv_pdf, export_filename

__all__ = [
    "format_contact_line",
    "render_cv_markdown",
    "render_cv_text",
    "GenerationCredentialError",
    "GenerationService",
    "GenerationServiceError",
    "ImagePart",
    "OpenAIGenerationService",
    "TextPart",
    "get_generation_service",
    "export_cv_pdf",
    "export_filename",
]

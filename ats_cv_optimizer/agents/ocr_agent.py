"""OCR Agent: read rasterized PDF pages with a multimodal model in a single request."""

from typing import List, Sequence

from ats_cv_optimizer.config import OCR_TEMPERATURE
from ats_cv_optimizer.errors import GenerationFailureError, NoContentError
from ats_cv_optimizer.schemas.document import PageImage
from ats_cv_optimizer.services.generation_service import GenerationService, ImagePart, PromptPart, TextPart
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)

OCR_PROMPT = (
    "You are an Optical Character Recognition (OCR) expert. "
    "Extract all text content from these document pages in the order they are provided. "
    "Combine the text from all pages into a single block of text. "
    "Preserve the original structure, paragraphs, and line breaks as best as possible."
)


def build_ocr_parts(images: Sequence[PageImage]) -> List[PromptPart]:
    """Instruction first, then one image part per page in the given order."""
    parts: List[PromptPart] = [TextPart(text=OCR_PROMPT)]
    parts.extend(ImagePart(data=img.encoded_bytes, mime_type=img.mime_type) for img in images)
    return parts


async def extract_text_from_page_images(images: Sequence[PageImage], service: GenerationService) -> str:
    """
    Run OCR over all pages with one generation call and return the model text verbatim.
    Raises NoContentError for an empty sequence and GenerationFailureError on any capability error.
    Blank output is returned as-is; the caller decides what it means.
    """
    if not images:
        raise NoContentError("No page images to read")

    parts = build_ocr_parts(images)
    try:
        text = await service.generate(parts, temperature=OCR_TEMPERATURE)
    except Exception as e:
        logger.exception("OCR request failed for %s page(s): %s", len(images), e)
        raise GenerationFailureError("Failed to extract text from the document images") from e

    logger.info("OCR Agent finished: pages=%s chars=%s", len(images), len(text or ""))
    return text or ""

"""Render PDF pages to JPEG payloads for OCR."""

import asyncio
import base64
from io import BytesIO
from typing import AsyncIterator, List

import pdfplumber
from PIL import Image

from ats_cv_optimizer.config import (
    OCR_IMAGE_MIME_TYPE,
    OCR_IMAGE_QUALITY,
    OCR_MAX_PAGES,
    OCR_RENDER_SCALE,
    PDF_BASE_DPI,
)
from ats_cv_optimizer.errors import RenderFailureError
from ats_cv_optimizer.schemas.document import PageImage
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)


def encode_bitmap(bitmap: Image.Image, quality: float = OCR_IMAGE_QUALITY) -> str:
    """Encode a bitmap as JPEG and return the bare base64 payload."""
    buffer = BytesIO()
    bitmap.convert("RGB").save(buffer, format="JPEG", quality=int(round(quality * 100)))
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def _render_page(page, scale: float, quality: float) -> str:
    page_image = page.to_image(resolution=int(PDF_BASE_DPI * scale))
    return encode_bitmap(page_image.original, quality)


async def iter_page_images(
    pdf_bytes: bytes,
    max_pages: int = OCR_MAX_PAGES,
    scale: float = OCR_RENDER_SCALE,
    quality: float = OCR_IMAGE_QUALITY,
) -> AsyncIterator[PageImage]:
    """
    Yield one PageImage per page, pages 1..min(page_count, max_pages), in order.
    Each page is rendered off the event loop and the next render starts only after
    the previous one finished. Pages that fail to render are skipped.
    """
    try:
        pdf = pdfplumber.open(BytesIO(pdf_bytes))
    except Exception as e:
        raise RenderFailureError(f"Could not open PDF for rendering: {e}") from e

    with pdf:
        try:
            total = len(pdf.pages)
        except Exception as e:
            raise RenderFailureError(f"Could not read PDF page tree: {e}") from e
        limit = min(total, max_pages)
        if total > limit:
            logger.warning("OCR limited to first %s of %s pages", limit, total)
        for index in range(1, limit + 1):
            try:
                payload = await asyncio.to_thread(_render_page, pdf.pages[index - 1], scale, quality)
            except Exception as e:
                logger.warning("Could not rasterize page %s: %s", index, e)
                continue
            yield PageImage(index=index, encoded_bytes=payload, mime_type=OCR_IMAGE_MIME_TYPE)


async def rasterize_pdf_pages(pdf_bytes: bytes, max_pages: int = OCR_MAX_PAGES) -> List[PageImage]:
    """Collect rendered pages. An empty result is a RenderFailureError, never a valid value."""
    images = [image async for image in iter_page_images(pdf_bytes, max_pages=max_pages)]
    if not images:
        raise RenderFailureError("Could not convert PDF pages to images for OCR")
    logger.info("Rasterized %s page(s) for OCR", len(images))
    return images

"""CV ingestion pipeline: text extraction (PDF/DOCX), scan detection, OCR fallback."""

from ats_cv_optimizer.cv_pipeline.ingestion import IngestionOrchestrator
from ats_cv_optimizer.cv_pipeline.page_rasterizer import iter_page_images, rasterize_pdf_pages
from ats_cv_optimizer.cv_pipeline.scan_heuristic import is_scanned
from ats_cv_optimizer.cv_pipeline.text_extractor import extract_text

__all__ = [
    "IngestionOrchestrator",
    "iter_page_images",
    "rasterize_pdf_pages",
    "is_scanned",
    "extract_text",
]

"""Agent exports."""

from .ocr_agent import extract_text_from_page_images
from .optimizer_agent import optimize_cv, parse_cv_data, run_cv_optimization

__all__ = ["extract_text_from_page_images", "optimize_cv", "parse_cv_data", "run_cv_optimization"]

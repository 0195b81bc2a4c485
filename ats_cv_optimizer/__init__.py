"""ATS CV Optimizer: CV ingestion (PDF/DOCX with OCR fallback) and job-targeted CV rewriting."""

__version__ = "0.1.0"

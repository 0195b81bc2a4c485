"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
# Must be a vision-capable model
OCR_MODEL_NAME: str = os.getenv("OCR_MODEL_NAME", MODEL_NAME)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Accepted uploads, by declared type (no content sniffing)
PDF_MIME_TYPE: str = "application/pdf"
DOCX_MIME_TYPE: str = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ACCEPTED_MIME_TYPES: dict = {
    PDF_MIME_TYPE: "pdf",
    DOCX_MIME_TYPE: "docx",
}
ACCEPTED_EXTENSIONS: dict = {
    ".pdf": "pdf",
    ".docx": "docx",
}

# Scanned-PDF detection: fewer words than this on a paged document means no real text layer
SCAN_WORD_THRESHOLD: int = 50

# OCR fallback
OCR_MAX_PAGES: int = 5  # later pages are dropped
OCR_RENDER_SCALE: float = 2.0
PDF_BASE_DPI: int = 72
OCR_IMAGE_QUALITY: float = 0.9
OCR_IMAGE_MIME_TYPE: str = "image/jpeg"

# Generation
OPTIMIZER_TEMPERATURE: float = 0.4
OCR_TEMPERATURE: float = 0.0

# PDF export (top, left, bottom, right)
EXPORT_MARGINS_INCHES: tuple = (0.5, 0.5, 0.5, 0.5)

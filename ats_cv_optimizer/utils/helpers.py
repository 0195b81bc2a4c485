"""Helper utilities for the ATS CV Optimizer."""

import json
import re
from pathlib import PurePath
from typing import Optional

from ats_cv_optimizer.config import ACCEPTED_EXTENSIONS, ACCEPTED_MIME_TYPES
from ats_cv_optimizer.schemas.document import DocumentFormat

# Browsers send these when they do not know the type; fall back to the extension then
_GENERIC_MIME_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


def count_words(text: str) -> int:
    """Whitespace-tokenized word count."""
    if not text:
        return 0
    return len(text.split())


def resolve_document_format(mime_type: Optional[str], filename: Optional[str] = None) -> Optional[DocumentFormat]:
    """
    Map a declared upload type to a DocumentFormat, or None if it is not accepted.
    The MIME type decides; the file extension is only consulted when the MIME type is missing or generic.
    """
    mime = (mime_type or "").split(";")[0].strip().lower()
    if mime in ACCEPTED_MIME_TYPES:
        return DocumentFormat(ACCEPTED_MIME_TYPES[mime])
    if mime not in _GENERIC_MIME_TYPES:
        return None
    suffix = PurePath(filename or "").suffix.lower()
    if suffix in ACCEPTED_EXTENSIONS:
        return DocumentFormat(ACCEPTED_EXTENSIONS[suffix])
    return None


def format_file_size(num_bytes: int) -> str:
    """Human-readable size, e.g. 1536 -> '1.5 KB'."""
    if num_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(num_bytes)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    return f"{round(value, 2):g} {units[i]}"


def parse_llm_json(text: str) -> Optional[object]:
    """Parse JSON from LLM response, stripping markdown code blocks if present. None if unparseable."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return None


def is_credential_failure(exc: BaseException) -> bool:
    """True if an API error message points at an unusable API key."""
    msg = str(exc).lower()
    return any(
        marker in msg
        for marker in ("api key not valid", "invalid_api_key", "incorrect api key", "invalid api key")
    )

"""Utility exports."""

from .helpers import (
    count_words,
    format_file_size,
    is_credential_failure,
    parse_llm_json,
    resolve_document_format,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "count_words",
    "format_file_size",
    "is_credential_failure",
    "parse_llm_json",
    "resolve_document_format",
]

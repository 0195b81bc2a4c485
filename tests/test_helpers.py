"""Tests for utils.helpers."""

import pytest

from ats_cv_optimizer.schemas.document import DocumentFormat
from ats_cv_optimizer.utils.helpers import (
    count_words,
    format_file_size,
    is_credential_failure,
    parse_llm_json,
    resolve_document_format,
)


@pytest.mark.parametrize(
    "mime_type, filename, expected",
    [
        ("application/pdf", "cv.pdf", DocumentFormat.PDF),
        ("application/pdf", "cv.docx", DocumentFormat.PDF),
        (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "cv",
            DocumentFormat.DOCX,
        ),
        ("application/octet-stream", "resume.DOCX", DocumentFormat.DOCX),
        ("", "resume.pdf", DocumentFormat.PDF),
        (None, None, None),
        ("application/msword", "cv.doc", None),
        ("text/plain", "cv.pdf", None),
    ],
)
def test_resolve_document_format(mime_type, filename, expected):
    assert resolve_document_format(mime_type, filename) is expected


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (1048576, "1 MB"), (5 * 1024 ** 3, "5 GB")],
)
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_count_words():
    assert count_words("") == 0
    assert count_words("  one\ttwo\n\nthree ") == 3


def test_parse_llm_json():
    assert parse_llm_json('{"a": 1}') == {"a": 1}
    assert parse_llm_json('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}
    assert parse_llm_json("```\n[1]\n```") == [1]
    assert parse_llm_json("Sure! here it is") is None
    assert parse_llm_json("") is None
    assert parse_llm_json("{" * 100000) is None
    assert parse_llm_json("[" * 200000 + "]" * 200000) is None


def test_is_credential_failure():
    assert is_credential_failure(Exception("Error code: 401 - Incorrect API key provided: sk-..."))
    assert is_credential_failure(Exception("API key not valid. Please pass a valid API key."))
    assert not is_credential_failure(Exception("Rate limit reached"))

"""Tests for the OCR agent."""

import asyncio

import pytest

from ats_cv_optimizer.agents.ocr_agent import OCR_PROMPT, extract_text_from_page_images
from ats_cv_optimizer.errors import GenerationFailureError, NoContentError
from ats_cv_optimizer.schemas.document import PageImage
from ats_cv_optimizer.services.generation_service import (
    GenerationCredentialError,
    GenerationServiceError,
    ImagePart,
    TextPart,
)
from conftest import FakeGenerationService


def _pages(n: int):
    return [PageImage(index=i, encoded_bytes=f"cGFnZS0{i}") for i in range(1, n + 1)]


def test_single_call_with_all_pages_in_order():
    service = FakeGenerationService(response="Jane Doe\nData Engineer")
    text = asyncio.run(extract_text_from_page_images(_pages(5), service))

    assert text == "Jane Doe\nData Engineer"
    assert len(service.calls) == 1
    parts = service.calls[0]["parts"]
    assert isinstance(parts[0], TextPart) and parts[0].text == OCR_PROMPT
    assert all(isinstance(p, ImagePart) for p in parts[1:])
    assert [p.data for p in parts[1:]] == [f"cGFnZS0{i}" for i in range(1, 6)]
    assert service.calls[0]["output_schema"] is None


def test_output_returned_verbatim():
    raw = "  Line one\n\nLine two  \n"
    service = FakeGenerationService(response=raw)
    assert asyncio.run(extract_text_from_page_images(_pages(1), service)) == raw


def test_blank_output_is_left_to_caller():
    service = FakeGenerationService(response="   ")
    assert asyncio.run(extract_text_from_page_images(_pages(1), service)) == "   "


def test_empty_sequence_rejected_without_calling_model():
    service = FakeGenerationService(response="x")
    with pytest.raises(NoContentError):
        asyncio.run(extract_text_from_page_images([], service))
    assert service.calls == []


@pytest.mark.parametrize(
    "error",
    [GenerationServiceError("503 overloaded"), GenerationCredentialError("bad key"), RuntimeError("boom")],
)
def test_capability_errors_become_generation_failure(error):
    service = FakeGenerationService(error=error)
    with pytest.raises(GenerationFailureError):
        asyncio.run(extract_text_from_page_images(_pages(2), service))

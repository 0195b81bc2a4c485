"""Tests for the upload wiring of the Streamlit page."""

import asyncio

import pytest

from ats_cv_optimizer.app import needs_ingestion
from ats_cv_optimizer.config import PDF_MIME_TYPE
from ats_cv_optimizer.cv_pipeline.ingestion import IngestionOrchestrator
from ats_cv_optimizer.schemas.ingestion_state import FileSelected, IngestionSnapshot, IngestionStatus
from conftest import FakeGenerationService

FILE_ID = ("cv.pdf", 1024, "upload-1")


class _ScriptInterrupted(Exception):
    """Stands in for a rerun interrupting the script at a widget call."""


def test_new_file_needs_ingestion():
    assert needs_ingestion(None, FILE_ID, IngestionSnapshot())
    assert needs_ingestion(("old.pdf", 10, "upload-0"), FILE_ID, IngestionSnapshot())


def test_settled_file_is_not_ingested_again():
    done = IngestionSnapshot(status=IngestionStatus.DONE, attempt=1, text="Jane Doe")
    failed = IngestionSnapshot(status=IngestionStatus.FAILED, attempt=1)
    assert not needs_ingestion(FILE_ID, FILE_ID, done)
    assert not needs_ingestion(FILE_ID, FILE_ID, failed)


def test_interrupted_ingestion_is_resumed_on_next_run(text_pdf):
    def interrupt(snapshot):
        raise _ScriptInterrupted()

    orchestrator = IngestionOrchestrator(FakeGenerationService(), listener=interrupt)
    event = FileSelected(content=text_pdf, mime_type=PDF_MIME_TYPE, filename="cv.pdf")
    with pytest.raises(_ScriptInterrupted):
        asyncio.run(orchestrator.handle(event))

    stuck = orchestrator.state
    assert stuck.status is IngestionStatus.EXTRACTING
    # Same file id as before, but the attempt never settled
    assert needs_ingestion(FILE_ID, FILE_ID, stuck)

    orchestrator.listener = None
    state = asyncio.run(orchestrator.handle(event))
    assert state.status is IngestionStatus.DONE
    assert not needs_ingestion(FILE_ID, FILE_ID, state)

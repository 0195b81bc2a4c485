"""
ATS CV Optimizer – Streamlit frontend.
No business logic in layout; ingestion and optimization live in cv_pipeline and agents.
"""

import asyncio
from typing import Optional

import streamlit as st

from ats_cv_optimizer.agents.optimizer_agent import run_cv_optimization
from ats_cv_optimizer.config import OCR_MODEL_NAME, OPENAI_API_KEY
from ats_cv_optimizer.cv_pipeline.ingestion import IngestionOrchestrator
from ats_cv_optimizer.errors import OptimizationError
from ats_cv_optimizer.schemas.cv_data import CvData
from ats_cv_optimizer.schemas.ingestion_state import (
    FileSelected,
    IngestionCleared,
    IngestionEvent,
    IngestionSnapshot,
    IngestionStatus,
)
from ats_cv_optimizer.services.cv_renderer import render_cv_markdown, render_cv_text
from ats_cv_optimizer.services.generation_service import get_generation_service
from ats_cv_optimizer.services.pdf_export import export_cv_pdf, export_filename
from ats_cv_optimizer.utils.helpers import format_file_size

STATUS_LABELS = {
    IngestionStatus.EXTRACTING: "Parsing file...",
    IngestionStatus.SCANNING: "Scanning with AI (OCR)...",
}


def _get_orchestrator() -> IngestionOrchestrator:
    if "orchestrator" not in st.session_state:
        st.session_state.orchestrator = IngestionOrchestrator(get_generation_service(OCR_MODEL_NAME))
    return st.session_state.orchestrator


def _dispatch(event: IngestionEvent, status_box=None) -> IngestionSnapshot:
    """Send one event to the orchestrator from sync context, showing status transitions."""
    orchestrator = _get_orchestrator()
    if status_box is not None:
        def show(snapshot: IngestionSnapshot) -> None:
            label = STATUS_LABELS.get(snapshot.status)
            if label:
                status_box.info(label)
        orchestrator.listener = show
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(orchestrator.handle(event))
    finally:
        orchestrator.listener = None
        loop.close()


def _clear_file() -> None:
    _dispatch(IngestionCleared())
    st.session_state.uploaded_file_id = None
    st.session_state.uploader_key = st.session_state.get("uploader_key", 0) + 1


def needs_ingestion(last_file_id: Optional[tuple], file_id: tuple, state: IngestionSnapshot) -> bool:
    """
    True when the uploaded file has not been ingested to completion yet.
    A busy snapshot at the start of a script run means the previous run was interrupted mid-dispatch.
    """
    return last_file_id != file_id or state.is_busy


def _render_upload() -> IngestionSnapshot:
    """File uploader wired to the ingestion orchestrator. One ingestion per newly uploaded file."""
    uploader_key = st.session_state.get("uploader_key", 0)
    uploaded = st.file_uploader(
        "Your Current CV (.docx, .pdf)",
        type=["pdf", "docx"],
        key=f"cv_upload_{uploader_key}",
        help="Scanned PDFs are read with AI-powered OCR (first pages only).",
    )
    status_box = st.empty()

    if uploaded is not None:
        file_id = (uploaded.name, uploaded.size, getattr(uploaded, "file_id", None))
        if needs_ingestion(st.session_state.get("uploaded_file_id"), file_id, _get_orchestrator().state):
            st.session_state.cv_data = None
            st.session_state.optimize_error = None
            _dispatch(
                FileSelected(content=uploaded.getvalue(), mime_type=uploaded.type or "", filename=uploaded.name),
                status_box=status_box,
            )
            # Recorded only once the attempt has settled
            st.session_state.uploaded_file_id = file_id
    elif st.session_state.get("uploaded_file_id") is not None or _get_orchestrator().state.is_busy:
        # Removed from the widget
        _clear_file()

    state = _get_orchestrator().state
    status_box.empty()
    if state.status == IngestionStatus.FAILED:
        st.error(f"**File Error** – {state.error_message}")
        st.button("Try again", on_click=_clear_file, key="retry_file")
    elif state.status == IngestionStatus.DONE:
        st.success(
            f"File content extracted successfully. **{state.filename}** ({format_file_size(state.file_size)})"
        )
        for warning in state.warnings:
            st.warning(warning)
    return state


def _render_result(cv: CvData) -> None:
    """Preview plus PDF / text downloads."""
    with st.container(border=True):
        st.markdown(render_cv_markdown(cv))
    col_txt, col_pdf = st.columns(2)
    with col_txt:
        st.download_button(
            "Download text",
            data=render_cv_text(cv).encode("utf-8"),
            file_name=export_filename(cv).replace(".pdf", ".txt"),
            mime="text/plain",
            use_container_width=True,
        )
    with col_pdf:
        st.download_button(
            "Save as PDF",
            data=export_cv_pdf(cv),
            file_name=export_filename(cv),
            mime="application/pdf",
            type="primary",
            use_container_width=True,
        )
    with st.expander("Copy text"):
        st.code(render_cv_text(cv), language=None)


def render_layout() -> None:
    """Streamlit page layout."""
    st.set_page_config(page_title="ATS CV Optimizer", layout="wide")
    st.title("ATS CV Optimizer")
    st.markdown("*Tailor your CV to any job description, instantly.*")
    if not OPENAI_API_KEY:
        st.warning("OPENAI_API_KEY is not set. Add it to your .env file to enable OCR and optimization.")
    st.divider()

    left, right = st.columns(2, gap="large")

    with left:
        st.subheader("1. Provide Your Details")
        st.info(
            "Upload your CV (including scanned PDFs) and paste the job description. "
            "The content will be extracted and optimized."
        )
        state = _render_upload()
        job_description = st.text_area(
            "Target Job Description",
            placeholder="Paste the complete job description here...",
            height=220,
            key="job_description",
        )
        cv_text = state.text if state.status == IngestionStatus.DONE else ""
        is_form_valid = bool(cv_text.strip()) and bool((job_description or "").strip())
        optimize_clicked = st.button(
            "Optimize My CV",
            type="primary",
            use_container_width=True,
            disabled=not is_form_valid or state.is_busy,
        )

    with right:
        st.subheader("2. Your Optimized CV")
        if optimize_clicked:
            st.session_state.cv_data = None
            st.session_state.optimize_error = None
            with st.spinner("Generating your new CV... This may take a moment."):
                try:
                    st.session_state.cv_data = run_cv_optimization(cv_text, job_description)
                except OptimizationError as e:
                    st.session_state.optimize_error = e.message

        cv_data: Optional[CvData] = st.session_state.get("cv_data")
        optimize_error: Optional[str] = st.session_state.get("optimize_error")
        if optimize_error:
            st.error(f"**Optimization Failed**\n\n{optimize_error}")
        elif cv_data is not None:
            _render_result(cv_data)
        else:
            st.caption("Your new CV will appear here. Fill in the details and click \"Optimize\".")


if __name__ == "__main__":
    render_layout()

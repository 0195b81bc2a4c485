"""Tests for text / markdown rendering and PDF export of an optimized CV."""

import io

import pdfplumber
import pytest

from ats_cv_optimizer.schemas.cv_data import CvData
from ats_cv_optimizer.services.cv_renderer import format_contact_line, render_cv_markdown, render_cv_text
from ats_cv_optimizer.services.pdf_export import export_cv_pdf, export_filename


@pytest.fixture
def cv(cv_payload) -> CvData:
    return CvData.model_validate(cv_payload)


def test_contact_line_order_and_optional_linkedin(cv, cv_payload):
    assert format_contact_line(cv) == (
        "Austin, TX | +1 555 0100 | jane.doe@example.com | https://linkedin.com/in/janedoe"
    )
    cv_payload["contactInfo"].pop("linkedin")
    assert format_contact_line(CvData.model_validate(cv_payload)) == "Austin, TX | +1 555 0100 | jane.doe@example.com"


def test_text_sections_in_order(cv):
    text = render_cv_text(cv)
    assert text.startswith("JANE DOE\n")
    positions = [text.index(h) for h in ("PROFESSIONAL SUMMARY", "WORK EXPERIENCE", "SKILLS", "EDUCATION")]
    assert positions == sorted(positions)
    assert "• Built Spark streaming pipelines processing 4B events/day" in text
    assert "Python | Spark | Airflow | SQL" in text
    assert text.index("Acme Analytics") < text.index("Blue River Labs")


def test_empty_sections_omitted(cv_payload):
    cv_payload.update(workExperience=[], skills=[])
    text = render_cv_text(CvData.model_validate(cv_payload))
    assert "WORK EXPERIENCE" not in text and "SKILLS" not in text
    assert "EDUCATION" in text


def test_markdown_preview(cv):
    md = render_cv_markdown(cv)
    assert md.startswith("## Jane Doe")
    assert "#### Work Experience" in md
    assert "- Designed the customer analytics schema" in md


def test_export_filename(cv):
    assert export_filename(cv) == "Jane_Doe_CV.pdf"


def test_export_pdf_is_readable(cv):
    pdf_bytes = export_cv_pdf(cv)
    assert pdf_bytes.startswith(b"%PDF")
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        text = "\n".join(page.extract_text() or "" for page in pdf.pages)
    assert "JANE DOE" in text
    assert "Acme Analytics" in text


def test_export_escapes_markup(cv_payload):
    cv_payload["summary"] = "Led <b>R&D</b> for a 5 < 10 person team"
    pdf_bytes = export_cv_pdf(CvData.model_validate(cv_payload))
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        text = pdf.pages[0].extract_text() or ""
    assert "R&D" in text

"""Shared fixtures: a recording fake generation service and on-the-fly CV documents."""

import asyncio
import io
import json
from typing import List, Optional, Sequence

import pytest
from docx import Document
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.lib.pdfencrypt import StandardEncryption
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ats_cv_optimizer.services.generation_service import GenerationService, PromptPart

CV_LINES = [
    "Jane Doe",
    "jane.doe@example.com | +1 555 0100 | Austin, TX",
    "Senior Data Engineer at Acme Analytics from 2019 to present.",
    "Built streaming pipelines in Python and Spark that processed four billion events per day.",
    "Cut warehouse costs by thirty percent by migrating batch jobs to incremental models.",
    "Mentored five engineers and led the migration from cron scripts to Airflow.",
    "Data Engineer at Blue River Labs from 2016 to 2019.",
    "Designed the customer analytics schema and owned the nightly ETL jobs.",
    "Education: BSc Computer Science, University of Texas, 2012 - 2016.",
]

CV_PAYLOAD = {
    "fullName": "Jane Doe",
    "contactInfo": {
        "email": "jane.doe@example.com",
        "phone": "+1 555 0100",
        "linkedin": "https://linkedin.com/in/janedoe",
        "location": "Austin, TX",
    },
    "summary": "Data engineer with seven years of experience building streaming and batch pipelines.",
    "workExperience": [
        {
            "jobTitle": "Senior Data Engineer",
            "company": "Acme Analytics",
            "location": "Austin, TX",
            "dates": "2019 - Present",
            "responsibilities": [
                "Built Spark streaming pipelines processing 4B events/day",
                "Reduced warehouse costs by 30% with incremental models",
            ],
        },
        {
            "jobTitle": "Data Engineer",
            "company": "Blue River Labs",
            "dates": "2016 - 2019",
            "responsibilities": ["Designed the customer analytics schema"],
        },
    ],
    "education": [
        {"institution": "University of Texas", "degree": "BSc Computer Science", "dates": "2012 - 2016"}
    ],
    "skills": ["Python", "Spark", "Airflow", "SQL"],
}


class FakeGenerationService(GenerationService):
    """Records every call and answers with canned text or raises a canned error."""

    def __init__(self, response: str = "", error: Optional[BaseException] = None, delay: float = 0.0) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: List[dict] = []

    async def generate(
        self,
        parts: Sequence[PromptPart],
        output_schema: Optional[dict] = None,
        *,
        schema_name: str = "structured_output",
        temperature: Optional[float] = None,
    ) -> str:
        self.calls.append(
            {"parts": list(parts), "output_schema": output_schema, "schema_name": schema_name}
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


def make_text_pdf(lines: Sequence[str] = CV_LINES, pages: int = 1, password: Optional[str] = None) -> bytes:
    """PDF with a real text layer; every page carries all lines."""
    buffer = io.BytesIO()
    encrypt = StandardEncryption(password, canPrint=1) if password else None
    pdf = canvas.Canvas(buffer, pagesize=letter, encrypt=encrypt)
    for _ in range(pages):
        y = 720
        for line in lines:
            pdf.drawString(72, y, line)
            y -= 18
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_paged_pdf(page_texts: Sequence[str]) -> bytes:
    """PDF with one distinct line of text per page."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    for text in page_texts:
        pdf.drawString(72, 720, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_scanned_pdf(pages: int = 1) -> bytes:
    """Image-only PDF: each page is a bitmap with no text layer."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    width, height = letter
    for number in range(1, pages + 1):
        bitmap = Image.new("RGB", (612, 792), "white")
        draw = ImageDraw.Draw(bitmap)
        draw.text((72, 72), f"Scanned page {number}", fill="black")
        draw.rectangle((72, 120, 540, 140), fill="black")
        pdf.drawImage(ImageReader(bitmap), 0, 0, width=width, height=height)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_docx(paragraphs: Sequence[str]) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def cv_payload() -> dict:
    return json.loads(json.dumps(CV_PAYLOAD))


@pytest.fixture
def text_pdf() -> bytes:
    return make_text_pdf()


@pytest.fixture
def scanned_pdf() -> bytes:
    return make_scanned_pdf(pages=2)

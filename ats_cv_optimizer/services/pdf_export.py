"""Export an optimized CV to a print-ready PDF with reportlab."""

import io
import re
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_RIGHT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import HRFlowable, ListFlowable, ListItem, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ats_cv_optimizer.config import EXPORT_MARGINS_INCHES
from ats_cv_optimizer.schemas.cv_data import CvData
from ats_cv_optimizer.services.cv_renderer import (
    SECTION_EDUCATION,
    SECTION_EXPERIENCE,
    SECTION_SKILLS,
    SECTION_SUMMARY,
    format_contact_line,
)
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)


def export_filename(cv: CvData) -> str:
    """'Jane Q Doe' -> 'Jane_Q_Doe_CV.pdf'."""
    name = re.sub(r"\s+", "_", cv.full_name.strip()) or "Optimized"
    return f"{name}_CV.pdf"


def _build_styles() -> dict:
    styles = getSampleStyleSheet()
    text_color = colors.black
    return {
        "name": ParagraphStyle(
            name="Name",
            parent=styles["Heading1"],
            fontName="Helvetica-Bold",
            fontSize=20,
            leading=24,
            alignment=TA_CENTER,
            spaceAfter=4,
            textColor=text_color,
        ),
        "contact": ParagraphStyle(
            name="Contact",
            parent=styles["Normal"],
            fontSize=9,
            leading=12,
            alignment=TA_CENTER,
            textColor=text_color,
        ),
        "section": ParagraphStyle(
            name="SectionHeading",
            parent=styles["Heading2"],
            fontName="Helvetica-Bold",
            fontSize=10,
            leading=13,
            spaceBefore=12,
            spaceAfter=2,
            textColor=text_color,
        ),
        "body": ParagraphStyle(
            name="Body",
            parent=styles["Normal"],
            fontName="Helvetica",
            fontSize=10,
            leading=13,
            alignment=TA_JUSTIFY,
            textColor=text_color,
        ),
        "bold": ParagraphStyle(name="Bold", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=10.5),
        "italic": ParagraphStyle(name="Italic", parent=styles["Normal"], fontName="Helvetica-Oblique", fontSize=10),
        "right": ParagraphStyle(name="Right", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=9, alignment=TA_RIGHT),
        "right_italic": ParagraphStyle(
            name="RightItalic", parent=styles["Normal"], fontName="Helvetica-Oblique", fontSize=9, alignment=TA_RIGHT
        ),
        "bullet": ParagraphStyle(name="Bullet", parent=styles["Normal"], fontName="Helvetica", fontSize=10, leading=13),
    }


def _p(text: str, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(text or ""), style)


def _split_row(left: Paragraph, right: Paragraph, width: float) -> Table:
    """Two-column row: left text, right-aligned text (e.g. title / dates)."""
    table = Table([[left, right]], colWidths=[width * 0.7, width * 0.3])
    table.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "BOTTOM"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ("TOPPADDING", (0, 0), (-1, -1), 0),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
            ]
        )
    )
    return table


def _section(story: list, title: str, styles: dict) -> None:
    story.append(Paragraph(title.upper(), styles["section"]))
    story.append(HRFlowable(width="100%", thickness=1.5, color=colors.black, spaceBefore=0, spaceAfter=6))


def export_cv_pdf(cv: CvData, margins: Sequence[float] = EXPORT_MARGINS_INCHES) -> bytes:
    """
    Lay out CvData on US letter pages and return the PDF bytes.
    margins: (top, left, bottom, right) in inches.
    """
    top, left, bottom, right = margins
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        topMargin=top * inch,
        leftMargin=left * inch,
        bottomMargin=bottom * inch,
        rightMargin=right * inch,
        title=f"{cv.full_name} CV",
        author=cv.full_name,
    )
    styles = _build_styles()
    width = doc.width
    story = []

    # --- Header ---
    story.append(_p(cv.full_name.upper(), styles["name"]))
    contact = format_contact_line(cv)
    if contact:
        story.append(_p(contact, styles["contact"]))

    # --- Summary ---
    if cv.summary.strip():
        _section(story, SECTION_SUMMARY, styles)
        story.append(_p(cv.summary.strip(), styles["body"]))

    # --- Experience ---
    if cv.work_experience:
        _section(story, SECTION_EXPERIENCE, styles)
        for job in cv.work_experience:
            story.append(_split_row(_p(job.job_title, styles["bold"]), _p(job.dates, styles["right"]), width))
            story.append(
                _split_row(_p(job.company, styles["italic"]), _p(job.location or "", styles["right_italic"]), width)
            )
            if job.responsibilities:
                story.append(
                    ListFlowable(
                        [ListItem(_p(item, styles["bullet"])) for item in job.responsibilities],
                        bulletType="bullet",
                        start="•",
                        leftIndent=12,
                    )
                )
            story.append(Spacer(1, 0.08 * inch))

    # --- Skills ---
    if cv.skills:
        _section(story, SECTION_SKILLS, styles)
        story.append(_p(" | ".join(cv.skills), styles["body"]))

    # --- Education ---
    if cv.education:
        _section(story, SECTION_EDUCATION, styles)
        for edu in cv.education:
            story.append(_split_row(_p(edu.institution, styles["bold"]), _p(edu.dates, styles["right"]), width))
            story.append(_p(edu.degree, styles["italic"]))
            story.append(Spacer(1, 0.06 * inch))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    logger.info("Exported CV PDF for %s: %s bytes", cv.full_name, len(pdf_bytes))
    return pdf_bytes

"""Render CvData as plain text (copy/paste) and markdown (preview). No UI logic."""

from typing import List

from ats_cv_optimizer.schemas.cv_data import CvData

SECTION_SUMMARY = "Professional Summary"
SECTION_EXPERIENCE = "Work Experience"
SECTION_SKILLS = "Skills"
SECTION_EDUCATION = "Education"


def format_contact_line(cv: CvData) -> str:
    """'location | phone | email | linkedin', skipping blank parts."""
    info = cv.contact_info
    parts = [info.location, info.phone, info.email, info.linkedin or ""]
    return " | ".join(p.strip() for p in parts if p and p.strip())


def _join_pair(left: str, right: str, sep: str = " — ") -> str:
    left, right = (left or "").strip(), (right or "").strip()
    if left and right:
        return f"{left}{sep}{right}"
    return left or right


def render_cv_text(cv: CvData) -> str:
    """Plain-text layout: Summary, Work Experience, Skills, Education. Empty sections are omitted."""
    lines: List[str] = [cv.full_name.upper()]
    contact = format_contact_line(cv)
    if contact:
        lines.append(contact)

    if cv.summary.strip():
        lines += ["", SECTION_SUMMARY.upper(), cv.summary.strip()]

    if cv.work_experience:
        lines += ["", SECTION_EXPERIENCE.upper()]
        for i, job in enumerate(cv.work_experience):
            if i:
                lines.append("")
            lines.append(_join_pair(job.job_title, job.dates))
            company_line = _join_pair(job.company, job.location or "")
            if company_line:
                lines.append(company_line)
            lines += [f"• {item}" for item in job.responsibilities]

    if cv.skills:
        lines += ["", SECTION_SKILLS.upper(), " | ".join(cv.skills)]

    if cv.education:
        lines += ["", SECTION_EDUCATION.upper()]
        for edu in cv.education:
            lines.append(_join_pair(edu.institution, edu.dates))
            if edu.degree:
                lines.append(edu.degree)

    return "\n".join(lines) + "\n"


def render_cv_markdown(cv: CvData) -> str:
    """Markdown preview with the same section order as the text and PDF layouts."""
    out: List[str] = [f"## {cv.full_name}"]
    contact = format_contact_line(cv)
    if contact:
        out.append(contact)

    if cv.summary.strip():
        out += ["", f"#### {SECTION_SUMMARY}", cv.summary.strip()]

    if cv.work_experience:
        out += ["", f"#### {SECTION_EXPERIENCE}"]
        for job in cv.work_experience:
            out.append("")
            out.append(f"**{job.job_title}**" + (f" · {job.dates}" if job.dates else ""))
            company_line = _join_pair(job.company, job.location or "", sep=", ")
            if company_line:
                out.append(f"*{company_line}*")
            if job.responsibilities:
                out.append("")
                out += [f"- {item}" for item in job.responsibilities]

    if cv.skills:
        out += ["", f"#### {SECTION_SKILLS}", " | ".join(cv.skills)]

    if cv.education:
        out += ["", f"#### {SECTION_EDUCATION}"]
        for edu in cv.education:
            out.append("")
            out.append(f"**{edu.institution}**" + (f" · {edu.dates}" if edu.dates else ""))
            if edu.degree:
                out.append(f"*{edu.degree}*")

    return "\n".join(out)

"""Structured CV returned by the optimizer, and the JSON schema the model must follow.

Wire names are camelCase to match what downstream renderers expect; models can
also be populated by their snake_case field names.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CvModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ContactInfo(_CvModel):
    email: str = Field(..., description="Candidate's email address")
    phone: str = Field(..., description="Candidate's phone number")
    linkedin: Optional[str] = Field(default=None, description="URL to LinkedIn profile, if available")
    location: str = Field(..., description="City and state, e.g. 'San Francisco, CA'")


class WorkExperience(_CvModel):
    job_title: str = Field(..., alias="jobTitle")
    company: str = Field(...)
    location: Optional[str] = Field(default=None)
    dates: str = Field(..., description="e.g. 'May 2020 - Present'")
    responsibilities: List[str] = Field(..., description="Achievement bullets, in display order")


class Education(_CvModel):
    institution: str = Field(...)
    degree: str = Field(..., description="e.g. 'Bachelor of Science in Computer Science'")
    dates: str = Field(..., description="e.g. 'Graduated May 2020' or '2016 - 2020'")


class CvData(_CvModel):
    """Optimized CV. Every required field is present; lists may be empty but never missing."""

    full_name: str = Field(..., alias="fullName", description="The candidate's full name")
    contact_info: ContactInfo = Field(..., alias="contactInfo")
    summary: str = Field(..., description="2-4 sentence professional summary")
    work_experience: List[WorkExperience] = Field(..., alias="workExperience")
    education: List[Education] = Field(...)
    skills: List[str] = Field(..., description="Relevant technical and soft skills")


CV_RESPONSE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "fullName": {"type": "string", "description": "The candidate's full name."},
        "contactInfo": {
            "type": "object",
            "properties": {
                "email": {"type": "string", "description": "Candidate's email address."},
                "phone": {"type": "string", "description": "Candidate's phone number."},
                "linkedin": {"type": "string", "description": "URL to LinkedIn profile, if available."},
                "location": {"type": "string", "description": "City and State, e.g., 'San Francisco, CA'."},
            },
            "required": ["email", "phone", "location"],
        },
        "summary": {
            "type": "string",
            "description": "A 2-4 sentence professional summary tailored to the job description.",
        },
        "workExperience": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "jobTitle": {"type": "string"},
                    "company": {"type": "string"},
                    "location": {"type": "string"},
                    "dates": {"type": "string", "description": "e.g., 'May 2020 - Present'"},
                    "responsibilities": {
                        "type": "array",
                        "description": "Bulleted list of achievements, optimized with keywords from the job description.",
                        "items": {"type": "string"},
                    },
                },
                "required": ["jobTitle", "company", "dates", "responsibilities"],
            },
        },
        "education": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "institution": {"type": "string"},
                    "degree": {"type": "string", "description": "e.g., 'Bachelor of Science in Computer Science'"},
                    "dates": {"type": "string", "description": "e.g., 'Graduated May 2020' or '2016 - 2020'"},
                },
                "required": ["institution", "degree", "dates"],
            },
        },
        "skills": {
            "type": "array",
            "description": "A list of relevant technical and soft skills, tailored to the job description.",
            "items": {"type": "string"},
        },
    },
    "required": ["fullName", "contactInfo", "summary", "workExperience", "education", "skills"],
}

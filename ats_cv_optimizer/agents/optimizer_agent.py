"""Optimizer Agent: rewrite a CV against a job description and return validated structured CV data."""

import asyncio
import re
from typing import Optional

from pydantic import ValidationError

from ats_cv_optimizer.config import OPTIMIZER_TEMPERATURE
from ats_cv_optimizer.errors import OptimizationError, OptimizationErrorKind
from ats_cv_optimizer.schemas.cv_data import CV_RESPONSE_SCHEMA, CvData
from ats_cv_optimizer.services.generation_service import (
    GenerationCredentialError,
    GenerationService,
    TextPart,
    get_generation_service,
)
from ats_cv_optimizer.utils.helpers import parse_llm_json
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)

CV_OPTIMIZATION_PROMPT = """
You are a world-class professional CV writer and Applicant Tracking System (ATS) optimization expert. Your task is to rewrite a user's CV to perfectly align with a specific job description.

**You will be given two inputs:**
1.  **[CURRENT CV]**: The user's existing CV content.
2.  **[JOB DESCRIPTION]**: The target job description.

**Your instructions are:**
1.  **Analyze and Extract:** Thoroughly analyze the [CURRENT CV] to understand the user's experience, skills, and qualifications. Also, analyze the [JOB DESCRIPTION] to identify all key skills, qualifications, technologies, and responsibilities.
2.  **Rewrite and Integrate:** Modify the user's CV content by strategically and naturally weaving in the keywords from the job description. Enhance bullet points with quantifiable achievements and action verbs that match the target role.
3.  **Ensure Truthfulness:** The new content must be truthful and accurately reflect the user's experience. Do not invent experience or skills the user does not possess.
4.  **Populate the JSON:** Based on the rewritten content, populate the provided JSON schema. Ensure all fields are filled correctly and logically. The structure of the CV should follow a standard professional format: Summary, Work Experience, Skills, Education.

---

**[CURRENT CV]**
{current_cv}

---

**[JOB DESCRIPTION]**
{job_description}
"""


_PLACEHOLDER = re.compile(r"\{(current_cv|job_description)\}")


def build_optimization_prompt(cv_text: str, job_description: str) -> str:
    # Single pass, not str.format(): inputs may contain braces or placeholder text
    values = {"current_cv": cv_text, "job_description": job_description}
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], CV_OPTIMIZATION_PROMPT)


def parse_cv_data(payload: str) -> CvData:
    """Parse and validate model output as CvData. Anything else is MALFORMED_OUTPUT."""
    parsed = parse_llm_json(payload)
    if not isinstance(parsed, dict):
        raise OptimizationError(OptimizationErrorKind.MALFORMED_OUTPUT, "Response is not a JSON object")
    try:
        return CvData.model_validate(parsed)
    except ValidationError as e:
        logger.warning("CV data validation failed: %s", e)
        raise OptimizationError(OptimizationErrorKind.MALFORMED_OUTPUT, str(e)) from e


async def optimize_cv(cv_text: str, job_description: str, service: GenerationService) -> CvData:
    """
    Make exactly one structured generation call and return the validated CvData.
    Both inputs must be non-blank (ValueError otherwise). No retries, no partial results.
    """
    cv_text = (cv_text or "").strip()
    job_description = (job_description or "").strip()
    if not cv_text or not job_description:
        raise ValueError("CV text and job description must both be non-empty")

    prompt = build_optimization_prompt(cv_text, job_description)
    try:
        payload = await service.generate(
            [TextPart(text=prompt)],
            output_schema=CV_RESPONSE_SCHEMA,
            schema_name="cv_data",
            temperature=OPTIMIZER_TEMPERATURE,
        )
    except GenerationCredentialError as e:
        logger.error("CV optimization rejected credentials: %s", e)
        raise OptimizationError(OptimizationErrorKind.INVALID_CREDENTIAL, str(e)) from e
    except Exception as e:
        logger.exception("CV optimization request failed: %s", e)
        raise OptimizationError(OptimizationErrorKind.GENERATION_FAILURE, str(e)) from e

    cv = parse_cv_data(payload)
    logger.info(
        "Optimizer Agent finished: jobs=%s education=%s skills=%s",
        len(cv.work_experience), len(cv.education), len(cv.skills),
    )
    return cv


def run_cv_optimization(
    cv_text: str,
    job_description: str,
    service: Optional[GenerationService] = None,
) -> CvData:
    """
    Run optimize_cv from sync context (e.g. Streamlit).
    Raises OptimizationError on failure.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(
            optimize_cv(cv_text, job_description, service or get_generation_service())
        )
    finally:
        loop.close()

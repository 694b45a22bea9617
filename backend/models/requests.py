from pydantic import BaseModel, Field

from config import settings
from models.schemas.job_requirements import JobRequirements


class AnalysisRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_resume_chars, description="Plain text resume content")
    resume_id: str | None = Field(None, max_length=128)
    job_description: str | None = Field(
        None, max_length=settings.max_job_description_chars, description="Job description text"
    )
    job_description_id: str | None = Field(None, max_length=128)
    # Pre-extracted requirements take precedence over job_description
    job_requirements: JobRequirements | None = None


class JobDescriptionRequest(BaseModel):
    job_description: str = Field(
        ..., max_length=settings.max_job_description_chars, description="Job description text"
    )

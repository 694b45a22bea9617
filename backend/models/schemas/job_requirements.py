"""Structured job description produced by the requirement extractor."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ExperienceLevel = Literal[
    "entry-level", "mid-level", "senior-level", "management", "executive", "not-specified",
]

MAX_KEYWORDS = 50


class JobRequirements(BaseModel):
    """Requirements extracted from one job description; reusable across analyses."""
    model_config = ConfigDict(frozen=True)

    required_skills: list[str] = []
    preferred_skills: list[str] = []
    experience_level: ExperienceLevel = "not-specified"
    education: list[str] = []
    certifications: list[str] = []
    keywords: list[str] = Field(default=[], max_length=MAX_KEYWORDS)


class QualificationSections(BaseModel):
    required_qualifications: list[str] = []
    preferred_qualifications: list[str] = []
    responsibilities: list[str] = []


class SalaryRange(BaseModel):
    min: int | None = None
    max: int | None = None


class CompensationInfo(BaseModel):
    salary_range: SalaryRange | None = None
    currency: str | None = None
    benefits: list[str] = []

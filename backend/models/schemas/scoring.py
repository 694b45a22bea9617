"""Aggregated category scores."""

from pydantic import BaseModel, Field

CATEGORY_NAMES = ("content", "structure", "keywords", "experience", "skills")


class CategoryScores(BaseModel):
    """The five bounded category scores. Every field is required."""
    content: int = Field(ge=0, le=100)
    structure: int = Field(ge=0, le=100)
    keywords: int = Field(ge=0, le=100)
    experience: int = Field(ge=0, le=100)
    skills: int = Field(ge=0, le=100)

    def items(self) -> list[tuple[str, int]]:
        return [(name, getattr(self, name)) for name in CATEGORY_NAMES]


class CategoryBreakdown(BaseModel):
    category: str
    score: int
    weight: float
    contribution: float  # weight * score, before rounding
    degraded: bool = False


class ScoringResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    category_scores: CategoryScores
    breakdown: list[CategoryBreakdown] = []
    strengths: list[str] = []
    improvement_areas: list[str] = []
    summary: str = ""

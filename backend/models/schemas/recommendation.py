"""User-facing improvement recommendations."""

from typing import Literal

from pydantic import BaseModel

Priority = Literal["high", "medium", "low"]
Category = Literal["content", "structure", "keywords", "experience", "skills"]


class RecommendationExamples(BaseModel):
    before: str | None = None
    after: str


class Recommendation(BaseModel):
    id: str
    category: Category
    priority: Priority
    title: str
    description: str
    examples: RecommendationExamples
    impact: str

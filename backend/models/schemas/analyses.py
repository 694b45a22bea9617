"""Outputs of the five scoring analyzers.

Every output has a bounded ``score`` and a ``degraded`` flag. ``degraded`` is
set when the analyzer raised and its documented fallback was used instead.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

Score = Annotated[int, Field(ge=0, le=100)]


class ActionVerbSuggestion(BaseModel):
    weak_verb: str
    suggestions: list[str] = []
    example: str = ""


class ActionVerbAnalysis(BaseModel):
    score: Score = 0
    strong_verbs: list[str] = []
    weak_verbs: list[str] = []
    total_verbs: int = 0
    suggestions: list[ActionVerbSuggestion] = []
    degraded: bool = False


class QuantificationAnalysis(BaseModel):
    score: Score = 0
    # "{company} - {position}" -> achievements containing a measurable figure
    quantified_achievements: dict[str, list[str]] = {}
    missing_quantification: list[str] = []
    total_achievements: int = 0
    quantified_count: int = 0
    suggestions: list[str] = []
    degraded: bool = False


class KeywordMatchAnalysis(BaseModel):
    score: Score = 0
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    missing_required: list[str] = []
    total_job_keywords: int = 0
    match_percentage: Score = 0
    degraded: bool = False


class ClarityAnalysis(BaseModel):
    score: Score = 0
    clarity_score: Score = 0
    impact_score: Score = 0
    tone_score: Score = 0
    sentiment_score: int = 0  # raw positive minus negative word count
    word_count: int = 0
    average_sentence_length: float = 0.0
    long_sentences: list[str] = []
    readability_issues: list[str] = []
    impact_indicators: list[str] = []
    degraded: bool = False


ATSCategory = Literal["formatting", "organization", "readability", "presentation"]
Severity = Literal["high", "medium", "low"]


class ATSIssue(BaseModel):
    category: ATSCategory
    severity: Severity
    description: str
    impact: str


class ATSSuggestion(BaseModel):
    category: ATSCategory
    priority: Severity
    title: str
    description: str
    example: str | None = None
    blocking: bool = False  # would stop an ATS from reading the résumé


class ATSCompatibilityResult(BaseModel):
    score: Score = 0
    formatting_score: Score = 0
    organization_score: Score = 0
    readability_score: Score = 0
    presentation_score: Score = 0
    issues: list[ATSIssue] = []
    suggestions: list[ATSSuggestion] = []
    degraded: bool = False


class ContentAnalysis(BaseModel):
    """Everything the scoring engine produced for one résumé."""
    action_verbs: ActionVerbAnalysis = ActionVerbAnalysis()
    quantification: QuantificationAnalysis = QuantificationAnalysis()
    keyword_matching: KeywordMatchAnalysis = KeywordMatchAnalysis()
    clarity: ClarityAnalysis = ClarityAnalysis()
    ats: ATSCompatibilityResult = ATSCompatibilityResult()

"""Pydantic contracts passed between the analysis pipeline stages."""

from models.schemas.resume_content import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ParsedSection,
    ResumeContent,
    ResumeSections,
)
from models.schemas.job_requirements import JobRequirements
from models.schemas.analyses import (
    ActionVerbAnalysis,
    ATSCompatibilityResult,
    ClarityAnalysis,
    ContentAnalysis,
    KeywordMatchAnalysis,
    QuantificationAnalysis,
)
from models.schemas.scoring import CategoryScores, ScoringResult
from models.schemas.recommendation import Recommendation, RecommendationExamples
from models.schemas.analysis_result import AnalysisResult
from models.schemas.progress import AnalysisStep, ProgressEvent, ProgressSnapshot, ProgressState

__all__ = [
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "ParsedSection",
    "ResumeContent",
    "ResumeSections",
    "JobRequirements",
    "ActionVerbAnalysis",
    "ATSCompatibilityResult",
    "ClarityAnalysis",
    "ContentAnalysis",
    "KeywordMatchAnalysis",
    "QuantificationAnalysis",
    "CategoryScores",
    "ScoringResult",
    "Recommendation",
    "RecommendationExamples",
    "AnalysisResult",
    "AnalysisStep",
    "ProgressEvent",
    "ProgressSnapshot",
    "ProgressState",
]

"""Abstract base class for all scoring analyzers."""

import math
from abc import ABC, abstractmethod
from typing import Generic, TypeVar
import logging

from pydantic import BaseModel

from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from services.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


def round_half_up(value: float) -> int:
    """Round a non-negative score to the nearest integer, halves up (12.5 -> 13)."""
    return math.floor(value + 0.5)


class BaseAnalyzer(ABC, Generic[ResultT]):
    """Base class for the scoring analyzers.

    Subclasses must implement:
        - name: identifier used in logs and degraded-result reporting
        - analyze(content, requirements): pure, bounded scoring
        - fallback(): the documented default returned when analyze raises
    """

    name: str = ""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> None:
        self.vocabulary = vocabulary

    @abstractmethod
    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> ResultT:
        """Score the resume. Must not mutate its inputs."""

    @abstractmethod
    def fallback(self) -> ResultT:
        """Default output used when analyze fails."""

    def run(self, content: ResumeContent, requirements: JobRequirements | None = None) -> ResultT:
        """Run analyze, isolating failures behind the fallback result."""
        try:
            return self.analyze(content, requirements)
        except Exception:
            logger.exception("Analyzer %s failed; using fallback", self.name)
            return self.fallback().model_copy(update={"degraded": True})

"""Keyword matching analyzer: job skills found in the resume text."""

import logging

from models.schemas.analyses import KeywordMatchAnalysis
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from services.pipeline.base import BaseAnalyzer, round_half_up

logger = logging.getLogger(__name__)


def job_skill_terms(requirements: JobRequirements) -> list[str]:
    """Required then preferred skills, merged case-insensitively."""
    terms: list[str] = []
    seen: set[str] = set()
    for term in [*requirements.required_skills, *requirements.preferred_skills]:
        if term.lower() not in seen:
            seen.add(term.lower())
            terms.append(term)
    return terms


class KeywordMatchAnalyzer(BaseAnalyzer[KeywordMatchAnalysis]):
    """Matches job skills against the raw resume text.

    Without requirements the result is the zero-score default, which is the
    expected outcome for a resume analyzed on its own rather than an error.
    """

    name = "keyword_matching"

    def fallback(self) -> KeywordMatchAnalysis:
        return KeywordMatchAnalysis()

    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> KeywordMatchAnalysis:
        if requirements is None:
            return KeywordMatchAnalysis()

        terms = job_skill_terms(requirements)
        if not terms:
            return KeywordMatchAnalysis()

        text = content.raw_text.lower()
        matched = [t for t in terms if t.lower() in text]
        missing = [t for t in terms if t.lower() not in text]
        required = {s.lower() for s in requirements.required_skills}
        percentage = round_half_up(len(matched) / len(terms) * 100)
        logger.debug("Matched %d of %d job keywords", len(matched), len(terms))

        return KeywordMatchAnalysis(
            score=percentage,
            matched_keywords=matched,
            missing_keywords=missing,
            missing_required=[t for t in missing if t.lower() in required],
            total_job_keywords=len(terms),
            match_percentage=percentage,
        )

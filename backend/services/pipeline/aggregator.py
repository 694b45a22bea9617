"""Score aggregation: analyzer outputs -> five category scores -> overall score."""

import logging
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

from models.schemas.analyses import ContentAnalysis
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from models.schemas.scoring import CategoryBreakdown, CategoryScores, ScoringResult
from services.pipeline.base import round_half_up
from services.pipeline.keyword_matching import job_skill_terms
from services.pipeline.quantification import is_quantified
from services.text_utils import term_pattern
from services.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)

# Equal weighting per category. Tunable, not derived from data.
CATEGORY_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "content": 0.25,
    "structure": 0.25,
    "keywords": 0.25,
    "experience": 0.25,
    "skills": 0.25,
})

# Substituted for any component whose analyzer failed
NEUTRAL_SCORE = 50

STRENGTH_THRESHOLD = 80
IMPROVEMENT_THRESHOLD = 60

EXPERIENCE_BASE = 50
QUANTIFIED_BONUS = 20
SKILL_MENTION_BONUS = 5
MAX_SKILL_MENTION_BONUS = 30
LEADERSHIP_BONUS = 10

REQUIRED_SKILL_POINTS = 10
PREFERRED_SKILL_POINTS = 5
GENERAL_SKILL_POINTS = 5

SUMMARY_BANDS = (
    (90, "Excellent match! Your resume aligns very well with the job requirements."),
    (80, "Strong match! Your resume shows good alignment with most requirements."),
    (70, "Good match! Some improvements could strengthen your application."),
    (60, "Moderate match. Several areas need improvement to better align with requirements."),
    (50, "Below average match. Significant improvements needed to meet job requirements."),
    (0, "Poor match. Major revisions needed to align with job requirements."),
)


def _clamp(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def experience_score(
    content: ResumeContent,
    requirements: JobRequirements | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> int:
    """Average per-entry score: base, quantified results, job skills mentioned, leadership."""
    entries = content.sections.experience
    if not entries:
        return 0

    terms = [t.lower() for t in job_skill_terms(requirements)] if requirements else []
    leadership = [term_pattern(v) for v in vocabulary.leadership_verbs]
    scores = []
    for entry in entries:
        score = EXPERIENCE_BASE
        if any(is_quantified(a) for a in entry.achievements):
            score += QUANTIFIED_BONUS
        text = " ".join([entry.description, *entry.achievements])
        if terms:
            mentioned = sum(1 for t in terms if t in text.lower())
            score += min(MAX_SKILL_MENTION_BONUS, SKILL_MENTION_BONUS * mentioned)
        if any(p.search(text) for p in leadership):
            score += LEADERSHIP_BONUS
        scores.append(min(100, score))
    return _clamp(float(np.mean(scores)))


def _covers(resume_skills: list[str], skill: str) -> bool:
    return any(skill in s or s in skill for s in resume_skills)


def skills_score(content: ResumeContent, requirements: JobRequirements | None = None) -> int:
    """Weighted coverage of required and preferred skills by the skills list."""
    resume_skills = [s.lower() for s in content.sections.skills]
    if not resume_skills:
        return 0

    required = [s.lower() for s in requirements.required_skills] if requirements else []
    preferred = [s.lower() for s in requirements.preferred_skills] if requirements else []
    max_points = REQUIRED_SKILL_POINTS * len(required) + PREFERRED_SKILL_POINTS * len(preferred)
    if max_points == 0:
        return min(100, GENERAL_SKILL_POINTS * len(resume_skills))

    points = REQUIRED_SKILL_POINTS * sum(1 for s in required if _covers(resume_skills, s))
    points += PREFERRED_SKILL_POINTS * sum(1 for s in preferred if _covers(resume_skills, s))
    return _clamp(100 * points / max_points)


def summary_for(overall: int) -> str:
    for threshold, text in SUMMARY_BANDS:
        if overall >= threshold:
            return text
    return SUMMARY_BANDS[-1][1]


class ScoreAggregator:
    """Combines analyzer outputs into CategoryScores and the overall score."""

    def __init__(
        self,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        weights: Mapping[str, float] = CATEGORY_WEIGHTS,
    ) -> None:
        self.vocabulary = vocabulary
        self.weights = weights

    def _isolated(self, name: str, compute: Callable[[], int]) -> tuple[int, bool]:
        try:
            return compute(), False
        except Exception:
            logger.exception("Score component %s failed; using neutral score", name)
            return NEUTRAL_SCORE, True

    def category_scores(
        self,
        content: ResumeContent,
        analysis: ContentAnalysis,
        requirements: JobRequirements | None = None,
    ) -> tuple[CategoryScores, set[str]]:
        """Return the category scores and the names of degraded categories."""
        degraded: set[str] = set()

        def component(result) -> int:
            return NEUTRAL_SCORE if result.degraded else result.score

        content_parts = [analysis.action_verbs, analysis.quantification, analysis.clarity]
        if any(p.degraded for p in content_parts):
            degraded.add("content")
        content_score = _clamp(float(np.mean([component(p) for p in content_parts])))

        if analysis.ats.degraded:
            degraded.add("structure")
        if analysis.keyword_matching.degraded:
            degraded.add("keywords")

        experience, failed = self._isolated(
            "experience", lambda: experience_score(content, requirements, self.vocabulary)
        )
        if failed:
            degraded.add("experience")
        skills, failed = self._isolated("skills", lambda: skills_score(content, requirements))
        if failed:
            degraded.add("skills")

        scores = CategoryScores(
            content=content_score,
            structure=component(analysis.ats),
            keywords=component(analysis.keyword_matching),
            experience=experience,
            skills=skills,
        )
        return scores, degraded

    def overall_score(self, scores: CategoryScores) -> int:
        """Weighted sum, rounded once after summation and clamped to [0, 100]."""
        total = sum(self.weights[name] * score for name, score in scores.items())
        return max(0, min(100, round_half_up(total)))

    def aggregate(
        self,
        content: ResumeContent,
        analysis: ContentAnalysis,
        requirements: JobRequirements | None = None,
    ) -> ScoringResult:
        scores, degraded = self.category_scores(content, analysis, requirements)
        overall = self.overall_score(scores)

        breakdown = [
            CategoryBreakdown(
                category=name,
                score=score,
                weight=self.weights[name],
                contribution=self.weights[name] * score,
                degraded=name in degraded,
            )
            for name, score in scores.items()
        ]
        strengths = [
            f"Strong {name} performance ({score}/100)"
            for name, score in scores.items() if score >= STRENGTH_THRESHOLD
        ]
        improvements = [
            f"{name.capitalize()} needs improvement ({score}/100)"
            for name, score in scores.items() if score < IMPROVEMENT_THRESHOLD
        ]
        logger.debug("Overall score %d from %s", overall, dict(scores.items()))

        return ScoringResult(
            overall_score=overall,
            category_scores=scores,
            breakdown=breakdown,
            strengths=strengths,
            improvement_areas=improvements,
            summary=summary_for(overall),
        )

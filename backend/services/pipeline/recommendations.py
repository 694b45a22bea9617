"""Recommendation generator: turns weak analyzer signals into prioritized advice.

Tier 1: template-based rules, no ML. Each recommendation is tied to the
category it would move and prioritized by that category's score.
"""

import logging
import re

from models.schemas.analyses import ATSSuggestion, ContentAnalysis
from models.schemas.job_requirements import JobRequirements
from models.schemas.recommendation import Recommendation, RecommendationExamples
from models.schemas.resume_content import ResumeContent
from models.schemas.scoring import CATEGORY_NAMES, CategoryScores
from services.pipeline.action_verbs import experience_sentences
from services.pipeline.ats_compatibility import COMPLEX_FORMATTING_PATTERNS, MAX_LINE_LENGTH
from services.pipeline.quantification import is_quantified

logger = logging.getLogger(__name__)

HIGH_PRIORITY_BELOW = 50
MEDIUM_PRIORITY_BELOW = 70

EXPERIENCE_ADVICE_BELOW = 70
SKILLS_ADVICE_BELOW = 60
LOW_IMPACT_BELOW = 60

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
CATEGORY_ORDER = {name: index for index, name in enumerate(CATEGORY_NAMES)}

IMPACTS: dict[str, dict[str, str]] = {
    "content": {
        "high": "Major improvement in how employers perceive your qualifications",
        "medium": "Noticeable enhancement in resume effectiveness",
        "low": "Minor improvement in overall presentation",
    },
    "structure": {
        "high": "Critical for passing ATS screening and reaching human reviewers",
        "medium": "Important for optimal ATS parsing and formatting",
        "low": "Helpful for consistent formatting and readability",
    },
    "keywords": {
        "high": "Significantly improves job matching and search visibility",
        "medium": "Enhances relevance to job requirements",
        "low": "Slightly improves keyword alignment",
    },
    "experience": {
        "high": "Dramatically showcases your value and achievements",
        "medium": "Clearly demonstrates your capabilities",
        "low": "Adds credibility to your background",
    },
    "skills": {
        "high": "Greatly improves technical qualification matching",
        "medium": "Enhances skill relevance and completeness",
        "low": "Slightly improves skill presentation",
    },
}

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    return _SLUG_RE.sub("-", title.lower()).strip("-")


def priority_for(score: int, blocking: bool = False) -> str:
    if blocking or score < HIGH_PRIORITY_BELOW:
        return "high"
    if score < MEDIUM_PRIORITY_BELOW:
        return "medium"
    return "low"


class RecommendationGenerator:
    """Builds, deduplicates and orders recommendations for one analysis."""

    def generate(
        self,
        content: ResumeContent,
        analysis: ContentAnalysis,
        scores: CategoryScores,
        requirements: JobRequirements | None = None,
    ) -> list[Recommendation]:
        drafts: list[Recommendation] = []
        drafts += self._action_verbs(content, analysis, scores)
        drafts += self._quantification(content, analysis, scores)
        drafts += self._clarity(analysis, scores)
        drafts += self._keywords(analysis, scores, requirements)
        drafts += [self._from_ats(s, content, scores) for s in analysis.ats.suggestions]
        drafts += self._experience(content, scores)
        drafts += self._skills(content, analysis, scores, requirements)

        unique = self.deduplicate(drafts)
        ordered = sorted(
            unique, key=lambda r: (PRIORITY_ORDER[r.priority], CATEGORY_ORDER[r.category])
        )
        logger.debug("Generated %d recommendations (%d before dedup)", len(ordered), len(drafts))
        return ordered

    @staticmethod
    def deduplicate(recommendations: list[Recommendation]) -> list[Recommendation]:
        """Keep the first recommendation per (category, title)."""
        seen: set[tuple[str, str]] = set()
        unique = []
        for rec in recommendations:
            key = (rec.category, rec.title.lower())
            if key not in seen:
                seen.add(key)
                unique.append(rec)
        return unique

    @staticmethod
    def _build(
        category: str,
        score: int,
        title: str,
        description: str,
        after: str,
        before: str | None = None,
        blocking: bool = False,
    ) -> Recommendation:
        priority = priority_for(score, blocking)
        return Recommendation(
            id=f"{category}-{slugify(title)}",
            category=category,
            priority=priority,
            title=title,
            description=description,
            examples=RecommendationExamples(before=before, after=after),
            impact=IMPACTS[category][priority],
        )

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def _action_verbs(self, content, analysis, scores) -> list[Recommendation]:
        verbs = analysis.action_verbs
        if verbs.degraded or not verbs.suggestions:
            return []
        first = verbs.suggestions[0]
        before = next(
            (s for s in experience_sentences(content) if first.weak_verb in s.lower()), None
        )
        return [self._build(
            "content", scores.content,
            "Replace Weak Action Verbs",
            f"Start bullet points with strong action verbs instead of: {', '.join(verbs.weak_verbs[:5])}. "
            f"Try {', '.join(first.suggestions)} in place of \"{first.weak_verb}\".",
            after=first.example,
            before=before,
        )]

    def _quantification(self, content, analysis, scores) -> list[Recommendation]:
        quant = analysis.quantification
        if quant.degraded or not quant.missing_quantification:
            return []
        before = None
        for entry in content.sections.experience:
            if entry.key in quant.missing_quantification:
                unquantified = [a for a in entry.achievements if not is_quantified(a)]
                before = unquantified[0] if unquantified else (entry.description or None)
                break
        return [self._build(
            "content", scores.content,
            "Quantify Your Achievements",
            "Add measurable results (percentages, dollar amounts, time saved, team size) to: "
            + ", ".join(quant.missing_quantification[:3]),
            after="Increased application performance by 40% by introducing response caching",
            before=before,
        )]

    def _clarity(self, analysis, scores) -> list[Recommendation]:
        clarity = analysis.clarity
        if clarity.degraded:
            return []
        recs = []
        if clarity.long_sentences:
            recs.append(self._build(
                "content", scores.content,
                "Shorten Long Sentences",
                clarity.readability_issues[0] + ". Break them into focused bullet points.",
                after="Migrated billing to AWS. Cut hosting costs by 30%.",
                before=clarity.long_sentences[0],
            ))
        if any("passive voice" in issue for issue in clarity.readability_issues):
            recs.append(self._build(
                "content", scores.content,
                "Use Active Voice",
                "Rewrite passive phrases so each bullet starts with what you did",
                after="Redesigned the onboarding flow, reducing drop-off by 15%",
                before="The onboarding flow was redesigned by the team",
            ))
        if clarity.impact_score < LOW_IMPACT_BELOW:
            recs.append(self._build(
                "content", scores.content,
                "Highlight Your Impact",
                "Describe outcomes, not duties: use words like increased, reduced or launched",
                after="Launched a self-service portal that reduced support tickets by 25%",
                before="Responsible for the customer support portal",
            ))
        return recs

    # ------------------------------------------------------------------
    # Keywords, structure, experience, skills
    # ------------------------------------------------------------------

    def _keywords(self, analysis, scores, requirements) -> list[Recommendation]:
        keywords = analysis.keyword_matching
        if requirements is None or keywords.degraded or not keywords.missing_keywords:
            return []
        missing = keywords.missing_required or keywords.missing_keywords
        return [self._build(
            "keywords", scores.keywords,
            "Add Missing Keywords",
            f"Mention job-relevant skills you have actually used. Missing: {', '.join(missing[:5])}",
            after=f"Developed web applications using {' and '.join(missing[:2])}, improving performance by 30%",
        )]

    def _from_ats(self, suggestion: ATSSuggestion, content: ResumeContent, scores) -> Recommendation:
        return self._build(
            "structure", scores.structure,
            suggestion.title,
            suggestion.description,
            after=suggestion.example or "Clean, simple formatting with clear section headers",
            before=self._ats_before(suggestion, content),
            blocking=suggestion.blocking,
        )

    @staticmethod
    def _ats_before(suggestion: ATSSuggestion, content: ResumeContent) -> str | None:
        """The offending resume text for the ATS suggestions that have one."""
        lines = [line for line in content.raw_text.split("\n") if line.strip()]
        if suggestion.title == "Use Professional Email":
            return content.sections.contact_info.email
        if suggestion.title == "Optimize Line Length":
            return next((line.strip() for line in lines if len(line) > MAX_LINE_LENGTH), None)
        if suggestion.title == "Simplify Formatting":
            return next(
                (line.strip() for line in lines if any(p.search(line) for p in COMPLEX_FORMATTING_PATTERNS)),
                None,
            )
        return None

    def _experience(self, content, scores) -> list[Recommendation]:
        if scores.experience >= EXPERIENCE_ADVICE_BELOW:
            return []
        before = None
        for entry in content.sections.experience:
            before = (entry.achievements[0] if entry.achievements else entry.description) or None
            if before:
                break
        return [self._build(
            "experience", scores.experience,
            "Strengthen Experience Descriptions",
            "Add quantifiable achievements, leadership and job-relevant skills to each role",
            after="Led cross-functional team of 8 members to deliver 5 projects on time, "
                  "reducing delivery time by 25%",
            before=before,
        )]

    def _skills(self, content, analysis, scores, requirements) -> list[Recommendation]:
        if scores.skills >= SKILLS_ADVICE_BELOW:
            return []
        skills = content.sections.skills
        missing = analysis.keyword_matching.missing_keywords if requirements else []
        after = ", ".join(skills[:3] + missing[:3]) if missing else (
            "JavaScript, React, Node.js, PostgreSQL, Agile methodology, Cross-functional collaboration"
        )
        return [self._build(
            "skills", scores.skills,
            "Enhance Skills Section",
            "Add relevant technical and soft skills that match the job requirements",
            after=after,
            before=", ".join(skills[:5]) or None,
        )]

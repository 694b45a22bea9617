from models.schemas.job_requirements import JobRequirements
from models.schemas.recommendation import Recommendation, RecommendationExamples
from services.pipeline.aggregator import ScoreAggregator
from services.pipeline.recommendations import (
    PRIORITY_ORDER,
    RecommendationGenerator,
    priority_for,
    slugify,
)
from services.pipeline.scoring_engine import ScoringEngine
from services.section_parser import parse_resume

WEAK_RESUME = """Jane Smith

Experience
Developer | Acme | 2019 - 2021
- Did various programming tasks
- Worked on the website
"""

REQUIREMENTS = JobRequirements(
    required_skills=["JavaScript", "React", "Python"],
    preferred_skills=["Node.js", "AWS", "Docker"],
)


def _generate(text: str, requirements: JobRequirements | None = None) -> list[Recommendation]:
    content = parse_resume(text)
    analysis = ScoringEngine().analyze(content, requirements)
    scoring = ScoreAggregator().aggregate(content, analysis, requirements)
    return RecommendationGenerator().generate(content, analysis, scoring.category_scores, requirements)


class TestRecommendationGenerator:
    def test_weak_resume_gets_targeted_advice(self):
        titles = [r.title for r in _generate(WEAK_RESUME, REQUIREMENTS)]
        for expected in (
            "Replace Weak Action Verbs",
            "Quantify Your Achievements",
            "Add Missing Keywords",
            "Add Missing Sections",
        ):
            assert expected in titles

    def test_ordered_by_priority(self):
        recommendations = _generate(WEAK_RESUME, REQUIREMENTS)
        ranks = [PRIORITY_ORDER[r.priority] for r in recommendations]
        assert ranks == sorted(ranks)

    def test_ids_unique_and_examples_present(self):
        recommendations = _generate(WEAK_RESUME, REQUIREMENTS)
        ids = [r.id for r in recommendations]
        assert len(ids) == len(set(ids))
        assert all(r.examples.after for r in recommendations)

    def test_weak_verb_example_uses_resume_text(self):
        rec = next(r for r in _generate(WEAK_RESUME) if r.title == "Replace Weak Action Verbs")
        assert rec.category == "content"
        assert rec.examples.before == "Did various programming tasks"
        assert rec.examples.after == "Delivered various programming tasks"

    def test_blocking_ats_issue_is_high_priority(self):
        rec = next(r for r in _generate(WEAK_RESUME) if r.title == "Add Missing Sections")
        assert rec.category == "structure"
        assert rec.priority == "high"

    def test_no_keyword_advice_without_requirements(self, sample_resume):
        titles = [r.title for r in _generate(sample_resume)]
        assert "Add Missing Keywords" not in titles


def test_deduplicate_keeps_first():
    def rec(title, impact):
        return Recommendation(
            id=slugify(title), category="content", priority="low", title=title,
            description="", examples=RecommendationExamples(after="x"), impact=impact,
        )

    unique = RecommendationGenerator.deduplicate([rec("Use Active Voice", "a"), rec("use active voice", "b")])
    assert [r.impact for r in unique] == ["a"]


def test_priority_for():
    assert priority_for(30) == "high"
    assert priority_for(60) == "medium"
    assert priority_for(90) == "low"
    assert priority_for(90, blocking=True) == "high"


def test_slugify():
    assert slugify("Add Missing Keywords!") == "add-missing-keywords"

from models.schemas.analyses import ATSCompatibilityResult
from models.schemas.job_requirements import JobRequirements
from services.pipeline.scoring_engine import ScoringEngine
from services.section_parser import parse_resume


def test_analyze_content_leaves_ats_default(sample_resume):
    analysis = ScoringEngine().analyze_content(parse_resume(sample_resume))
    assert analysis.ats == ATSCompatibilityResult()
    assert analysis.keyword_matching.score == 0
    assert analysis.quantification.total_achievements == 3


def test_analyze_runs_all_analyzers(sample_resume):
    requirements = JobRequirements(required_skills=["Python", "Docker"], preferred_skills=["Kubernetes"])
    analysis = ScoringEngine().analyze(parse_resume(sample_resume), requirements)
    assert analysis.ats.score > 0
    assert analysis.keyword_matching.matched_keywords == ["Python", "Docker"]
    assert analysis.keyword_matching.missing_keywords == ["Kubernetes"]


def test_one_failing_analyzer_does_not_affect_the_others(sample_resume):
    engine = ScoringEngine()

    def boom(content, requirements=None):
        raise ValueError("bad input")

    engine.clarity.analyze = boom
    analysis = engine.analyze(parse_resume(sample_resume))
    assert analysis.clarity.degraded is True
    assert analysis.action_verbs.degraded is False
    assert analysis.action_verbs.total_verbs > 0

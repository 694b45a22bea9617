import pytest

from models.schemas.job_requirements import MAX_KEYWORDS, JobRequirements
from services.errors import InputError
from services.requirement_extractor import (
    classify_skills,
    extract_compensation,
    extract_experience_level,
    extract_keywords,
    extract_qualification_sections,
    extract_requirements,
)


class TestClassifySkills:
    def test_section_headings(self, sample_jd):
        required, preferred = classify_skills(sample_jd)
        assert required == ["python", "django", "postgresql", "docker"]
        assert preferred == ["aws", "kubernetes", "graphql"]

    def test_inline_indicator_beats_section(self):
        text = "Requirements:\n- Experience with React is a plus"
        required, preferred = classify_skills(text)
        assert required == []
        assert preferred == ["react"]

    def test_sentences_on_one_line_are_classified_separately(self):
        required, preferred = classify_skills("Python is required; Docker experience is preferred.")
        assert required == ["python"]
        assert preferred == ["docker"]

    def test_both_indicators_in_one_sentence_prefer_preferred(self):
        required, preferred = classify_skills("Python required, Go preferred")
        assert required == []
        assert preferred == ["python", "go"]

    def test_defaults_to_required(self):
        required, preferred = classify_skills("We build with TypeScript and Redis.")
        assert required == ["typescript", "redis"]
        assert preferred == []

    def test_short_skill_line_is_not_a_heading(self):
        text = "Nice to have:\nSkills: Python\n- Terraform"
        required, preferred = classify_skills(text)
        assert "terraform" in preferred
        assert "python" in preferred


class TestExperienceLevel:
    @pytest.mark.parametrize("text,level", [
        ("5+ years of backend experience", "senior-level"),
        ("3-5 years of experience", "mid-level"),
        ("2 years of experience", "entry-level"),
        ("Director of Engineering", "management"),
        ("Junior developer wanted", "entry-level"),
        ("Help us build things", "not-specified"),
    ])
    def test_levels(self, text, level):
        assert extract_experience_level(text) == level


class TestKeywords:
    def test_filters_stopwords_and_splits_compounds(self):
        keywords = extract_keywords("Build scalable microservices using Python and full-stack tooling")
        assert keywords[:3] == ["build", "scalable", "microservices"]
        assert "full-stack" in keywords
        assert "full" in keywords and "stack" in keywords
        assert "using" not in keywords
        assert "and" not in keywords

    def test_drops_adverbs_and_short_words(self):
        keywords = extract_keywords("Quickly ship UI to go")
        assert keywords == ["ship"]

    def test_capped(self):
        text = " ".join(f"term{i}" for i in range(MAX_KEYWORDS + 10))
        assert len(extract_keywords(text)) == MAX_KEYWORDS


class TestExtractRequirements:
    def test_full_description(self, sample_jd):
        requirements = extract_requirements(sample_jd)
        assert requirements.required_skills == ["python", "django", "postgresql", "docker"]
        assert requirements.preferred_skills == ["aws", "kubernetes", "graphql"]
        assert requirements.experience_level == "senior-level"
        assert "python" in requirements.keywords

    def test_education_and_certifications(self):
        requirements = extract_requirements("Bachelor degree in Computer Science. PMP preferred.")
        assert "bachelor" in requirements.education
        assert "computer science" in requirements.education
        assert requirements.certifications == ["pmp"]

    def test_empty_text_gives_defaults(self):
        assert extract_requirements("  \n ") == JobRequirements()

    def test_non_string_rejected(self):
        with pytest.raises(InputError):
            extract_requirements(42)

    def test_deterministic(self, sample_jd):
        assert extract_requirements(sample_jd) == extract_requirements(sample_jd)


def test_qualification_sections(sample_jd):
    sections = extract_qualification_sections(sample_jd)
    assert sections.required_qualifications == [
        "5+ years of experience with Python and Django",
        "Experience with PostgreSQL and Docker",
    ]
    assert sections.preferred_qualifications == [
        "Kubernetes or AWS experience",
        "Familiarity with GraphQL",
    ]
    assert sections.responsibilities == []


def test_compensation(sample_jd):
    compensation = extract_compensation(sample_jd)
    assert compensation.salary_range.min == 120000
    assert compensation.salary_range.max == 150000
    assert compensation.currency == "USD"
    assert compensation.benefits == ["health insurance", "equity"]


def test_compensation_without_salary():
    compensation = extract_compensation("Remote work and a learning budget.")
    assert compensation.salary_range is None
    assert compensation.currency is None
    assert compensation.benefits == ["remote work", "learning budget"]

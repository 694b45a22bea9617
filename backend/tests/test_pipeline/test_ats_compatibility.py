from services.pipeline.ats_compatibility import ATSCompatibilityAnalyzer
from services.section_parser import parse_resume


def _analyze(text: str):
    return ATSCompatibilityAnalyzer().analyze(parse_resume(text))


class TestATSCompatibilityAnalyzer:
    def test_well_structured_resume(self, sample_resume):
        result = _analyze(sample_resume)
        assert result.organization_score == 95
        assert result.readability_score == 100
        assert result.score >= 90
        assert not any(s.blocking for s in result.suggestions)

    def test_missing_required_sections(self):
        result = _analyze("Jane Smith\njane@example.com\n\nExperience\nEngineer | Acme | 2020 - 2022\n- Built things")
        issues = [i.description for i in result.issues]
        assert "Missing required sections: education, skills" in issues
        suggestion = next(s for s in result.suggestions if s.title == "Add Missing Sections")
        assert suggestion.blocking is True
        assert suggestion.priority == "high"

    def test_missing_name_is_blocking(self):
        result = _analyze("Experience\nEngineer | Acme | 2020 - 2022\n- Built things")
        titles = {s.title: s for s in result.suggestions}
        assert titles["Add Your Name"].blocking is True
        assert "Move Contact Information to Top" in titles

    def test_unprofessional_email(self):
        result = _analyze("Jane Smith\ncoolguy1234@yahoo.com\n\nSkills\nPython")
        assert "Use Professional Email" in [s.title for s in result.suggestions]
        assert result.presentation_score < 100

    def test_complex_formatting(self):
        text = "Jane Smith\n" + "\tPython\n" * 6
        result = _analyze(text)
        suggestion = next(s for s in result.suggestions if s.title == "Simplify Formatting")
        assert suggestion.blocking is True
        assert result.formatting_score <= 80

    def test_no_experience(self):
        result = _analyze("Jane Smith\njane@example.com\n\nSkills\nPython")
        assert "Add Work Experience" in [s.title for s in result.suggestions]

    def test_scores_are_bounded(self):
        result = _analyze("x")
        for score in (result.score, result.formatting_score, result.organization_score,
                      result.readability_score, result.presentation_score):
            assert 0 <= score <= 100

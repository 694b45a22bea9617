from services.pipeline.quantification import QuantificationAnalyzer, is_quantified


class TestQuantificationAnalyzer:
    def test_quantified_achievements_grouped_by_entry(self, make_content):
        content = make_content([
            "Increased application performance by 40%",
            "Led a team of 5 developers",
        ])
        result = QuantificationAnalyzer().analyze(content)
        assert result.quantified_achievements == {
            "Acme Corp - Engineer": [
                "Increased application performance by 40%",
                "Led a team of 5 developers",
            ]
        }
        assert result.quantified_count == 2
        assert result.total_achievements == 2
        assert result.score == 100
        assert result.missing_quantification == []

    def test_missing_quantification(self, make_content):
        content = make_content(["Improved the deployment process", "Cut costs by $2M"])
        result = QuantificationAnalyzer().analyze(content)
        assert result.score == 50
        assert result.missing_quantification == []

        content = make_content(["Improved the deployment process"])
        result = QuantificationAnalyzer().analyze(content)
        assert result.score == 0
        assert result.missing_quantification == ["Acme Corp - Engineer"]
        assert result.suggestions[0].startswith("Add specific metrics to Acme Corp - Engineer")

    def test_half_score_rounds_up(self, make_content):
        content = make_content([
            "Cut costs by $2M",
            "Wrote the onboarding guide",
            "Maintained the build scripts",
            "Reviewed pull requests",
            "Mentored new hires",
            "Owned the release process",
            "Documented the public API",
            "Ran weekly demos",
        ])
        result = QuantificationAnalyzer().analyze(content)
        assert result.quantified_count == 1
        assert result.score == 13

    def test_no_achievements(self, make_content):
        result = QuantificationAnalyzer().analyze(make_content([], description="Backend work"))
        assert result.total_achievements == 0
        assert result.score == 0


def test_is_quantified():
    assert is_quantified("Saved $50k per year")
    assert is_quantified("Doubled weekly active users")
    assert not is_quantified("Improved team morale")

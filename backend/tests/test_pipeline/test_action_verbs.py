from services.pipeline.action_verbs import ActionVerbAnalyzer, rewrite_sentence


class TestActionVerbAnalyzer:
    def test_weak_verb_gets_suggestions(self, make_content):
        result = ActionVerbAnalyzer().analyze(make_content(["Did various programming tasks"]))
        assert result.weak_verbs == ["did"]
        assert result.score == 0
        suggestion = result.suggestions[0]
        assert suggestion.weak_verb == "did"
        assert suggestion.suggestions == ["delivered", "executed", "accomplished"]
        assert suggestion.example == "Delivered various programming tasks"

    def test_strong_verbs_score(self, make_content):
        content = make_content([
            "Increased application performance by 40%",
            "Led a team of 5 developers",
        ])
        result = ActionVerbAnalyzer().analyze(content)
        assert result.strong_verbs == ["increased", "led"]
        assert result.weak_verbs == []
        assert result.total_verbs == 2
        assert result.score == 100

    def test_mixed_verbs(self, make_content):
        content = make_content(["Built the billing service", "Helped with onboarding"])
        result = ActionVerbAnalyzer().analyze(content)
        assert result.strong_verbs == ["built"]
        assert result.weak_verbs == ["helped"]
        assert result.score == 50

    def test_classification_is_idempotent(self, make_content):
        content = make_content([
            "Built the billing service",
            "Helped with onboarding",
            "Did various programming tasks",
            "Led a team of 5 developers",
        ])
        before = content.model_copy(deep=True)
        analyzer = ActionVerbAnalyzer()

        first = analyzer.analyze(content)
        second = analyzer.analyze(content)
        assert first.strong_verbs == second.strong_verbs == ["built", "led"]
        assert first.weak_verbs == second.weak_verbs == ["helped", "did"]
        assert first.suggestions == second.suggestions
        assert first.score == second.score == 50
        assert content == before

    def test_no_experience_scores_zero(self, make_content):
        result = ActionVerbAnalyzer().analyze(make_content([]))
        assert result.total_verbs == 0
        assert result.score == 0

    def test_run_falls_back_on_error(self, make_content):
        class Broken(ActionVerbAnalyzer):
            def analyze(self, content, requirements=None):
                raise RuntimeError("lexicon unavailable")

        result = Broken().run(make_content(["Led a team"]))
        assert result.degraded is True
        assert result.score == 0


def test_rewrite_sentence_keeps_case():
    assert rewrite_sentence("Did the work", "did", "delivered") == "Delivered the work"
    assert rewrite_sentence("we did it", "did", "delivered") == "we delivered it"

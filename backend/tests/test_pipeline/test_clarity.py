from services.pipeline.clarity import LONG_SENTENCE_WORDS, ClarityAnalyzer


class TestClarityAnalyzer:
    def test_long_sentence_is_reported(self, make_content):
        sentence = " ".join(["word"] * (LONG_SENTENCE_WORDS + 5))
        result = ClarityAnalyzer().analyze(make_content([sentence]))
        assert result.long_sentences == [sentence]
        assert any("too long" in issue for issue in result.readability_issues)
        assert result.clarity_score == 65

    def test_impact_and_tone(self, make_content):
        content = make_content([
            "Increased revenue by 20% and won the top sales award",
            "Reduced churn successfully",
        ])
        result = ClarityAnalyzer().analyze(content)
        assert result.impact_score == 100
        assert set(result.impact_indicators) >= {"increased", "reduced"}
        assert result.sentiment_score > 0
        assert result.tone_score > 50
        assert 0 <= result.score <= 100

    def test_vague_words_lower_clarity(self, make_content):
        content = make_content(["Responsible for various things"])
        result = ClarityAnalyzer().analyze(content)
        assert result.clarity_score < 70

    def test_passive_voice_issue(self, make_content):
        content = make_content(["The report was written and was reviewed and was approved and was sent and was filed and was read"])
        result = ClarityAnalyzer().analyze(content)
        assert any("passive voice" in issue for issue in result.readability_issues)

    def test_empty_text_scores_zero(self, make_content):
        result = ClarityAnalyzer().analyze(make_content([]))
        assert result.score == 0
        assert result.word_count == 0

    def test_average_sentence_length(self, make_content):
        result = ClarityAnalyzer().analyze(make_content(["One two three", "One two three four five"]))
        assert result.average_sentence_length == 4.0

"""Clarity, impact and tone analyzer."""

import logging

import numpy as np

from models.schemas.analyses import ClarityAnalysis
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from services.pipeline.base import BaseAnalyzer, round_half_up
from services.text_utils import split_sentences, term_pattern, tokenize_words, word_count

logger = logging.getLogger(__name__)

LONG_SENTENCE_WORDS = 25
PASSIVE_VOICE_LIMIT = 5

CLARITY_BASE = 70
PRECISE_BONUS = 2
VAGUE_PENALTY = 3
LONG_SENTENCE_PENALTY = 5
MAX_LONG_SENTENCE_PENALTY = 20
IMPACT_BASE = 40
TONE_BASE = 50
TONE_STEP = 10

# Sub-score weights for the combined score
CLARITY_WEIGHT = 0.4
IMPACT_WEIGHT = 0.4
TONE_WEIGHT = 0.2


def _clamp(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def content_parts(content: ResumeContent) -> list[str]:
    """Summary, then each experience description and achievement."""
    parts = [content.sections.summary or ""]
    for entry in content.sections.experience:
        parts.append(entry.description)
        parts.extend(entry.achievements)
    return [p for p in parts if p.strip()]


class ClarityAnalyzer(BaseAnalyzer[ClarityAnalysis]):
    name = "clarity"

    def fallback(self) -> ClarityAnalysis:
        return ClarityAnalysis()

    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> ClarityAnalysis:
        vocab = self.vocabulary
        parts = content_parts(content)
        words = sum(word_count(p) for p in parts)
        if words == 0:
            return ClarityAnalysis()

        text = "\n".join(parts)
        sentences = [s for p in parts for s in split_sentences(p)]
        lengths = [len(s.split()) for s in sentences]
        long_sentences = [s for s, n in zip(sentences, lengths) if n > LONG_SENTENCE_WORDS]

        precise = sum(1 for w in vocab.precise_words if term_pattern(w).search(text))
        vague = sum(1 for w in vocab.vague_words if term_pattern(w).search(text))
        clarity = _clamp(
            CLARITY_BASE + PRECISE_BONUS * precise - VAGUE_PENALTY * vague
            - min(MAX_LONG_SENTENCE_PENALTY, LONG_SENTENCE_PENALTY * len(long_sentences))
        )

        impact_patterns = [term_pattern(w) for w in vocab.impact_words]
        impactful = sum(1 for s in sentences if any(p.search(s) for p in impact_patterns))
        density = impactful / len(sentences) if sentences else 0.0
        impact = _clamp(IMPACT_BASE + round_half_up(60 * density))

        tokens = [t.lower() for t in tokenize_words(text)]
        sentiment = (
            sum(1 for t in tokens if t in vocab.tone_positive)
            - sum(1 for t in tokens if t in vocab.tone_negative)
        )
        tone = _clamp(TONE_BASE + TONE_STEP * sentiment)

        issues = []
        if long_sentences:
            issues.append(
                f"{len(long_sentences)} sentence(s) are too long (over {LONG_SENTENCE_WORDS} words)"
            )
        passive = sum(1 for t in tokens if t in vocab.passive_markers)
        if passive > PASSIVE_VOICE_LIMIT:
            issues.append(f"Consider reducing passive voice usage ({passive} passive constructions)")

        return ClarityAnalysis(
            score=_clamp(CLARITY_WEIGHT * clarity + IMPACT_WEIGHT * impact + TONE_WEIGHT * tone),
            clarity_score=clarity,
            impact_score=impact,
            tone_score=tone,
            sentiment_score=sentiment,
            word_count=words,
            average_sentence_length=round(float(np.mean(lengths)), 1) if lengths else 0.0,
            long_sentences=long_sentences,
            readability_issues=issues,
            impact_indicators=[w for w, p in zip(vocab.impact_words, impact_patterns) if p.search(text)],
        )

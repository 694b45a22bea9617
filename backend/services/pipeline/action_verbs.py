"""Action verb analyzer: strong vs weak verbs in experience text."""

import logging
import re

from models.schemas.analyses import ActionVerbAnalysis, ActionVerbSuggestion
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from services.pipeline.base import BaseAnalyzer, round_half_up
from services.text_utils import normalize_verb, split_sentences, tokenize_words

logger = logging.getLogger(__name__)

MAX_REPLACEMENTS = 3


def experience_sentences(content: ResumeContent) -> list[str]:
    """Sentences from every experience description and achievement, in order."""
    sentences: list[str] = []
    for entry in content.sections.experience:
        sentences.extend(split_sentences(entry.description))
        for achievement in entry.achievements:
            sentences.extend(split_sentences(achievement))
    return sentences


def _match_case(word: str, template: str) -> str:
    if template.isupper() and len(template) > 1:
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def rewrite_sentence(sentence: str, weak: str, replacement: str) -> str:
    """Replace the first occurrence of ``weak`` in ``sentence``, keeping its case."""
    pattern = re.compile(rf"(?<![A-Za-z]){re.escape(weak)}(?![A-Za-z])", re.IGNORECASE)
    return pattern.sub(lambda m: _match_case(replacement, m.group()), sentence, count=1)


class ActionVerbAnalyzer(BaseAnalyzer[ActionVerbAnalysis]):
    name = "action_verbs"

    def fallback(self) -> ActionVerbAnalysis:
        return ActionVerbAnalysis()

    def classify(self, token: str, leading: bool) -> str | None:
        """Return "strong", "weak" or None for a token that is not verb-like.

        The first word of a sentence counts as a verb when it reads as a past
        tense ("Coordinated ..."); it is weak unless the strong lexicon has it.
        """
        vocab = self.vocabulary
        base = normalize_verb(token, vocab.strong_verbs, vocab.weak_verbs)
        if base in vocab.strong_verbs:
            return "strong"
        if base in vocab.weak_verbs:
            return "weak"
        if leading and token.lower().endswith("ed"):
            return "weak"
        return None

    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> ActionVerbAnalysis:
        vocab = self.vocabulary
        strong: list[str] = []
        weak: list[str] = []
        total = 0
        strong_count = 0
        examples: dict[str, str] = {}  # weak verb -> first sentence using it

        for sentence in experience_sentences(content):
            for index, token in enumerate(tokenize_words(sentence)):
                kind = self.classify(token, leading=index == 0)
                if kind is None:
                    continue
                total += 1
                word = token.lower()
                if kind == "strong":
                    strong_count += 1
                    if word not in strong:
                        strong.append(word)
                else:
                    if word not in weak:
                        weak.append(word)
                    examples.setdefault(word, sentence)

        suggestions = []
        for word in weak:
            base = normalize_verb(word, vocab.weak_verbs)
            replacements = list(vocab.replacements_for(base)[:MAX_REPLACEMENTS])
            example = examples[word]
            if replacements:
                example = rewrite_sentence(example, word, replacements[0])
            suggestions.append(ActionVerbSuggestion(
                weak_verb=word,
                suggestions=replacements,
                example=example,
            ))

        logger.debug("Action verbs: %d strong of %d (%d distinct weak)", strong_count, total, len(weak))
        return ActionVerbAnalysis(
            score=round_half_up(100 * strong_count / total) if total else 0,
            strong_verbs=strong,
            weak_verbs=weak,
            total_verbs=total,
            suggestions=suggestions,
        )

"""Runs the five analyzers; each one is isolated from the others' failures."""

import logging

from models.schemas.analyses import ATSCompatibilityResult, ContentAnalysis
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from services.pipeline.action_verbs import ActionVerbAnalyzer
from services.pipeline.ats_compatibility import ATSCompatibilityAnalyzer
from services.pipeline.clarity import ClarityAnalyzer
from services.pipeline.keyword_matching import KeywordMatchAnalyzer
from services.pipeline.quantification import QuantificationAnalyzer
from services.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Groups the content analyzers and the ATS analyzer."""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> None:
        self.action_verbs = ActionVerbAnalyzer(vocabulary)
        self.quantification = QuantificationAnalyzer(vocabulary)
        self.keyword_matching = KeywordMatchAnalyzer(vocabulary)
        self.clarity = ClarityAnalyzer(vocabulary)
        self.ats = ATSCompatibilityAnalyzer(vocabulary)

    def analyze_content(
        self, content: ResumeContent, requirements: JobRequirements | None = None
    ) -> ContentAnalysis:
        """Run the four content analyzers. The ATS slot keeps its default."""
        analysis = ContentAnalysis(
            action_verbs=self.action_verbs.run(content, requirements),
            quantification=self.quantification.run(content, requirements),
            keyword_matching=self.keyword_matching.run(content, requirements),
            clarity=self.clarity.run(content, requirements),
        )
        logger.debug(
            "Content scores: verbs=%d quantification=%d keywords=%d clarity=%d",
            analysis.action_verbs.score, analysis.quantification.score,
            analysis.keyword_matching.score, analysis.clarity.score,
        )
        return analysis

    def analyze_ats(
        self, content: ResumeContent, requirements: JobRequirements | None = None
    ) -> ATSCompatibilityResult:
        result = self.ats.run(content, requirements)
        logger.debug("ATS score: %d (%d issues)", result.score, len(result.issues))
        return result

    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> ContentAnalysis:
        """All five analyzers in one call."""
        analysis = self.analyze_content(content, requirements)
        return analysis.model_copy(update={"ats": self.analyze_ats(content, requirements)})

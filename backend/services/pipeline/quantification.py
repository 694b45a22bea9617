"""Quantified achievement analyzer."""

import logging
import re

from models.schemas.analyses import QuantificationAnalysis
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ResumeContent
from services.pipeline.base import BaseAnalyzer, round_half_up

logger = logging.getLogger(__name__)

# Numbers, percentages, currency and multiplier words
QUANTIFIED_RE = re.compile(
    r"\d|[$€£¥]|\b(?:percent|million|billion|thousand|hundreds|dozens|"
    r"doubled|tripled|quadrupled|halved|twice)\b",
    re.IGNORECASE,
)


def is_quantified(achievement: str) -> bool:
    return QUANTIFIED_RE.search(achievement) is not None


class QuantificationAnalyzer(BaseAnalyzer[QuantificationAnalysis]):
    name = "quantification"

    def fallback(self) -> QuantificationAnalysis:
        return QuantificationAnalysis()

    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> QuantificationAnalysis:
        quantified: dict[str, list[str]] = {}
        missing: list[str] = []
        total = 0

        for entry in content.sections.experience:
            matches = [a for a in entry.achievements if is_quantified(a)]
            total += len(entry.achievements)
            if matches:
                quantified.setdefault(entry.key, []).extend(matches)
            elif entry.key not in missing:
                missing.append(entry.key)

        quantified_count = sum(len(v) for v in quantified.values())
        logger.debug("Quantified %d of %d achievements", quantified_count, total)
        return QuantificationAnalysis(
            score=round_half_up(100 * quantified_count / total) if total else 0,
            quantified_achievements=quantified,
            missing_quantification=missing,
            total_achievements=total,
            quantified_count=quantified_count,
            suggestions=[
                f"Add specific metrics to {key} (e.g., percentages, dollar amounts, time saved, team size)"
                for key in missing
            ],
        )

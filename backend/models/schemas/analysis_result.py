"""The stored outcome of one analysis, with a versioned record boundary."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from models.schemas.analyses import ContentAnalysis
from models.schemas.recommendation import Recommendation
from models.schemas.scoring import CategoryScores
from services.errors import SerializationError

AnalysisStatus = Literal["pending", "processing", "completed", "failed"]
TERMINAL_STATUSES = frozenset({"completed", "failed"})

SCHEMA_VERSION = 1

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class AnalysisResult(BaseModel):
    """One analysis of a résumé, optionally against a job description.

    Created ``pending`` by the orchestrator. ``category_scores`` and the
    derived fields are only populated once the run has ``completed``.
    """
    id: str
    resume_id: str
    job_description_id: str | None = None
    run: int = 1
    overall_score: int | None = Field(default=None, ge=0, le=100)
    category_scores: CategoryScores | None = None
    recommendations: list[Recommendation] = []
    strengths: list[str] = []
    improvement_areas: list[str] = []
    summary: str = ""
    analysis: ContentAnalysis | None = None
    status: AnalysisStatus = "pending"
    error: str | None = None
    analyzed_at: datetime | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_record(self) -> dict[str, Any]:
        """JSON-safe dict tagged with the schema version."""
        record = self.model_dump(mode="json")
        record["schema_version"] = SCHEMA_VERSION
        return record

    @classmethod
    def from_record(cls, record: Any) -> "AnalysisResult":
        """Validate and decode a record produced by ``to_record``."""
        if not isinstance(record, dict):
            raise SerializationError(f"Expected a dict record, got {type(record).__name__}")
        payload = dict(record)
        version = payload.pop("schema_version", None)
        if version != SCHEMA_VERSION:
            raise SerializationError(f"Unsupported schema_version: {version!r}")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise SerializationError(f"Invalid analysis record: {e.error_count()} error(s)") from e

"""Progress tracking records for in-flight analyses."""

from datetime import datetime

from pydantic import BaseModel

from models.schemas.analysis_result import AnalysisStatus


class AnalysisStep(BaseModel):
    name: str
    description: str
    weight: float
    estimated_duration: float  # seconds


class ProgressState(BaseModel):
    """Mutable per-id state owned by the progress tracker."""
    analysis_id: str
    run: int = 1
    status: AnalysisStatus = "pending"
    current_step_index: int = 0
    steps: list[AnalysisStep] = []
    start_time: datetime | None = None
    step_started_at: datetime | None = None
    estimated_completion_time: datetime | None = None
    actual_completion_time: datetime | None = None
    error: str | None = None

    @property
    def completed_steps(self) -> int:
        if self.status == "completed":
            return len(self.steps)
        if self.status == "pending" or self.start_time is None:
            return 0
        return self.current_step_index

    @property
    def percentage(self) -> int:
        """Cumulative weight of fully completed steps, as 0-100."""
        if self.status == "completed":
            return 100
        done = sum(step.weight for step in self.steps[: self.completed_steps])
        return min(100, round(done * 100))

    @property
    def step_name(self) -> str | None:
        if not self.steps:
            return None
        return self.steps[min(self.current_step_index, len(self.steps) - 1)].name


class ProgressEvent(BaseModel):
    analysis_id: str
    run: int = 1
    status: AnalysisStatus
    step_index: int
    step_name: str | None = None
    percentage: int
    estimated_completion_time: datetime | None = None


class ProgressSnapshot(BaseModel):
    analysis_id: str
    run: int = 1
    status: AnalysisStatus
    current_step_index: int
    step_name: str | None = None
    step_description: str | None = None
    percentage: int
    estimated_completion_time: datetime | None = None
    actual_completion_time: datetime | None = None
    elapsed_seconds: float = 0.0
    error: str | None = None

from pydantic import BaseModel

from models.schemas.analysis_result import AnalysisStatus
from models.schemas.job_requirements import CompensationInfo, JobRequirements, QualificationSections
from models.schemas.progress import ProgressEvent


class AnalysisAccepted(BaseModel):
    id: str
    run: int = 1
    status: AnalysisStatus = "pending"
    status_url: str
    result_url: str


class CancelResponse(BaseModel):
    id: str
    cancelled: bool


class ProgressEventsResponse(BaseModel):
    id: str
    events: list[ProgressEvent] = []


class JobDescriptionAnalysis(BaseModel):
    requirements: JobRequirements = JobRequirements()
    qualifications: QualificationSections = QualificationSections()
    compensation: CompensationInfo = CompensationInfo()

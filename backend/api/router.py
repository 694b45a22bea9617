
from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_event_log, get_orchestrator
from models.requests import AnalysisRequest, JobDescriptionRequest
from models.responses import (
    AnalysisAccepted,
    CancelResponse,
    JobDescriptionAnalysis,
    ProgressEventsResponse,
)
from models.schemas.analysis_result import AnalysisResult
from models.schemas.progress import ProgressSnapshot
from services.errors import AnalysisNotFoundError, InputError
from services.notifications import InMemoryPublisher
from services.pipeline.orchestrator import AnalysisOrchestrator
from services.requirement_extractor import (
    extract_compensation,
    extract_qualification_sections,
    extract_requirements,
)


router = APIRouter()


def _accepted(request: Request, result: AnalysisResult) -> AnalysisAccepted:
    return AnalysisAccepted(
        id=result.id,
        run=result.run,
        status=result.status,
        status_url=str(request.url_for("analysis_status", analysis_id=result.id)),
        result_url=str(request.url_for("get_analysis", analysis_id=result.id)),
    )


def _not_found(e: AnalysisNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/analysis", response_model=AnalysisAccepted, status_code=status.HTTP_202_ACCEPTED)
async def create_analysis(
    request: Request,
    body: AnalysisRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    try:
        result = await orchestrator.submit(
            body.resume_text,
            job_description=body.job_description,
            requirements=body.job_requirements,
            resume_id=body.resume_id,
            job_description_id=body.job_description_id,
        )
    except InputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _accepted(request, result)


@router.get("/analysis/{analysis_id}", response_model=AnalysisResult, name="get_analysis")
async def get_analysis(analysis_id: str, orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)):
    try:
        return orchestrator.get_result(analysis_id)
    except AnalysisNotFoundError as e:
        raise _not_found(e)


@router.get("/analysis/{analysis_id}/status", response_model=ProgressSnapshot, name="analysis_status")
async def analysis_status(analysis_id: str, orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)):
    try:
        return orchestrator.snapshot(analysis_id)
    except AnalysisNotFoundError as e:
        raise _not_found(e)


@router.get("/analysis/{analysis_id}/events", response_model=ProgressEventsResponse)
async def analysis_events(
    analysis_id: str,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    event_log: InMemoryPublisher = Depends(get_event_log),
):
    try:
        orchestrator.get_result(analysis_id)
    except AnalysisNotFoundError as e:
        raise _not_found(e)
    return ProgressEventsResponse(id=analysis_id, events=event_log.events(analysis_id))


@router.post(
    "/analysis/{analysis_id}/retry", response_model=AnalysisAccepted, status_code=status.HTTP_202_ACCEPTED
)
async def retry_analysis(
    request: Request,
    analysis_id: str,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    try:
        result = await orchestrator.retry(analysis_id)
    except AnalysisNotFoundError as e:
        raise _not_found(e)
    except InputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _accepted(request, result)


@router.post("/analysis/{analysis_id}/cancel", response_model=CancelResponse)
async def cancel_analysis(analysis_id: str, orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)):
    try:
        cancelled = orchestrator.cancel(analysis_id)
    except AnalysisNotFoundError as e:
        raise _not_found(e)
    return CancelResponse(id=analysis_id, cancelled=cancelled)


@router.post("/job-requirements", response_model=JobDescriptionAnalysis)
async def job_requirements(body: JobDescriptionRequest):
    try:
        return JobDescriptionAnalysis(
            requirements=extract_requirements(body.job_description),
            qualifications=extract_qualification_sections(body.job_description),
            compensation=extract_compensation(body.job_description),
        )
    except InputError as e:
        raise HTTPException(status_code=422, detail=str(e))

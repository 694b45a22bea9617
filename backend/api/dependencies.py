"""Shared dependencies for API routes."""

from fastapi import Request

from services.notifications import InMemoryPublisher
from services.pipeline.orchestrator import AnalysisOrchestrator


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    return request.app.state.orchestrator


def get_event_log(request: Request) -> InMemoryPublisher:
    return request.app.state.event_log

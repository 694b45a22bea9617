import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import router
from config import settings
from services.notifications import CompositePublisher, InMemoryPublisher, LoggingPublisher
from services.pipeline.orchestrator import AnalysisOrchestrator

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.orchestrator.close()


app = FastAPI(
    title="Resume Brain API",
    description="Resume analysis, scoring and recommendations",
    version="2.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

event_log = InMemoryPublisher()
publishers = [event_log, LoggingPublisher()] if settings.log_progress_events else [event_log]
app.state.event_log = event_log
app.state.orchestrator = AnalysisOrchestrator(publisher=CompositePublisher(publishers))

app.include_router(router)

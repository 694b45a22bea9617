"""Analysis orchestrator: runs the pipeline stages as one background task per run.

Flow per run:
    initialize -> parse -> content-analysis -> ats-check
      -> scoring -> recommendations -> finalize

    parse              parse_resume + extract_requirements  -> ResumeContent, JobRequirements
    content-analysis   ScoringEngine.analyze_content        -> ContentAnalysis
    ats-check          ScoringEngine.analyze_ats            -> ATSCompatibilityResult
    scoring            ScoreAggregator.aggregate            -> ScoringResult
    recommendations    RecommendationGenerator.generate     -> list[Recommendation]
    finalize           store.save(completed result)

Each step lasts at least ``min_step_duration`` so progress can be observed,
and cancellation is checked between steps. Every write is tagged with the run
number; a write from a run that a retry has replaced is dropped.
"""

import asyncio
import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta

from config import settings
from models.schemas.analysis_result import AnalysisResult
from models.schemas.job_requirements import JobRequirements
from models.schemas.progress import ProgressSnapshot
from services.errors import (
    AnalysisNotFoundError,
    InputError,
    InvalidTransitionError,
    PipelineFailure,
    StaleRunError,
)
from services.notifications import InMemoryPublisher, ProgressPublisher
from services.pipeline.aggregator import ScoreAggregator
from services.pipeline.clock import Clock, SystemClock
from services.pipeline.progress import DEFAULT_STEPS, ProgressTracker
from services.pipeline.recommendations import RecommendationGenerator
from services.pipeline.scoring_engine import ScoringEngine
from services.requirement_extractor import extract_requirements
from services.section_parser import parse_resume
from services.store import AnalysisStore, InMemoryAnalysisStore
from services.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Analysis cancelled"


class AnalysisCancelled(Exception):
    """Raised inside a run when its cancellation flag is seen at a step boundary."""


@dataclass(frozen=True)
class AnalysisInput:
    resume_text: str
    job_description: str | None = None
    requirements: JobRequirements | None = None


class AnalysisOrchestrator:
    def __init__(
        self,
        store: AnalysisStore | None = None,
        publisher: ProgressPublisher | None = None,
        clock: Clock | None = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        engine: ScoringEngine | None = None,
        aggregator: ScoreAggregator | None = None,
        generator: RecommendationGenerator | None = None,
        min_step_duration: float | None = None,
        timeout: float | None = None,
        retention: float | None = None,
        retry_window: float | None = None,
    ) -> None:
        self.store = store or InMemoryAnalysisStore()
        self.publisher = publisher or InMemoryPublisher()
        self.clock = clock or SystemClock()
        self.vocabulary = vocabulary
        self.engine = engine or ScoringEngine(vocabulary)
        self.aggregator = aggregator or ScoreAggregator(vocabulary)
        self.generator = generator or RecommendationGenerator()
        self.min_step_duration = (
            settings.min_step_duration_ms / 1000 if min_step_duration is None else min_step_duration
        )
        self.timeout = settings.analysis_timeout_seconds if timeout is None else timeout
        self.retention = settings.progress_retention_seconds if retention is None else retention
        self.retry_window = settings.retry_window_seconds if retry_window is None else retry_window
        self.tracker = ProgressTracker(self.clock, self.publisher)

        self._inputs: dict[str, AnalysisInput] = {}
        self._finished_at: dict[str, datetime] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._cancel_requested: set[tuple[str, int]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def submit(
        self,
        resume_text: str,
        job_description: str | None = None,
        requirements: JobRequirements | None = None,
        resume_id: str | None = None,
        job_description_id: str | None = None,
        analysis_id: str | None = None,
    ) -> AnalysisResult:
        """Validate the input, store a pending result and start the run in the background."""
        if not isinstance(resume_text, str) or not resume_text.strip():
            raise InputError("Resume text is required")
        if job_description is not None and not isinstance(job_description, str):
            raise InputError("Job description must be a string")
        if requirements is not None and not isinstance(requirements, JobRequirements):
            raise InputError("Job requirements must be a JobRequirements instance")

        analysis_id = analysis_id or uuid.uuid4().hex
        if analysis_id in self.store or analysis_id in self.tracker:
            raise InputError(f"Analysis {analysis_id} already exists")

        self.prune()
        result = AnalysisResult(
            id=analysis_id,
            resume_id=resume_id or analysis_id,
            job_description_id=job_description_id,
            created_at=self.clock.now(),
        )
        self._inputs[analysis_id] = AnalysisInput(resume_text, job_description, requirements)
        self.store.save(result)
        self.tracker.register(analysis_id, result.run)
        self._launch(analysis_id, result.run)
        logger.info("Submitted analysis %s", analysis_id)
        return result

    async def wait(self, analysis_id: str) -> AnalysisResult:
        """Wait for the current run of ``analysis_id`` to finish and return its result."""
        task = self._tasks.get(analysis_id)
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        return self.get_result(analysis_id)

    def get_result(self, analysis_id: str) -> AnalysisResult:
        return self.store.get(analysis_id)

    def snapshot(self, analysis_id: str) -> ProgressSnapshot:
        """Live progress, or a summary built from the stored result once pruned."""
        if analysis_id in self.tracker:
            return self.tracker.snapshot(analysis_id)
        result = self.store.get(analysis_id)
        done = result.status == "completed"
        return ProgressSnapshot(
            analysis_id=result.id,
            run=result.run,
            status=result.status,
            current_step_index=len(DEFAULT_STEPS) - 1 if done else 0,
            step_name=DEFAULT_STEPS[-1].name if done else None,
            percentage=100 if done else 0,
            actual_completion_time=result.analyzed_at,
            error=result.error,
        )

    def cancel(self, analysis_id: str) -> bool:
        """Request cancellation. Returns False when the analysis already finished."""
        result = self.store.get(analysis_id)
        if result.is_terminal:
            return False
        self._cancel_requested.add((analysis_id, result.run))
        logger.info("Cancellation requested for analysis %s run %d", analysis_id, result.run)
        return True

    async def retry(self, analysis_id: str) -> AnalysisResult:
        """Start a new run of a finished analysis under the same id.

        While a run is still in flight this returns the current result unchanged.
        Raises InputError once the retry window has passed.
        """
        self.prune()
        result = self.store.get(analysis_id)
        task = self._tasks.get(analysis_id)
        if (task is not None and not task.done()) or not result.is_terminal:
            return result
        if analysis_id not in self._inputs:
            raise InputError(f"Analysis {analysis_id} can no longer be retried; its input has expired")
        self._finished_at.pop(analysis_id, None)

        if analysis_id in self.tracker:
            run = self.tracker.reset(analysis_id)
        else:
            run = self.tracker.register(analysis_id, result.run + 1).run
        fresh = AnalysisResult(
            id=analysis_id,
            resume_id=result.resume_id,
            job_description_id=result.job_description_id,
            run=run,
            created_at=result.created_at,
        )
        self.store.save(fresh)
        self._launch(analysis_id, run)
        logger.info("Retrying analysis %s as run %d", analysis_id, run)
        return fresh

    def prune(self) -> list[str]:
        """Drop finished progress states past the retention window.

        Submitted text is dropped once a run has been finished for longer than
        ``retry_window``; retrying that analysis is rejected afterwards.
        """
        expired = self.tracker.prune(self.retention)
        for analysis_id in expired:
            task = self._tasks.get(analysis_id)
            if task is not None and task.done():
                del self._tasks[analysis_id]

        cutoff = self.clock.now() - timedelta(seconds=self.retry_window)
        for analysis_id, finished_at in list(self._finished_at.items()):
            task = self._tasks.get(analysis_id)
            if finished_at <= cutoff and (task is None or task.done()):
                del self._finished_at[analysis_id]
                self._inputs.pop(analysis_id, None)
                logger.debug("Dropped stored input for analysis %s", analysis_id)
        return expired

    async def close(self) -> None:
        """Cancel any runs still in flight."""
        pending = [task for task in self._tasks.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Run execution
    # ------------------------------------------------------------------

    def _launch(self, analysis_id: str, run: int) -> None:
        self._tasks[analysis_id] = asyncio.create_task(
            self._run(analysis_id, run), name=f"analysis-{analysis_id}-{run}"
        )

    async def _run(self, analysis_id: str, run: int) -> None:
        try:
            await asyncio.wait_for(self._execute(analysis_id, run), timeout=self.timeout)
        except asyncio.TimeoutError:
            stage = self._current_stage(analysis_id)
            failure = PipelineFailure(stage, f"timed out after {self.timeout:g} seconds")
            self._record_failure(analysis_id, run, str(failure))
        except AnalysisCancelled:
            self._record_failure(analysis_id, run, CANCELLED_MESSAGE)
        except PipelineFailure as e:
            self._record_failure(analysis_id, run, str(e))
        except StaleRunError:
            logger.info("Run %d of analysis %s was superseded; dropping its result", run, analysis_id)
        except asyncio.CancelledError:
            self._record_failure(analysis_id, run, CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.exception("Analysis %s run %d crashed", analysis_id, run)
            failure = PipelineFailure(self._current_stage(analysis_id), str(e) or type(e).__name__)
            self._record_failure(analysis_id, run, str(failure))
        finally:
            self._cancel_requested.discard((analysis_id, run))
            self._finished_at[analysis_id] = self.clock.now()

    async def _execute(self, analysis_id: str, run: int) -> None:
        inputs = self._inputs[analysis_id]
        self.tracker.start(analysis_id, run=run)
        self._update(analysis_id, run, status="processing")
        started = self.clock.now()

        # initialize: nothing to load beyond the submitted input
        started = await self._next_step(analysis_id, run, started)

        with self._stage("parse"):
            content = parse_resume(inputs.resume_text, self.vocabulary)
            requirements = inputs.requirements
            if requirements is None and inputs.job_description and inputs.job_description.strip():
                requirements = extract_requirements(inputs.job_description, self.vocabulary)
        started = await self._next_step(analysis_id, run, started)

        with self._stage("content-analysis"):
            analysis = self.engine.analyze_content(content, requirements)
        started = await self._next_step(analysis_id, run, started)

        with self._stage("ats-check"):
            analysis = analysis.model_copy(update={"ats": self.engine.analyze_ats(content, requirements)})
        started = await self._next_step(analysis_id, run, started)

        with self._stage("scoring"):
            scoring = self.aggregator.aggregate(content, analysis, requirements)
        started = await self._next_step(analysis_id, run, started)

        with self._stage("recommendations"):
            recommendations = self.generator.generate(
                content, analysis, scoring.category_scores, requirements
            )
        started = await self._next_step(analysis_id, run, started)

        await self._hold_step(started)
        self._check_cancelled(analysis_id, run)
        with self._stage("finalize"):
            self._update(
                analysis_id, run,
                status="completed",
                overall_score=scoring.overall_score,
                category_scores=scoring.category_scores,
                recommendations=recommendations,
                strengths=scoring.strengths,
                improvement_areas=scoring.improvement_areas,
                summary=scoring.summary,
                analysis=analysis,
                error=None,
                analyzed_at=self.clock.now(),
            )
            self.tracker.complete(analysis_id, run=run)
        logger.info("Analysis %s run %d completed with score %d", analysis_id, run, scoring.overall_score)

    async def _hold_step(self, started: datetime) -> None:
        """Sleep out the rest of the minimum step duration, yielding at least once."""
        elapsed = (self.clock.now() - started).total_seconds()
        await self.clock.sleep(max(0.0, self.min_step_duration - elapsed))

    async def _next_step(self, analysis_id: str, run: int, started: datetime) -> datetime:
        await self._hold_step(started)
        self._check_cancelled(analysis_id, run)
        self.tracker.advance_step(analysis_id, run=run)
        return self.clock.now()

    def _check_cancelled(self, analysis_id: str, run: int) -> None:
        if (analysis_id, run) in self._cancel_requested:
            raise AnalysisCancelled(analysis_id)

    @contextmanager
    def _stage(self, name: str):
        try:
            yield
        except (PipelineFailure, StaleRunError, AnalysisCancelled):
            raise
        except Exception as e:
            logger.exception("Stage %s failed", name)
            raise PipelineFailure(name, str(e) or type(e).__name__) from e

    def _current_stage(self, analysis_id: str) -> str:
        if analysis_id in self.tracker:
            return self.tracker.snapshot(analysis_id).step_name or DEFAULT_STEPS[0].name
        return DEFAULT_STEPS[0].name

    def _update(self, analysis_id: str, run: int, **fields) -> None:
        """Apply ``fields`` to the stored result, only while ``run`` is current."""
        result = self.store.get(analysis_id)
        if result.run != run:
            raise StaleRunError(f"Analysis {analysis_id} is on run {result.run}, not {run}")
        self.store.save(result.model_copy(update=fields), expected_run=run)

    def _record_failure(self, analysis_id: str, run: int, message: str) -> None:
        try:
            self._update(analysis_id, run, status="failed", error=message)
            self.tracker.fail(analysis_id, message, run=run)
        except (StaleRunError, AnalysisNotFoundError):
            logger.info("Run %d of analysis %s was superseded; not recording failure", run, analysis_id)
            return
        except InvalidTransitionError as e:
            logger.warning("Could not mark analysis %s failed: %s", analysis_id, e)
        logger.warning("Analysis %s run %d failed: %s", analysis_id, run, message)

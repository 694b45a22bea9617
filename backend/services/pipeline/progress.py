"""Per-analysis progress state machine.

    pending -> processing -> completed
        \\          \\
         `-> failed <-'

Each transition publishes a ProgressEvent. Updates carry the run number they
belong to, so a superseded run cannot move a retried analysis.
"""

import logging
from datetime import timedelta

from models.schemas.analysis_result import TERMINAL_STATUSES
from models.schemas.progress import AnalysisStep, ProgressEvent, ProgressSnapshot, ProgressState
from services.errors import AnalysisNotFoundError, InvalidTransitionError, StaleRunError
from services.notifications import ProgressPublisher
from services.pipeline.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

# Weights sum to 1.0; durations are rough estimates in seconds.
DEFAULT_STEPS: tuple[AnalysisStep, ...] = (
    AnalysisStep(name="initialize", description="Preparing analysis", weight=0.05, estimated_duration=1),
    AnalysisStep(name="parse", description="Parsing resume content", weight=0.15, estimated_duration=3),
    AnalysisStep(name="content-analysis", description="Analyzing content quality", weight=0.25,
                 estimated_duration=8),
    AnalysisStep(name="ats-check", description="Checking ATS compatibility", weight=0.20, estimated_duration=5),
    AnalysisStep(name="scoring", description="Calculating scores", weight=0.15, estimated_duration=4),
    AnalysisStep(name="recommendations", description="Generating recommendations", weight=0.15,
                 estimated_duration=6),
    AnalysisStep(name="finalize", description="Finalizing results", weight=0.05, estimated_duration=3),
)

STEP_NAMES = tuple(step.name for step in DEFAULT_STEPS)


class ProgressTracker:
    def __init__(
        self,
        clock: Clock | None = None,
        publisher: ProgressPublisher | None = None,
        steps: tuple[AnalysisStep, ...] = DEFAULT_STEPS,
    ) -> None:
        self.clock = clock or SystemClock()
        self.publisher = publisher
        self.steps = steps
        self._states: dict[str, ProgressState] = {}

    def __contains__(self, analysis_id: str) -> bool:
        return analysis_id in self._states

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def register(self, analysis_id: str, run: int = 1) -> ProgressState:
        """Track a new analysis in ``pending``."""
        current = self._states.get(analysis_id)
        if current is not None and current.status not in TERMINAL_STATUSES:
            raise InvalidTransitionError(f"Analysis {analysis_id} is already {current.status}")
        state = ProgressState(
            analysis_id=analysis_id,
            run=run,
            steps=[step.model_copy() for step in self.steps],
        )
        self._states[analysis_id] = state
        self._publish(state)
        return state

    def start(self, analysis_id: str, run: int | None = None) -> ProgressState:
        """pending -> processing, on the first step. Registers the id if needed."""
        if analysis_id not in self._states:
            self.register(analysis_id, run or 1)
        state = self._get(analysis_id, run)
        if state.status != "pending":
            raise InvalidTransitionError(f"Cannot start analysis {analysis_id} from {state.status}")
        now = self.clock.now()
        state.status = "processing"
        state.current_step_index = 0
        state.start_time = now
        state.step_started_at = now
        state.estimated_completion_time = self._estimate(state)
        self._publish(state)
        return state

    def advance_step(
        self, analysis_id: str, description: str | None = None, run: int | None = None
    ) -> ProgressState:
        """Complete the current step and move to the next one."""
        state = self._get(analysis_id, run)
        if state.status != "processing":
            raise InvalidTransitionError(f"Cannot advance analysis {analysis_id} in {state.status}")
        if state.current_step_index >= len(state.steps) - 1:
            raise InvalidTransitionError(f"Analysis {analysis_id} is already on its final step")
        state.current_step_index += 1
        if description:
            index = state.current_step_index
            state.steps[index] = state.steps[index].model_copy(update={"description": description})
        state.step_started_at = self.clock.now()
        state.estimated_completion_time = self._estimate(state)
        self._publish(state)
        return state

    def complete(self, analysis_id: str, run: int | None = None) -> ProgressState:
        state = self._get(analysis_id, run)
        if state.status != "processing":
            raise InvalidTransitionError(f"Cannot complete analysis {analysis_id} from {state.status}")
        now = self.clock.now()
        state.status = "completed"
        state.current_step_index = len(state.steps) - 1
        state.actual_completion_time = now
        state.estimated_completion_time = now
        self._publish(state)
        return state

    def fail(self, analysis_id: str, reason: str, run: int | None = None) -> ProgressState:
        state = self._get(analysis_id, run)
        if state.status in TERMINAL_STATUSES:
            raise InvalidTransitionError(f"Cannot fail analysis {analysis_id}: already {state.status}")
        state.status = "failed"
        state.error = reason
        state.actual_completion_time = self.clock.now()
        state.estimated_completion_time = None
        self._publish(state)
        return state

    def reset(self, analysis_id: str) -> int:
        """Start a new run for a finished analysis. Returns the new run number."""
        state = self._get(analysis_id)
        if state.status not in TERMINAL_STATUSES:
            raise InvalidTransitionError(f"Cannot reset analysis {analysis_id} while {state.status}")
        return self.register(analysis_id, state.run + 1).run

    # ------------------------------------------------------------------
    # Queries and housekeeping
    # ------------------------------------------------------------------

    def state(self, analysis_id: str) -> ProgressState:
        return self._get(analysis_id).model_copy(deep=True)

    def snapshot(self, analysis_id: str) -> ProgressSnapshot:
        state = self._get(analysis_id)
        elapsed = 0.0
        if state.start_time is not None:
            end = state.actual_completion_time or self.clock.now()
            elapsed = max(0.0, (end - state.start_time).total_seconds())
        step = state.steps[state.current_step_index] if state.steps else None
        return ProgressSnapshot(
            analysis_id=state.analysis_id,
            run=state.run,
            status=state.status,
            current_step_index=state.current_step_index,
            step_name=step.name if step else None,
            step_description=step.description if step else None,
            percentage=state.percentage,
            estimated_completion_time=state.estimated_completion_time,
            actual_completion_time=state.actual_completion_time,
            elapsed_seconds=elapsed,
            error=state.error,
        )

    def discard(self, analysis_id: str) -> None:
        self._states.pop(analysis_id, None)

    def prune(self, retention_seconds: float) -> list[str]:
        """Drop finished states older than ``retention_seconds``."""
        cutoff = self.clock.now() - timedelta(seconds=retention_seconds)
        expired = [
            analysis_id for analysis_id, state in self._states.items()
            if state.status in TERMINAL_STATUSES
            and state.actual_completion_time is not None
            and state.actual_completion_time <= cutoff
        ]
        for analysis_id in expired:
            del self._states[analysis_id]
        if expired:
            logger.debug("Pruned %d finished progress states", len(expired))
        return expired

    # ------------------------------------------------------------------

    def _get(self, analysis_id: str, run: int | None = None) -> ProgressState:
        state = self._states.get(analysis_id)
        if state is None:
            raise AnalysisNotFoundError(analysis_id)
        if run is not None and run != state.run:
            raise StaleRunError(f"Analysis {analysis_id} is on run {state.run}, not {run}")
        return state

    @staticmethod
    def _estimate(state: ProgressState):
        remaining = sum(step.estimated_duration for step in state.steps[state.current_step_index:])
        return state.step_started_at + timedelta(seconds=remaining)

    def _publish(self, state: ProgressState) -> None:
        logger.debug(
            "Analysis %s run %d -> %s (%s)", state.analysis_id, state.run, state.status, state.step_name
        )
        if self.publisher is None:
            return
        event = ProgressEvent(
            analysis_id=state.analysis_id,
            run=state.run,
            status=state.status,
            step_index=state.current_step_index,
            step_name=state.step_name,
            percentage=state.percentage,
            estimated_completion_time=state.estimated_completion_time,
        )
        try:
            self.publisher.publish(event)
        except Exception as e:
            logger.warning("Failed to publish progress for analysis %s: %s", state.analysis_id, e)

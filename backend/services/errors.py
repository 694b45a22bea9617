"""Error taxonomy for the analysis pipeline."""


class InputError(ValueError):
    """Missing or malformed caller input. Raised synchronously, never retried."""


class PipelineFailure(RuntimeError):
    """An internal stage raised while an analysis was running."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"Analysis failed during {stage}: {message}")
        self.stage = stage
        self.message = message


class InvalidTransitionError(RuntimeError):
    """A status change that the analysis state machine does not allow."""


class StaleRunError(RuntimeError):
    """An update arrived from a run that a retry has already replaced."""


class AnalysisNotFoundError(KeyError):
    """No analysis is tracked or stored under the given id."""

    def __str__(self) -> str:
        return f"Analysis not found: {self.args[0]}" if self.args else "Analysis not found"


class SerializationError(ValueError):
    """A stored record could not be decoded into an AnalysisResult."""

"""
Pipeline Errors

Custom exceptions for the planner/curator pipeline.
Rate-limit errors from the SDK are never wrapped here; the retry
wrapper re-raises them unchanged once attempts run out.
"""


class CurriculumPipelineError(RuntimeError):
    """Base class for all pipeline failures."""


class MalformedResponseError(CurriculumPipelineError):
    """
    Raised when a model response cannot be decoded into the expected shape:
    missing text, invalid JSON after fence-stripping, or missing fields.
    Never retried.
    """
    def __init__(self, reason: str, payload: str | None = None):
        super().__init__(f"Malformed model response: {reason}")
        self.reason = reason
        self.payload_excerpt = (payload or "")[:200]


class PlannerError(CurriculumPipelineError):
    """
    Raised when the planner cannot produce a curriculum.
    Aborts the whole run. The underlying failure is kept as ``cause``.
    """
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class RunInProgressError(CurriculumPipelineError):
    """Raised when starting or resetting while a run is still active."""
    def __init__(self):
        super().__init__("A curriculum run is already in progress")

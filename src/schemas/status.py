"""
Agent Status Model

The controller publishes a new ``AgentStatus`` on every transition. It is
the only channel through which liveness reaches the presentation layer.
"""

from pydantic import BaseModel, Field

from src.schemas.base import CAMEL_CASE_CONFIG, PipelineStage, ProgressPercent


class AgentStatus(BaseModel):
    """Snapshot of pipeline progress."""
    model_config = CAMEL_CASE_CONFIG

    stage: PipelineStage = PipelineStage.IDLE
    message: str = ""
    progress: ProgressPercent = 0
    current_task: str | None = Field(
        default=None,
        description="Title of the topic being curated",
    )

    @property
    def is_running(self) -> bool:
        return self.stage in (PipelineStage.PLANNING, PipelineStage.CURATING)

    @property
    def is_terminal(self) -> bool:
        return self.stage in (PipelineStage.COMPLETE, PipelineStage.ERROR)

    @classmethod
    def idle(cls) -> "AgentStatus":
        return cls()

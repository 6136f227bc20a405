"""
Graph State Definition

This module defines the state that flows through the LangGraph execution.
Nodes read the full state and return dicts of updated fields.

Rules:
- One run owns one state; a failed run is discarded, never resumed
- Topics are curated strictly in planner order (``cursor`` walks ``tasks``)
- ``curriculum`` is replaced wholesale on every update
"""

from uuid import UUID

from pydantic import BaseModel, Field

from src.schemas.curriculum import Curriculum, Topic, UserPreferences
from src.schemas.status import AgentStatus


class CurationTask(BaseModel):
    """One topic scheduled for curation, with its position in the syllabus."""
    topic: Topic
    module_index: int = Field(ge=0)
    topic_index: int = Field(ge=0)


class PipelineState(BaseModel):
    """
    Shared state for one curriculum run.

    Node flow:
    Plan → [ScheduleTopic → CurateTopic]* → Complete → END
    """

    # =========================================================================
    # REQUEST
    # =========================================================================
    run_id: UUID = Field(description="Unique run identifier")
    preferences: UserPreferences = Field(description="Learner preferences")

    # =========================================================================
    # DOCUMENT
    # =========================================================================
    curriculum: Curriculum | None = Field(
        default=None,
        description="Current curriculum snapshot (None until planned)",
    )

    # =========================================================================
    # CURATION PROGRESS
    # =========================================================================
    tasks: list[CurationTask] = Field(
        default_factory=list,
        description="Flattened (topic, module_index, topic_index) work list",
    )
    cursor: int = Field(default=0, ge=0, description="Index of the next task")

    # =========================================================================
    # STATUS / ERRORS
    # =========================================================================
    status: AgentStatus = Field(default_factory=AgentStatus.idle)
    has_error: bool = False
    error_node: str | None = None
    error_message: str | None = None

    @property
    def total_tasks(self) -> int:
        return len(self.tasks)

    @property
    def current_task(self) -> CurationTask | None:
        if self.cursor < len(self.tasks):
            return self.tasks[self.cursor]
        return None

    def has_pending_tasks(self) -> bool:
        return self.cursor < len(self.tasks)


def build_curation_tasks(curriculum: Curriculum) -> list[CurationTask]:
    """Flatten the syllabus, preserving module-then-topic order."""
    return [
        CurationTask(topic=topic, module_index=m_idx, topic_index=t_idx)
        for m_idx, module in enumerate(curriculum.modules)
        for t_idx, topic in enumerate(module.topics)
    ]


def progress_percent(completed: int, total: int) -> int:
    """Round half up, like the status bar expects (0 when nothing to do)."""
    if total <= 0:
        return 0
    return int(100 * completed / total + 0.5)

"""
SkillScout Schemas Package

Pydantic models for the curriculum document, pipeline status, and the
raw planner response. These are the data contracts between the planner,
the curator, the controller and the presentation layer.
"""

from src.schemas.base import PipelineStage, SkillLevel, TimeCommitment
from src.schemas.curriculum import (
    CuratedContent,
    Curriculum,
    CurriculumPlan,
    Module,
    PlannedModule,
    PlannedTopic,
    ResourceLink,
    Topic,
    UserPreferences,
)
from src.schemas.status import AgentStatus

__all__ = [
    "PipelineStage",
    "SkillLevel",
    "TimeCommitment",
    "CuratedContent",
    "Curriculum",
    "CurriculumPlan",
    "Module",
    "PlannedModule",
    "PlannedTopic",
    "ResourceLink",
    "Topic",
    "UserPreferences",
    "AgentStatus",
]

"""
Curriculum Data Model

This module defines the curriculum document produced by the planner and
enriched, topic by topic, by the curator.

Every model is frozen. Updates produce new instances so consumers of the
curriculum stream always hold a consistent snapshot.
"""

from datetime import datetime, timezone
from typing import Iterator
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from src.schemas.base import (
    CAMEL_CASE_CONFIG,
    MAX_RESOURCES_PER_TOPIC,
    NonEmptyStr,
    SkillLevel,
    TimeCommitment,
)
from src.utils.urls import is_video_uri


class UserPreferences(BaseModel):
    """Immutable input to the pipeline, supplied by the presentation layer."""
    model_config = CAMEL_CASE_CONFIG

    goal: NonEmptyStr = Field(description="What the learner wants to achieve")
    skill_level: SkillLevel = Field(description="Current skill level")
    time_commitment: TimeCommitment = Field(description="Weekly time budget")

    @field_validator("goal")
    @classmethod
    def goal_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("goal must not be blank")
        return value


class ResourceLink(BaseModel):
    """
    A single learning resource.

    The dedup/identity key is the normalized ``uri``, never the raw string.
    """
    model_config = CAMEL_CASE_CONFIG

    title: NonEmptyStr
    uri: NonEmptyStr
    source: str | None = Field(default=None, description="Hostname without www.")
    thumbnail: str | None = Field(default=None, description="Video thumbnail URL")
    description: str | None = Field(default=None, description="Why this resource is useful")

    @property
    def is_video(self) -> bool:
        """True for resources with a thumbnail or hosted on a video platform."""
        return bool(self.thumbnail) or is_video_uri(self.uri)


class CuratedContent(BaseModel):
    """Curator output for one topic. Never empty, at most five resources."""
    model_config = CAMEL_CASE_CONFIG

    summary: str
    resources: list[ResourceLink] = Field(
        min_length=1,
        max_length=MAX_RESOURCES_PER_TOPIC,
    )


class Topic(BaseModel):
    """
    A topic within a module.

    ``id`` is ``m{module_index}-t{topic_index}`` and stays stable for the
    lifetime of the document. ``curated_content`` is attached exactly once.
    """
    model_config = CAMEL_CASE_CONFIG

    id: NonEmptyStr
    title: NonEmptyStr
    description: str
    actionable_step: str
    curated_content: CuratedContent | None = None

    def with_content(self, content: CuratedContent) -> "Topic":
        """Return a copy of this topic carrying ``content``."""
        if self.curated_content is not None:
            raise ValueError(f"Topic {self.id} already has curated content")
        return self.model_copy(update={"curated_content": content})


class Module(BaseModel):
    """An ordered group of topics."""
    model_config = CAMEL_CASE_CONFIG

    title: NonEmptyStr
    topics: list[Topic] = Field(default_factory=list)


class Curriculum(BaseModel):
    """
    The curriculum document.

    Created once by the planner. The controller replaces it wholesale each
    time a topic receives curated content.
    """
    model_config = CAMEL_CASE_CONFIG

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    title: NonEmptyStr
    description: str
    modules: list[Module] = Field(default_factory=list)

    @model_validator(mode="after")
    def topic_ids_unique(self) -> "Curriculum":
        """Topic ids are the sole key for incremental updates."""
        seen: set[str] = set()
        for topic in self.iter_topics():
            if topic.id in seen:
                raise ValueError(f"Duplicate topic id: {topic.id}")
            seen.add(topic.id)
        return self

    def iter_topics(self) -> Iterator[Topic]:
        """Yield every topic in module-then-topic order."""
        for module in self.modules:
            yield from module.topics

    def find_topic(self, topic_id: str) -> Topic | None:
        return next((t for t in self.iter_topics() if t.id == topic_id), None)

    def total_resources(self) -> int:
        """Number of curated resources across all topics."""
        return sum(
            len(t.curated_content.resources)
            for t in self.iter_topics()
            if t.curated_content is not None
        )

    def with_topic_content(
        self,
        module_index: int,
        topic_index: int,
        content: CuratedContent,
    ) -> "Curriculum":
        """
        Return a new curriculum where the topic at the given position
        carries ``content``. Other modules and topics are shared as-is.
        """
        module = self.modules[module_index]
        topics = list(module.topics)
        topics[topic_index] = topics[topic_index].with_content(content)

        modules = list(self.modules)
        modules[module_index] = module.model_copy(update={"topics": topics})
        return self.model_copy(update={"modules": modules})


# =============================================================================
# PLANNER RESPONSE (raw model output, before ids are assigned)
# =============================================================================

class PlannedTopic(BaseModel):
    model_config = CAMEL_CASE_CONFIG

    title: NonEmptyStr
    description: str
    actionable_step: str


class PlannedModule(BaseModel):
    model_config = CAMEL_CASE_CONFIG

    title: NonEmptyStr
    topics: list[PlannedTopic]


class CurriculumPlan(BaseModel):
    """Shape the planner's JSON response must decode into. All fields required."""
    model_config = CAMEL_CASE_CONFIG

    title: NonEmptyStr
    description: str
    modules: list[PlannedModule]

    def to_curriculum(self) -> Curriculum:
        """Assign stable topic ids and a fresh curriculum id/timestamp."""
        modules = [
            Module(
                title=planned_module.title,
                topics=[
                    Topic(
                        id=f"m{m_idx}-t{t_idx}",
                        title=planned_topic.title,
                        description=planned_topic.description,
                        actionable_step=planned_topic.actionable_step,
                    )
                    for t_idx, planned_topic in enumerate(planned_module.topics)
                ],
            )
            for m_idx, planned_module in enumerate(self.modules)
        ]
        return Curriculum(
            title=self.title,
            description=self.description,
            modules=modules,
        )

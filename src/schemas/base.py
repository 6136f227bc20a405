"""
Base types and constants used across all schemas.

This module defines shared enums, types, and configuration
that keep the planner, curator and controller consistent.
"""

from enum import Enum
from typing import Annotated

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# MODEL CONFIG
# =============================================================================

# Python-side snake_case, camelCase on the wire (matches the planner schema).
CAMEL_CASE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


# =============================================================================
# ENUMS
# =============================================================================

class SkillLevel(str, Enum):
    """Learner's current skill level."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class TimeCommitment(str, Enum):
    """
    Weekly time budget.

    Values are the human-readable strings embedded in the planner prompt.
    Member names ("Low", "Medium", "High") are also accepted on input.
    """
    LOW = "1-2 hours/week"
    MEDIUM = "3-5 hours/week"
    HIGH = "6+ hours/week"

    @classmethod
    def _missing_(cls, value: object) -> "TimeCommitment | None":
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


class PipelineStage(str, Enum):
    """Stage of the curriculum pipeline, as reported to consumers."""
    IDLE = "idle"
    PLANNING = "planning"
    CURATING = "curating"
    COMPLETE = "complete"
    ERROR = "error"


# =============================================================================
# ANNOTATED TYPES
# =============================================================================

# Non-empty string
NonEmptyStr = Annotated[str, Field(min_length=1)]

# Progress percentage (0-100)
ProgressPercent = Annotated[int, Field(ge=0, le=100)]

# Maximum resources attached to one topic
MAX_RESOURCES_PER_TOPIC = 5

"""
Shared fixtures.

Settings zero out every delay; see tests/fakes.py for the client doubles.
"""

import json

import pytest

from src.schemas.base import SkillLevel, TimeCommitment
from src.schemas.curriculum import UserPreferences
from src.utils.gemini_client import GroundingCitation
from src.utils.settings import PipelineSettings
from tests.fakes import SQL_PLAN


@pytest.fixture
def settings() -> PipelineSettings:
    return PipelineSettings(
        api_key="test-key",
        retry_delay_ms=0,
        topic_throttle_ms=0,
    )


@pytest.fixture
def sql_preferences() -> UserPreferences:
    return UserPreferences(
        goal="Learn SQL basics",
        skill_level=SkillLevel.BEGINNER,
        time_commitment=TimeCommitment.LOW,
    )


@pytest.fixture
def sql_plan_json() -> str:
    return json.dumps(SQL_PLAN)


@pytest.fixture
def grounded_citations() -> list[GroundingCitation]:
    return [
        GroundingCitation(uri="https://www.youtube.com/watch?v=abc12345678", title="SQL Tutorial - YouTube"),
        GroundingCitation(uri="https://www.w3schools.com/sql/", title="SQL Tutorial"),
        GroundingCitation(uri="https://sqlbolt.com/", title="SQLBolt"),
    ]

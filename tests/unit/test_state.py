"""
Unit tests for PipelineState and state helpers.

Tests verify:
1. State initialization
2. Task flattening preserves planner order
3. Progress rounding
"""

from uuid import uuid4

import pytest

from src.orchestrator.state import (
    PipelineState,
    build_curation_tasks,
    progress_percent,
)
from src.schemas.base import PipelineStage
from src.schemas.curriculum import CurriculumPlan
from tests.fakes import SQL_PLAN


class TestPipelineState:
    """Tests for PipelineState."""

    def test_initial_state(self, sql_preferences) -> None:
        state = PipelineState(run_id=uuid4(), preferences=sql_preferences)

        assert state.curriculum is None
        assert state.tasks == []
        assert state.cursor == 0
        assert state.status.stage == PipelineStage.IDLE
        assert state.has_error is False
        assert state.current_task is None
        assert not state.has_pending_tasks()

    def test_cursor_walks_tasks(self, sql_preferences) -> None:
        curriculum = CurriculumPlan.model_validate(SQL_PLAN).to_curriculum()
        tasks = build_curation_tasks(curriculum)

        state = PipelineState(
            run_id=uuid4(),
            preferences=sql_preferences,
            curriculum=curriculum,
            tasks=tasks,
            cursor=4,
        )
        assert state.total_tasks == 5
        assert state.current_task.topic.title == "LEFT JOIN"
        assert state.has_pending_tasks()

        done = state.model_copy(update={"cursor": 5})
        assert done.current_task is None
        assert not done.has_pending_tasks()


class TestBuildCurationTasks:
    """Tests for build_curation_tasks."""

    def test_module_then_topic_order(self) -> None:
        curriculum = CurriculumPlan.model_validate(SQL_PLAN).to_curriculum()
        tasks = build_curation_tasks(curriculum)

        assert [(t.module_index, t.topic_index) for t in tasks] == [
            (0, 0), (0, 1), (1, 0), (2, 0), (2, 1),
        ]
        assert [t.topic.id for t in tasks] == [t.id for t in curriculum.iter_topics()]

    def test_empty_modules(self) -> None:
        plan = CurriculumPlan(title="Empty", description="", modules=[])
        assert build_curation_tasks(plan.to_curriculum()) == []


class TestProgressPercent:
    """Tests for progress_percent."""

    @pytest.mark.parametrize("completed,total,expected", [
        (0, 5, 0),
        (1, 5, 20),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (3, 3, 100),
        (0, 0, 0),
    ])
    def test_rounding(self, completed: int, total: int, expected: int) -> None:
        assert progress_percent(completed, total) == expected

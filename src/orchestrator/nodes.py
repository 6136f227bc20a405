"""
Graph Nodes

This module implements each node in the LangGraph execution.
Each node:
1. Reads from PipelineState
2. Performs its operation
3. Returns a dict of updated fields

Every update a node returns is one transition the controller publishes.
Nodes never raise: failures become an ``error`` status and routing halts.
"""

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable

from src.agents.curator import CuratorAgent
from src.agents.planner import PlannerAgent
from src.orchestrator.state import PipelineState, build_curation_tasks, progress_percent
from src.schemas.base import PipelineStage
from src.schemas.status import AgentStatus
from src.utils.settings import PipelineSettings

logger = logging.getLogger(__name__)

PLANNING_MESSAGE = "Planner Agent is designing the syllabus..."
CURATING_MESSAGE = "Curator Agent is finding resources..."
COMPLETE_MESSAGE = "Curriculum ready!"
ERROR_MESSAGE = (
    "An error occurred while generating the curriculum. "
    "Please check your API key or try again."
)

NodeFn = Callable[[Any, PipelineState], Awaitable[dict[str, Any]]]


def error_status(error: BaseException) -> AgentStatus:
    return AgentStatus(
        stage=PipelineStage.ERROR,
        message=f"{ERROR_MESSAGE} ({error})",
        progress=0,
    )


def _wrap_node_execution(node_name: str) -> Callable[[NodeFn], NodeFn]:
    """Decorator for node logging and error-state conversion."""

    def decorator(func: NodeFn) -> NodeFn:
        @functools.wraps(func)
        async def wrapper(self: Any, state: PipelineState) -> dict[str, Any]:
            logger.info("Node '%s' started", node_name)
            try:
                result = await func(self, state)
            except Exception as e:  # noqa: BLE001 - converted to error status
                logger.error("Node '%s' failed: %s", node_name, e)
                return {
                    "has_error": True,
                    "error_node": node_name,
                    "error_message": str(e),
                    "status": error_status(e),
                }
            logger.info("Node '%s' completed successfully", node_name)
            return result

        return wrapper

    return decorator


class CurriculumNodes:
    """Node implementations bound to a planner, a curator and settings."""

    def __init__(
        self,
        planner: PlannerAgent,
        curator: CuratorAgent,
        settings: PipelineSettings,
    ) -> None:
        self._planner = planner
        self._curator = curator
        self._settings = settings

    @_wrap_node_execution("Plan")
    async def plan(self, state: PipelineState) -> dict[str, Any]:
        """Input: preferences. Output: skeleton curriculum, tasks, curating status."""
        curriculum = await self._planner.plan(state.preferences)
        return {
            "curriculum": curriculum,
            "tasks": build_curation_tasks(curriculum),
            "cursor": 0,
            "status": AgentStatus(
                stage=PipelineStage.CURATING,
                message=CURATING_MESSAGE,
                progress=0,
            ),
        }

    @_wrap_node_execution("ScheduleTopic")
    async def schedule_topic(self, state: PipelineState) -> dict[str, Any]:
        """Throttle between curator calls and announce the next topic."""
        task = state.current_task
        if task is None:
            raise RuntimeError("No pending topic to schedule")

        if state.cursor > 0 and self._settings.topic_throttle_ms > 0:
            await asyncio.sleep(self._settings.topic_throttle_ms / 1000)

        return {
            "status": AgentStatus(
                stage=PipelineStage.CURATING,
                message=f"Curating resources for Module {task.module_index + 1}...",
                progress=progress_percent(state.cursor, state.total_tasks),
                current_task=task.topic.title,
            ),
        }

    @_wrap_node_execution("CurateTopic")
    async def curate_topic(self, state: PipelineState) -> dict[str, Any]:
        """Curate the current topic and merge it into a new curriculum snapshot."""
        task = state.current_task
        if task is None or state.curriculum is None:
            raise RuntimeError("No pending topic to curate")

        module = state.curriculum.modules[task.module_index]
        context = f"Course Goal: {state.preferences.goal}. Module: {module.title}"
        content = await self._curator.curate(task.topic.title, context)

        curriculum = state.curriculum.with_topic_content(
            task.module_index, task.topic_index, content
        )
        return {"curriculum": curriculum, "cursor": state.cursor + 1}

    @_wrap_node_execution("Complete")
    async def complete(self, state: PipelineState) -> dict[str, Any]:
        return {
            "status": AgentStatus(
                stage=PipelineStage.COMPLETE,
                message=COMPLETE_MESSAGE,
                progress=100,
            ),
        }

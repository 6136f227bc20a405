"""
Orchestration Controller

Owns the end-to-end run and the two values consumers observe:
- ``status_channel``: AgentStatus, replaced on every transition
- ``curriculum_channel``: Curriculum | None, replaced after planning
  and after each curated topic

State machine:
idle → planning → curating → complete
planning/curating → error
any terminal stage → idle (reset only)

A run is one sequential asyncio task. There is no cancellation and no
resume: a new run replaces the previous document wholesale.
"""

import asyncio
import logging
from typing import Any, Callable

from src.agents.curator import CuratorAgent
from src.agents.planner import PlannerAgent
from src.orchestrator.channels import StateChannel
from src.orchestrator.graph import compile_curriculum_graph, create_initial_state
from src.orchestrator.nodes import PLANNING_MESSAGE, error_status
from src.schemas.base import PipelineStage
from src.schemas.curriculum import Curriculum, UserPreferences
from src.schemas.status import AgentStatus
from src.utils.errors import RunInProgressError
from src.utils.settings import PipelineSettings

logger = logging.getLogger(__name__)


class CurriculumController:
    """
    Sequential planner → curator controller.

    Usage:
        controller = CurriculumController()
        controller.subscribe_status(lambda s: print(s.stage, s.progress))
        final = await controller.run(preferences)
    """

    def __init__(
        self,
        planner: PlannerAgent | None = None,
        curator: CuratorAgent | None = None,
        settings: PipelineSettings | None = None,
    ) -> None:
        self._settings = settings or PipelineSettings.from_env()
        self._planner = planner or PlannerAgent(settings=self._settings)
        self._curator = curator or CuratorAgent(settings=self._settings)
        self._graph = compile_curriculum_graph(self._planner, self._curator, self._settings)

        self.status_channel: StateChannel[AgentStatus] = StateChannel(
            "status", AgentStatus.idle()
        )
        self.curriculum_channel: StateChannel[Curriculum | None] = StateChannel(
            "curriculum", None
        )
        self._task: asyncio.Task[AgentStatus] | None = None
        self._running = False

    # =========================================================================
    # CONSUMER SURFACE
    # =========================================================================

    @property
    def status(self) -> AgentStatus:
        return self.status_channel.value

    @property
    def curriculum(self) -> Curriculum | None:
        return self.curriculum_channel.value

    @property
    def is_running(self) -> bool:
        return self._running

    def subscribe_status(self, callback: Callable[[AgentStatus], None]) -> Callable[[], None]:
        return self.status_channel.subscribe(callback)

    def subscribe_curriculum(
        self, callback: Callable[[Curriculum | None], None]
    ) -> Callable[[], None]:
        return self.curriculum_channel.subscribe(callback)

    def start(self, preferences: UserPreferences) -> None:
        """
        Schedule a run on the running event loop and return immediately.

        Raises:
            RunInProgressError: If a run is already active
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        self._claim()
        self._task = loop.create_task(self._execute(preferences))

    async def run(self, preferences: UserPreferences) -> AgentStatus:
        """Run the whole pipeline and return the final status."""
        self._claim()
        return await self._execute(preferences)

    async def wait(self) -> AgentStatus:
        """Wait for the run scheduled by ``start`` to finish."""
        if self._task is None:
            return self.status
        return await self._task

    def reset(self) -> None:
        """Return to idle and drop the current document."""
        if self._running:
            raise RunInProgressError()
        self._task = None
        self.status_channel.publish(AgentStatus.idle())
        self.curriculum_channel.publish(None)

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def _claim(self) -> None:
        if self._running:
            raise RunInProgressError()
        self._running = True

    async def _execute(self, preferences: UserPreferences) -> AgentStatus:
        try:
            self.curriculum_channel.publish(None)
            self.status_channel.publish(AgentStatus(
                stage=PipelineStage.PLANNING,
                message=PLANNING_MESSAGE,
                progress=0,
            ))

            state = create_initial_state(preferences)
            config = {"recursion_limit": self._settings.graph_recursion_limit}
            logger.info(f"Run {state.run_id} started")

            async for update in self._graph.astream(state, config=config, stream_mode="updates"):
                self._apply_update(update)

        except Exception as e:
            logger.error(f"Curriculum run failed: {e}")
            self.status_channel.publish(error_status(e))
        finally:
            self._running = False

        logger.info(f"Run finished with stage '{self.status.stage.value}'")
        return self.status

    def _apply_update(self, update: dict[str, Any]) -> None:
        """Publish the document, then the status, from one node update."""
        for node_name, changes in update.items():
            if not isinstance(changes, dict):
                continue
            if "curriculum" in changes:
                self.curriculum_channel.publish(changes["curriculum"])
            if "status" in changes:
                self.status_channel.publish(changes["status"])
            logger.debug(f"Applied update from node '{node_name}'")

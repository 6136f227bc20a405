"""
Graph Builder

This module constructs the LangGraph execution graph with:
- Nodes from nodes.py
- Conditional edges based on state
- Explicit halt on error

Node flow:
Plan → [ScheduleTopic → CurateTopic]* → Complete → END

Topics are processed one at a time; no two curator calls overlap.
"""

import logging
from typing import Literal
from uuid import uuid4

from langgraph.graph import END, StateGraph

from src.agents.curator import CuratorAgent
from src.agents.planner import PlannerAgent
from src.orchestrator.nodes import CurriculumNodes
from src.orchestrator.state import PipelineState
from src.schemas.curriculum import UserPreferences
from src.utils.settings import PipelineSettings

logger = logging.getLogger(__name__)


# =============================================================================
# CONDITIONAL EDGE FUNCTIONS
# =============================================================================

def after_plan_decision(state: PipelineState) -> Literal["curate", "complete", "halt"]:
    """
    Decide next step after planning.

    - planner failed → halt
    - syllabus has no topics → complete
    """
    if state.has_error:
        return "halt"
    if not state.has_pending_tasks():
        return "complete"
    return "curate"


def after_schedule_decision(state: PipelineState) -> Literal["continue", "halt"]:
    """Decide whether to curate the scheduled topic or halt."""
    if state.has_error:
        return "halt"
    return "continue"


def after_curate_decision(state: PipelineState) -> Literal["next", "complete", "halt"]:
    """
    Decide next step after curating a topic.

    An unexpected error aborts the remaining topics; topics already
    merged stay in the document.
    """
    if state.has_error:
        return "halt"
    if state.has_pending_tasks():
        return "next"
    return "complete"


# =============================================================================
# GRAPH CONSTRUCTION
# =============================================================================

def build_curriculum_graph(
    planner: PlannerAgent,
    curator: CuratorAgent,
    settings: PipelineSettings,
) -> StateGraph:
    """Build the LangGraph execution graph for one planner/curator pair."""
    nodes = CurriculumNodes(planner, curator, settings)
    graph = StateGraph(PipelineState)

    graph.add_node("plan", nodes.plan)
    graph.add_node("schedule_topic", nodes.schedule_topic)
    graph.add_node("curate_topic", nodes.curate_topic)
    graph.add_node("complete", nodes.complete)

    graph.set_entry_point("plan")

    graph.add_conditional_edges(
        "plan",
        after_plan_decision,
        {
            "curate": "schedule_topic",
            "complete": "complete",
            "halt": END,
        }
    )

    graph.add_conditional_edges(
        "schedule_topic",
        after_schedule_decision,
        {
            "continue": "curate_topic",
            "halt": END,
        }
    )

    graph.add_conditional_edges(
        "curate_topic",
        after_curate_decision,
        {
            "next": "schedule_topic",
            "complete": "complete",
            "halt": END,
        }
    )

    graph.add_edge("complete", END)

    return graph


def compile_curriculum_graph(
    planner: PlannerAgent,
    curator: CuratorAgent,
    settings: PipelineSettings,
):
    """Compile the graph for execution."""
    return build_curriculum_graph(planner, curator, settings).compile()


def create_initial_state(preferences: UserPreferences) -> PipelineState:
    """Create the initial state for a new run."""
    return PipelineState(run_id=uuid4(), preferences=preferences)

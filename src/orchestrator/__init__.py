"""
SkillScout Orchestrator Package

LangGraph-based state machine driving the planner and curator.

Execution flow:
Plan → [ScheduleTopic → CurateTopic]* → Complete → END
"""

from src.orchestrator.state import (
    CurationTask,
    PipelineState,
    build_curation_tasks,
)
from src.orchestrator.graph import (
    build_curriculum_graph,
    compile_curriculum_graph,
    create_initial_state,
)
from src.orchestrator.channels import StateChannel
from src.orchestrator.controller import CurriculumController

__all__ = [
    # State
    "CurationTask",
    "PipelineState",
    "build_curation_tasks",
    # Graph
    "build_curriculum_graph",
    "compile_curriculum_graph",
    "create_initial_state",
    # Controller
    "StateChannel",
    "CurriculumController",
]

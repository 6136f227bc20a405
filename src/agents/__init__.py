"""
SkillScout Agents Package

This package contains the two generation agents:
- Planner: Design the syllabus skeleton
- Curator: Find grounded resources for one topic
"""

from src.agents.planner import PlannerAgent, run_planner
from src.agents.curator import CuratorAgent, run_curator

__all__ = [
    # Planner
    "PlannerAgent",
    "run_planner",
    # Curator
    "CuratorAgent",
    "run_curator",
]

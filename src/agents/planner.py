"""
Planner Agent

The Planner agent turns user preferences into a syllabus skeleton:
1. Builds one instruction embedding goal, skill level and time commitment
2. Requests JSON constrained to a fixed schema (retry-wrapped)
3. Strictly decodes the response (fence-stripped, schema-validated)
4. Assigns stable topic ids and a fresh curriculum id/timestamp

Rules:
- Output topics never carry curated content
- Any failure raises PlannerError; nothing is swallowed
"""

import logging
from typing import Any, Protocol

from src.schemas.curriculum import Curriculum, CurriculumPlan, UserPreferences
from src.utils.errors import PlannerError
from src.utils.gemini_client import GenerationResult, get_gemini_client
from src.utils.retry import retry_with_backoff
from src.utils.settings import PipelineSettings
from src.utils.validation import decode_model_response

logger = logging.getLogger(__name__)


PLANNER_SYSTEM_INSTRUCTION = "You are a precise, structured educational planner."

PLANNER_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "A catchy title for the curriculum"},
        "description": {"type": "STRING", "description": "A brief overview of the learning path"},
        "modules": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING", "description": "Name of the module"},
                    "topics": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "title": {"type": "STRING", "description": "Specific topic name"},
                                "description": {"type": "STRING", "description": "What will be learned"},
                                "actionableStep": {
                                    "type": "STRING",
                                    "description": "A concrete task or project to complete",
                                },
                            },
                            "required": ["title", "description", "actionableStep"],
                        },
                    },
                },
                "required": ["title", "topics"],
            },
        },
    },
    "required": ["title", "description", "modules"],
}


class StructuredGenerator(Protocol):
    async def generate_structured(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        model: str | None = None,
        system_instruction: str | None = None,
    ) -> GenerationResult: ...


class PlannerAgent:
    """
    Planner Agent for syllabus design.

    Makes exactly one schema-constrained generation call per plan.
    """

    def __init__(
        self,
        client: StructuredGenerator | None = None,
        settings: PipelineSettings | None = None,
    ) -> None:
        self._settings = settings or PipelineSettings.from_env()
        self._client = client or get_gemini_client(self._settings)

    def build_prompt(self, preferences: UserPreferences) -> str:
        return (
            "You are an expert Educational Curriculum Planner.\n"
            "Create a detailed, step-by-step learning curriculum for a user "
            "with the following profile:\n"
            f"- Goal: {preferences.goal}\n"
            f"- Current Skill Level: {preferences.skill_level.value}\n"
            f"- Time Commitment: {preferences.time_commitment.value}\n\n"
            "Structure the curriculum into logical sequential Modules.\n"
            "Each Module should have specific Topics.\n"
            "Each Topic MUST have a clear Description and a concrete Actionable "
            'Step (e.g., "Build a Hello World app", "Write a 500-word essay", '
            '"Configure a router").\n\n'
            "Keep the number of modules reasonable (3-5) for a focused start."
        )

    async def plan(self, preferences: UserPreferences) -> Curriculum:
        """
        Produce a curriculum skeleton for ``preferences``.

        Raises:
            PlannerError: On empty/invalid responses, transport or auth
                failures, or rate limits that outlast the retry budget
        """
        prompt = self.build_prompt(preferences)
        logger.info(f"Planning curriculum for goal: {preferences.goal!r}")

        try:
            result = await retry_with_backoff(
                lambda: self._client.generate_structured(
                    prompt=prompt,
                    response_schema=PLANNER_RESPONSE_SCHEMA,
                    model=self._settings.planner_model,
                    system_instruction=PLANNER_SYSTEM_INSTRUCTION,
                ),
                retries=self._settings.retry_attempts,
                delay_ms=self._settings.retry_delay_ms,
            )
            plan = decode_model_response(CurriculumPlan, result.text)
            curriculum = plan.to_curriculum()
        except Exception as e:
            logger.error(f"Planner Agent Error: {e}")
            raise PlannerError(f"Planner failed: {e}", cause=e) from e

        topic_count = sum(len(m.topics) for m in curriculum.modules)
        logger.info(
            f"Planned '{curriculum.title}': "
            f"{len(curriculum.modules)} modules, {topic_count} topics"
        )
        return curriculum


async def run_planner(preferences: UserPreferences) -> Curriculum:
    """Convenience function to run the Planner agent."""
    agent = PlannerAgent(settings=PipelineSettings.from_env())
    return await agent.plan(preferences)

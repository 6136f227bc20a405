"""
Curator Agent

The Curator agent finds learning resources for one topic:
1. One search-grounded generation call (retry-wrapped)
2. Grounding citations become the resource list
3. The model's JSON answer enriches titles/descriptions of matches
4. Search-link fallback when nothing was grounded
5. Bare homepages filtered, list truncated to five

Rules:
- Never raises; every failure resolves to valid CuratedContent
- 1 ≤ resources ≤ 5
"""

import logging
from typing import Protocol

from src.agents.reconciler import (
    build_curated_content,
    failure_content,
    reconcile_resources,
)
from src.schemas.curriculum import CuratedContent
from src.utils.gemini_client import GenerationResult, get_gemini_client
from src.utils.retry import retry_with_backoff
from src.utils.settings import PipelineSettings

logger = logging.getLogger(__name__)


class GroundedGenerator(Protocol):
    async def generate_grounded(
        self,
        prompt: str,
        model: str | None = None,
        json_mode: bool | None = None,
    ) -> GenerationResult: ...


class CuratorAgent:
    """
    Curator Agent for resource discovery.

    Uses Google Search grounding so every returned link was actually
    retrieved by the search tool.
    """

    def __init__(
        self,
        client: GroundedGenerator | None = None,
        settings: PipelineSettings | None = None,
    ) -> None:
        self._settings = settings or PipelineSettings.from_env()
        self._client = client or get_gemini_client(self._settings)

    def build_prompt(self, topic_title: str, context: str) -> str:
        return (
            "You are an expert Educational Research Assistant (Curator Agent).\n"
            "Task: Find 3-5 high-quality, free, and up-to-date learning resources "
            f'for the specific topic: "{topic_title}".\n'
            f"Context: This is part of a curriculum for: {context}.\n\n"
            "Requirements:\n"
            "1. PRIORITIZE Video tutorials (YouTube) and official documentation.\n"
            "2. Ensure resources are relevant to the skill level.\n"
            "3. Return a JSON array of resources.\n\n"
            "For each resource, provide:\n"
            "- title: A clear, descriptive title.\n"
            "- uri: The direct link.\n"
            "- description: A 1-sentence explanation of why this resource is good.\n"
            '- type: "Video" or "Article".'
        )

    async def curate(self, topic_title: str, context: str) -> CuratedContent:
        """
        Curate resources for a topic.

        Args:
            topic_title: Title of the topic to find resources for
            context: Course goal and module title, for relevance

        Returns:
            CuratedContent, degraded to a search link if the call fails
        """
        prompt = self.build_prompt(topic_title, context)

        try:
            result = await retry_with_backoff(
                lambda: self._client.generate_grounded(
                    prompt=prompt,
                    model=self._settings.curator_model,
                    json_mode=self._settings.curator_json_mode,
                ),
                retries=self._settings.retry_attempts,
                delay_ms=self._settings.retry_delay_ms,
            )
            resources = reconcile_resources(
                result.citations,
                result.text,
                topic_title,
                context,
                max_resources=self._settings.max_resources,
            )
            content = build_curated_content(topic_title, resources)
        except Exception as e:
            logger.error(f"Curator Agent Error for '{topic_title}': {e}")
            return failure_content(topic_title)

        logger.info(f"Curated {len(content.resources)} resources for '{topic_title}'")
        return content


async def run_curator(topic_title: str, context: str) -> CuratedContent:
    """Convenience function to run the Curator agent."""
    agent = CuratorAgent(settings=PipelineSettings.from_env())
    return await agent.curate(topic_title, context)

"""
Gemini Client

Thin async wrapper around the google-genai SDK providing the two
generation calls the pipeline needs:
- Schema-constrained JSON generation (planner)
- Search-grounded generation returning web citations (curator)

Retries are NOT done here. Callers wrap each call with
``retry_with_backoff`` so the retry policy lives in one place.

The SDK client is created lazily on the first call, so a missing or
invalid API key surfaces as an authentication failure from that call.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from google import genai
from google.genai import types

from src.utils.settings import PipelineSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroundingCitation:
    """A web citation returned by the search-grounding tool."""
    uri: str | None
    title: str | None


@dataclass
class GenerationResult:
    """Model text plus any out-of-band grounding citations."""
    text: str | None
    citations: list[GroundingCitation] = field(default_factory=list)


class GeminiClient:
    """
    Async Gemini API client.

    Usage:
        client = GeminiClient(settings)
        result = await client.generate_structured(
            prompt="Design a syllabus...",
            response_schema=PLANNER_RESPONSE_SCHEMA,
        )
    """

    def __init__(self, settings: PipelineSettings | None = None) -> None:
        self._settings = settings or PipelineSettings.from_env()
        self._client: genai.Client | None = None
        self._calls: dict[str, int] = {}

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._settings.api_key)
        return self._client

    def _track(self, model: str) -> None:
        self._calls[model] = self._calls.get(model, 0) + 1

    async def generate_structured(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        model: str | None = None,
        system_instruction: str | None = None,
    ) -> GenerationResult:
        """
        Generate JSON output constrained to ``response_schema``.

        Args:
            prompt: The prompt to send
            response_schema: OpenAPI-style schema dict for the response
            model: Model id (defaults to the planner model setting)
            system_instruction: Optional system instruction
        """
        model = model or self._settings.planner_model
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
            system_instruction=system_instruction,
        )
        response = await self._get_client().aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        self._track(model)
        return GenerationResult(text=response.text)

    async def generate_grounded(
        self,
        prompt: str,
        model: str | None = None,
        json_mode: bool | None = None,
    ) -> GenerationResult:
        """
        Generate text with the Google Search grounding tool enabled.

        The returned citations are the tool's actual retrieved pages and
        are the authoritative source of URLs.
        """
        model = model or self._settings.curator_model
        if json_mode is None:
            json_mode = self._settings.curator_json_mode

        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            response_mime_type="application/json" if json_mode else None,
        )
        response = await self._get_client().aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        self._track(model)
        return GenerationResult(
            text=response.text,
            citations=extract_citations(response),
        )

    def get_usage_stats(self) -> dict[str, Any]:
        """Get call counts per model."""
        return {"calls": dict(self._calls), "provider": "gemini"}


def extract_citations(response: Any) -> list[GroundingCitation]:
    """Read web citations from the first candidate's grounding metadata."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    citations: list[GroundingCitation] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if web is None:
            continue
        citations.append(GroundingCitation(uri=web.uri, title=web.title))
    return citations


# =============================================================================
# CLIENT FACTORY
# =============================================================================

_client: GeminiClient | None = None


def get_gemini_client(settings: PipelineSettings | None = None) -> GeminiClient:
    """
    Get or create the shared Gemini client.

    Explicit settings always get their own client so per-run overrides
    (models, JSON mode) are honoured.
    """
    global _client
    if settings is not None:
        return GeminiClient(settings)
    if _client is None:
        logger.info("Using Gemini AI provider")
        _client = GeminiClient()
    return _client

"""
Test doubles for the Gemini client.

Fake clients stand in for the network so agent and controller tests
are deterministic.
"""

from typing import Any

from src.utils.gemini_client import GenerationResult, GroundingCitation


SQL_PLAN: dict[str, Any] = {
    "title": "SQL from Zero",
    "description": "A gentle path into relational databases.",
    "modules": [
        {
            "title": "Relational Basics",
            "topics": [
                {
                    "title": "Tables and Rows",
                    "description": "How relational data is organised.",
                    "actionableStep": "Sketch a table for your book collection",
                },
                {
                    "title": "Primary Keys",
                    "description": "Uniquely identifying rows.",
                    "actionableStep": "Pick a primary key for your table",
                },
            ],
        },
        {
            "title": "Querying",
            "topics": [
                {
                    "title": "SELECT Statements",
                    "description": "Reading data.",
                    "actionableStep": "Write five SELECT queries",
                },
            ],
        },
        {
            "title": "Joining Data",
            "topics": [
                {
                    "title": "INNER JOIN",
                    "description": "Combining tables.",
                    "actionableStep": "Join authors to books",
                },
                {
                    "title": "LEFT JOIN",
                    "description": "Keeping unmatched rows.",
                    "actionableStep": "List authors without books",
                },
            ],
        },
    ],
}


class RateLimitError(Exception):
    """Mimics google-genai's APIError for a 429."""

    def __init__(self, message: str = "429 RESOURCE_EXHAUSTED") -> None:
        super().__init__(message)
        self.code = 429
        self.status = "RESOURCE_EXHAUSTED"


class FakePlannerClient:
    """Returns queued planner responses (or raises queued exceptions)."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def generate_structured(self, prompt, response_schema, model=None, system_instruction=None):
        self.calls.append({
            "prompt": prompt,
            "response_schema": response_schema,
            "model": model,
            "system_instruction": system_instruction,
        })
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return GenerationResult(text=response)


class FakeCuratorClient:
    """
    Returns the same grounded result for every topic unless a per-topic
    result or exception is registered.
    """

    def __init__(
        self,
        citations: list[GroundingCitation] | None = None,
        text: str | None = None,
        per_topic: dict[str, Any] | None = None,
    ) -> None:
        self._default = GenerationResult(text=text, citations=citations or [])
        self._per_topic = per_topic or {}
        self.prompts: list[str] = []

    async def generate_grounded(self, prompt, model=None, json_mode=None):
        self.prompts.append(prompt)
        for topic, result in self._per_topic.items():
            if f'"{topic}"' in prompt:
                if isinstance(result, BaseException):
                    raise result
                return result
        return self._default



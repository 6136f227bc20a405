"""
Unit tests for response validation.

Tests verify:
1. Code fences are stripped before parsing
2. Empty or invalid JSON fails closed with MalformedResponseError
3. Schema mismatches surface as MalformedResponseError
"""

import json

import pytest

from src.schemas.curriculum import CurriculumPlan
from src.utils.errors import MalformedResponseError
from src.utils.validation import (
    decode_json_payload,
    decode_model_response,
    strip_code_fences,
    validate_schema,
)
from tests.fakes import SQL_PLAN


class TestStripCodeFences:
    """Tests for strip_code_fences."""

    @pytest.mark.parametrize("text", [
        '```json\n[1, 2]\n```',
        '```JSON\n[1, 2]\n```',
        '```\n[1, 2]\n```',
        '  [1, 2]  ',
    ])
    def test_fences_removed(self, text: str) -> None:
        assert strip_code_fences(text) == "[1, 2]"


class TestDecodeJsonPayload:
    """Tests for decode_json_payload."""

    def test_fenced_json(self) -> None:
        assert decode_json_payload('```json\n{"a": 1}\n```') == {"a": 1}

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_text(self, text) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_json_payload(text)
        assert exc_info.value.reason == "response contained no text"

    def test_prose_rejected(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_json_payload("Here is your curriculum!")
        assert exc_info.value.payload_excerpt == "Here is your curriculum!"

    def test_payload_excerpt_truncated(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_json_payload("{" + "x" * 500)
        assert len(exc_info.value.payload_excerpt) == 200


class TestValidateSchema:
    """Tests for validate_schema and decode_model_response."""

    def test_valid_plan(self) -> None:
        plan = validate_schema(CurriculumPlan, SQL_PLAN)
        assert plan.title == "SQL from Zero"
        assert len(plan.modules) == 3

    def test_missing_modules(self) -> None:
        with pytest.raises(MalformedResponseError):
            validate_schema(CurriculumPlan, {"title": "x", "description": "y"})

    def test_decode_model_response(self) -> None:
        plan = decode_model_response(CurriculumPlan, "```json\n" + json.dumps(SQL_PLAN) + "\n```")
        assert plan.modules[1].topics[0].title == "SELECT Statements"

    def test_wrong_top_level_type(self) -> None:
        with pytest.raises(MalformedResponseError):
            decode_model_response(CurriculumPlan, "[]")

"""
Response Validation

Strict decode step for model output:
1. Strip markdown code fences the model may add despite JSON mode
2. Parse JSON, failing closed with MalformedResponseError
3. Validate against a Pydantic schema

The model is asked for pure JSON but is not trusted to comply.
"""

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.utils.errors import MalformedResponseError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers anywhere in the text and trim."""
    return _FENCE_RE.sub("", text).strip()


def decode_json_payload(text: str | None) -> Any:
    """
    Decode a model response into a JSON value.

    Raises:
        MalformedResponseError: If the text is empty or not valid JSON
    """
    if not text or not text.strip():
        raise MalformedResponseError("response contained no text")

    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"invalid JSON ({e.msg})", cleaned) from e


def validate_schema(schema_class: type[T], data: Any) -> T:
    """
    Validate decoded data against a Pydantic schema.

    Raises:
        MalformedResponseError: If a required field is missing or mistyped
    """
    try:
        return schema_class.model_validate(data)
    except ValidationError as e:
        logger.error(
            f"Schema validation failed for {schema_class.__name__}: {e.errors()}"
        )
        raise MalformedResponseError(
            f"does not match {schema_class.__name__} ({e.error_count()} errors)"
        ) from e


def decode_model_response(schema_class: type[T], text: str | None) -> T:
    """Fence-strip, parse and validate in one step."""
    return validate_schema(schema_class, decode_json_payload(text))

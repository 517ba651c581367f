"""
response_parser.py - Turn Raw Model Text into Typed Results

The model is asked for raw JSON but sometimes wraps it in a markdown
code fence, with or without a language tag. Parsing steps:
1. Strip the fence wrapper if present
2. json.loads the remainder; it must be an object
3. Validate the object against the target pydantic model

Any failure raises MalformedResponse. A result is never partially typed.
"""

import json
import re
from typing import Any, Dict, Type, TypeVar

from pydantic import ValidationError

from tenant_guardian.exceptions import MalformedResponse
from tenant_guardian.risk_schemas import (
    RiskAssessment, DocumentCheckResult, GeoDetails, _ModelReply
)


ReplyT = TypeVar("ReplyT", bound=_ModelReply)

# ```json\n{...}\n```  or  ```\n{...}\n```
FENCED_BLOCK = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)


# =============================================================================
# TEXT CLEANUP
# =============================================================================

def strip_code_fences(text: str) -> str:
    """
    Remove a markdown code-fence wrapper from model output.

    Text without fences is returned stripped of surrounding whitespace.
    When fences are present, the content of the first fenced block wins,
    so prose around the block is dropped as well.
    """
    if "```" not in text:
        return text.strip()

    match = FENCED_BLOCK.search(text)
    if match:
        return match.group(1).strip()

    # An unterminated fence: drop the marker lines
    return re.sub(r"```[A-Za-z0-9_+-]*", "", text).strip()


def parse_json_payload(text: str) -> Dict[str, Any]:
    """
    Parse model text into a JSON object.

    Raises:
        MalformedResponse: if the text is empty, not JSON, or not an object
    """
    if text is None or not text.strip():
        raise MalformedResponse("Model reply is empty", raw_text=text)

    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"Model reply is not valid JSON: {exc.msg}", raw_text=text) from exc

    if not isinstance(payload, dict):
        raise MalformedResponse(
            f"Expected a JSON object, got {type(payload).__name__}",
            raw_text=text
        )
    return payload


# =============================================================================
# TYPED PARSERS
# =============================================================================

def parse_reply(text: str, model: Type[ReplyT]) -> ReplyT:
    """Parse and validate model text against a reply model."""
    payload = parse_json_payload(text)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise MalformedResponse(
            f"Model reply does not match {model.__name__} (fields: {fields})",
            raw_text=text
        ) from exc


def parse_risk_assessment(text: str) -> RiskAssessment:
    return parse_reply(text, RiskAssessment)


def parse_document_check(text: str) -> DocumentCheckResult:
    return parse_reply(text, DocumentCheckResult)


def parse_geo_details(text: str) -> GeoDetails:
    return parse_reply(text, GeoDetails)

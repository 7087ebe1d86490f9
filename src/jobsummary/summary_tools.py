from __future__ import annotations
import json
import logging
import re
from typing import Any, Dict, List

from jobsummary.errors import ResponseParseError
from jobsummary.models import NO_OVERVIEW, SummaryResult, TechStack

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSE_FENCE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove a leading ``` / ```json fence and a trailing ``` if present."""
    cleaned = (text or "").strip()
    cleaned = _OPEN_FENCE.sub("", cleaned)
    cleaned = _CLOSE_FENCE.sub("", cleaned)
    return cleaned.strip()


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def normalize_summary(data: Dict[str, Any]) -> SummaryResult:
    """Copy recognized fields into a fully populated SummaryResult."""
    overview = data.get("roleOverview")
    if not isinstance(overview, str) or not overview.strip():
        overview = NO_OVERVIEW

    stack = data.get("techStack")
    if not isinstance(stack, dict):
        stack = {}

    return SummaryResult(
        role_overview=overview,
        required_skills=_string_list(data.get("requiredSkills")),
        qualifications=_string_list(data.get("qualifications")),
        nice_to_have=_string_list(data.get("niceToHave")),
        tech_stack=TechStack(
            languages=_string_list(stack.get("languages")),
            frameworks=_string_list(stack.get("frameworks")),
            tools=_string_list(stack.get("tools")),
            cloud=_string_list(stack.get("cloud")),
        ),
    )


def parse_summary_response(text: str) -> SummaryResult:
    """
    Turn the model's reply into a SummaryResult.

    Only an unparseable reply is fatal; missing or wrongly typed fields fall
    back to their defaults.
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Unparseable model reply: %r", text)
        raise ResponseParseError(f"Failed to parse AI response: {exc}", raw_text=text) from exc

    if not isinstance(data, dict):
        logger.error("Model reply is not a JSON object: %r", text)
        raise ResponseParseError(
            f"Failed to parse AI response: expected a JSON object, got {type(data).__name__}",
            raw_text=text,
        )
    return normalize_summary(data)

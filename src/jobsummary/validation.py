"""Request validation for POST /summarize.

Checks run in a fixed order and stop at the first failure, so the caller
always gets a single message naming the offending field.
"""
from typing import Any, Dict, Optional, Sequence

from jobsummary.errors import InvalidSummaryRequest
from jobsummary.models import (
    DEFAULT_FOCUS,
    DEFAULT_FORMAT,
    DEFAULT_LENGTH,
    VALID_FOCUS,
    VALID_FORMATS,
    VALID_LENGTHS,
    SummaryRequest,
)

MIN_JOB_TEXT = 50
MAX_JOB_TEXT = 50_000

_OPTIONS = (
    ("length", VALID_LENGTHS, DEFAULT_LENGTH),
    ("focus", VALID_FOCUS, DEFAULT_FOCUS),
    ("format", VALID_FORMATS, DEFAULT_FORMAT),
)


def _check_option(name: str, value: Any, allowed: Sequence[str], default: str) -> str:
    # absent, null and "" all mean "use the default"
    if value is None or value == "":
        return default
    if value not in allowed:
        raise InvalidSummaryRequest(
            f"Invalid {name}. Must be one of: {', '.join(allowed)}", field=name
        )
    return value


def validate_summary_request(payload: Optional[Dict[str, Any]]) -> SummaryRequest:
    if not isinstance(payload, dict):
        raise InvalidSummaryRequest("Request body must be a JSON object")

    job_text = payload.get("jobText")
    if not job_text or not isinstance(job_text, str):
        raise InvalidSummaryRequest("Missing or invalid jobText field", field="jobText")
    if len(job_text.strip()) < MIN_JOB_TEXT:
        raise InvalidSummaryRequest(
            f"Job text is too short (minimum {MIN_JOB_TEXT} characters)", field="jobText"
        )
    if len(job_text) > MAX_JOB_TEXT:
        raise InvalidSummaryRequest(
            f"Job text is too long (maximum {MAX_JOB_TEXT:,} characters)", field="jobText"
        )

    options = {
        name: _check_option(name, payload.get(name), allowed, default)
        for name, allowed, default in _OPTIONS
    }
    return SummaryRequest(job_text=job_text, **options)

from __future__ import annotations

import pytest

from jobsummary.errors import InvalidSummaryRequest
from jobsummary.validation import validate_summary_request


def test_defaults_applied_when_options_omitted(job_text: str) -> None:
    request = validate_summary_request({"jobText": job_text})
    assert (request.length, request.focus, request.format) == ("medium", "balanced", "bullets")
    assert request.job_text == job_text


def test_null_and_empty_options_mean_default(job_text: str) -> None:
    request = validate_summary_request({"jobText": job_text, "length": None, "format": ""})
    assert request.length == "medium"
    assert request.format == "bullets"


def test_explicit_options_kept(job_text: str) -> None:
    request = validate_summary_request(
        {"jobText": job_text, "length": "short", "focus": "skills", "format": "paragraph"}
    )
    assert request.options.model_dump() == {"length": "short", "focus": "skills", "format": "paragraph"}


@pytest.mark.parametrize("job", [None, 42, "", ["text"]])
def test_missing_or_non_string_job_text(job) -> None:
    with pytest.raises(InvalidSummaryRequest, match="Missing or invalid jobText field"):
        validate_summary_request({"jobText": job})


def test_short_text_measured_after_trim() -> None:
    padded = "   " + "x" * 49 + "   "
    with pytest.raises(InvalidSummaryRequest, match="too short"):
        validate_summary_request({"jobText": padded})
    assert validate_summary_request({"jobText": "x" * 50}).job_text == "x" * 50


def test_long_text_measured_raw() -> None:
    validate_summary_request({"jobText": "x" * 50_000})
    with pytest.raises(InvalidSummaryRequest, match=r"maximum 50,000 characters"):
        validate_summary_request({"jobText": "x" * 50_001})


@pytest.mark.parametrize(
    "field, value, allowed",
    [
        ("length", "huge", "short, medium, detailed"),
        ("focus", "salary", "skills, qualifications, responsibilities, balanced"),
        ("format", "table", "bullets, paragraph"),
    ],
)
def test_invalid_option_names_the_field(job_text: str, field: str, value: str, allowed: str) -> None:
    with pytest.raises(InvalidSummaryRequest) as excinfo:
        validate_summary_request({"jobText": job_text, field: value})
    assert str(excinfo.value) == f"Invalid {field}. Must be one of: {allowed}"
    assert excinfo.value.field == field


def test_body_must_be_an_object() -> None:
    with pytest.raises(InvalidSummaryRequest):
        validate_summary_request(["not", "an", "object"])

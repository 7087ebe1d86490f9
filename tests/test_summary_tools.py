from __future__ import annotations

import json

import pytest

from jobsummary.errors import ResponseParseError
from jobsummary.summary_tools import parse_summary_response, strip_code_fences


def test_well_formed_reply_is_unchanged(model_reply: dict) -> None:
    summary = parse_summary_response(json.dumps(model_reply))
    assert summary.to_wire() == model_reply


def test_missing_fields_default(model_reply: dict) -> None:
    del model_reply["qualifications"]
    del model_reply["roleOverview"]
    del model_reply["techStack"]["cloud"]
    summary = parse_summary_response(json.dumps(model_reply))
    assert summary.qualifications == []
    assert summary.role_overview == "No overview available"
    assert summary.tech_stack.cloud == []
    assert summary.tech_stack.tools == ["Docker"]


def test_wrong_types_are_replaced() -> None:
    reply = {
        "roleOverview": 7,
        "requiredSkills": "Python, SQL",
        "niceToHave": ["Go", 3, None],
        "techStack": ["Python"],
    }
    wire = parse_summary_response(json.dumps(reply)).to_wire()
    assert wire == {
        "roleOverview": "No overview available",
        "requiredSkills": [],
        "qualifications": [],
        "niceToHave": ["Go"],
        "techStack": {"languages": [], "frameworks": [], "tools": [], "cloud": []},
    }


@pytest.mark.parametrize("fence", ["```json\n{}\n```", "```\n{}\n```", "```JSON {} ```", "  {}  "])
def test_fences_are_stripped(fence: str) -> None:
    assert strip_code_fences(fence) == "{}"


def test_fenced_reply_parses_like_plain(model_reply: dict) -> None:
    plain = parse_summary_response(json.dumps(model_reply))
    fenced = parse_summary_response("```json\n" + json.dumps(model_reply, indent=2) + "\n```")
    assert fenced == plain


def test_unparseable_reply_carries_raw_text() -> None:
    with pytest.raises(ResponseParseError, match="Failed to parse AI response") as excinfo:
        parse_summary_response("Sure! Here is the summary: roles...")
    assert excinfo.value.raw_text == "Sure! Here is the summary: roles..."


def test_non_object_json_is_rejected() -> None:
    with pytest.raises(ResponseParseError, match="expected a JSON object"):
        parse_summary_response('["Python"]')

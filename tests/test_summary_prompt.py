from __future__ import annotations

import pytest

from jobsummary.models import SummaryOptions
from jobsummary.summary_prompt import FOCUS_GUIDE, FORMAT_GUIDE, LENGTH_GUIDE, build_summary_prompt


def test_prompt_contains_each_selected_fragment(job_text: str) -> None:
    options = SummaryOptions(length="detailed", focus="skills", format="paragraph")
    prompt = build_summary_prompt(job_text, options)
    assert f"**LENGTH INSTRUCTION:** {LENGTH_GUIDE['detailed']}" in prompt
    assert f"**FOCUS INSTRUCTION:** {FOCUS_GUIDE['skills']}" in prompt
    assert f"**FORMAT INSTRUCTION:** {FORMAT_GUIDE['paragraph']}" in prompt
    assert job_text in prompt
    assert "ONLY valid JSON" in prompt
    for key in ("roleOverview", "requiredSkills", "qualifications", "niceToHave", "techStack", "cloud"):
        assert f'"{key}"' in prompt


def test_prompt_is_deterministic(job_text: str) -> None:
    options = SummaryOptions()
    assert build_summary_prompt(job_text, options) == build_summary_prompt(job_text, options)


@pytest.mark.parametrize("length", ["short", "medium", "detailed"])
def test_only_chosen_length_fragment_used(job_text: str, length: str) -> None:
    prompt = build_summary_prompt(job_text, SummaryOptions(length=length))
    others = [text for name, text in LENGTH_GUIDE.items() if name != length]
    assert LENGTH_GUIDE[length] in prompt
    assert not any(text in prompt for text in others)

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from jobsummary.settings import settings

JOB_TEXT = (
    "Senior Backend Engineer at Acme Corp. You will design and build Python "
    "services on AWS, own our PostgreSQL data layer and mentor two engineers. "
    "Requirements: 5+ years of Python, FastAPI or Django, Docker. "
    "Nice to have: Kubernetes, Terraform."
)

MODEL_REPLY = {
    "roleOverview": "Senior backend role building Python services on AWS.",
    "requiredSkills": ["Python", "FastAPI", "Docker"],
    "qualifications": ["5+ years of Python experience"],
    "niceToHave": ["Kubernetes", "Terraform"],
    "techStack": {
        "languages": ["Python", "SQL"],
        "frameworks": ["FastAPI", "Django"],
        "tools": ["Docker"],
        "cloud": ["AWS"],
    },
}


class FakeChatModel:
    """Stands in for ChatOpenAI: records prompts, returns canned replies."""

    def __init__(self, reply: str | Exception):
        self.reply = reply
        self.prompts: list[str] = []

    async def ainvoke(self, prompt: str):
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return SimpleNamespace(content=self.reply)


@pytest.fixture
def job_text() -> str:
    return JOB_TEXT


@pytest.fixture
def model_reply() -> dict:
    return json.loads(json.dumps(MODEL_REPLY))


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    return "sk-test"

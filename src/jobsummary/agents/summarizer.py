# src/jobsummary/agents/summarizer.py
import logging
from typing import Any

from jobsummary.agents.base import Agent
from jobsummary.errors import ModelInvocationError
from jobsummary.models import SummaryRequest, SummaryResult
from jobsummary.summary_prompt import build_summary_prompt
from jobsummary.summary_tools import parse_summary_response

logger = logging.getLogger(__name__)


class JobSummarizerAgent(Agent):
    name = "job_summarizer"
    description = "Structured summary of a job posting"

    def __init__(self, llm: Any):
        # shared chat model, owned by whoever created it
        self.llm = llm

    async def complete(self, prompt: str) -> str:
        """Send one prompt to the model and return its text reply."""
        try:
            resp = await self.llm.ainvoke(prompt)
        except Exception as exc:
            logger.error("Model call failed: %s", exc)
            raise ModelInvocationError(f"Failed to generate summary: {exc}") from exc
        content = getattr(resp, "content", resp)
        return content if isinstance(content, str) else str(content)

    async def run(self, context: SummaryRequest) -> SummaryResult:
        """Summarize one job posting with the request's options."""
        prompt = build_summary_prompt(context.job_text, context.options)
        text = await self.complete(prompt)
        return parse_summary_response(text)

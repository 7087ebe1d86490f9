from __future__ import annotations
import json
from typing import Dict

from jobsummary.models import SummaryOptions

LENGTH_GUIDE: Dict[str, str] = {
    "short": "Be very concise. Use 2-3 items per category maximum.",
    "medium": "Be moderately detailed. Use 3-5 items per category.",
    "detailed": "Be comprehensive. Include all relevant details, 5-8 items per category.",
}

FOCUS_GUIDE: Dict[str, str] = {
    "skills": "Pay special attention to technical skills, tools, and technologies mentioned. Emphasize the tech stack.",
    "qualifications": "Focus heavily on educational requirements, certifications, years of experience, and qualifications.",
    "responsibilities": "Emphasize what the person will be doing day-to-day, their responsibilities and tasks.",
    "balanced": "Give equal weight to skills, qualifications, and responsibilities.",
}

FORMAT_GUIDE: Dict[str, str] = {
    "bullets": "Return each item as a separate element in arrays. Keep items concise and skimmable.",
    "paragraph": "Combine related items into flowing sentences, but still return arrays with summarized points.",
}

# the shape the model must fill in; also documents the reply schema
SUMMARY_SCHEMA = {
    "roleOverview": "A 1-2 sentence summary of the position",
    "requiredSkills": ["skill1", "skill2", "skill3"],
    "qualifications": ["qualification1", "qualification2"],
    "niceToHave": ["nice-to-have1", "nice-to-have2"],
    "techStack": {
        "languages": ["language1", "language2"],
        "frameworks": ["framework1", "framework2"],
        "tools": ["tool1", "tool2"],
        "cloud": ["cloud-service1", "cloud-service2"],
    },
}


def build_summary_prompt(job_text: str, options: SummaryOptions) -> str:
    """
    Construct a strict, JSON-only summarization prompt.

    Same text and options always produce the same prompt; nothing from earlier
    requests leaks in.
    """
    return (
        "You are an expert job posting analyzer. Your task is to extract and "
        "summarize key information from a job posting.\n\n"
        f"**LENGTH INSTRUCTION:** {LENGTH_GUIDE[options.length]}\n"
        f"**FOCUS INSTRUCTION:** {FOCUS_GUIDE[options.focus]}\n"
        f"**FORMAT INSTRUCTION:** {FORMAT_GUIDE[options.format]}\n\n"
        "**CRITICAL:** You MUST respond with ONLY valid JSON. No markdown, no code "
        "blocks, no explanations. Just raw JSON.\n\n"
        "**Required JSON Structure:**\n"
        f"{json.dumps(SUMMARY_SCHEMA, indent=2)}\n\n"
        "**Important Rules:**\n"
        "1. Return ONLY JSON, nothing else\n"
        "2. Use proper JSON syntax with double quotes\n"
        "3. If a category has no items, use an empty array []\n"
        "4. Extract tech stack from the entire posting\n"
        "5. Keep items clear and professional\n"
        "6. Avoid redundancy between categories\n\n"
        f"**Job Posting Text:**\n{job_text}\n\n"
        "Remember: Respond with ONLY the JSON object, nothing else."
    )

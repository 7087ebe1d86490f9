from typing import List, Tuple

from jinja2 import Environment

from jobsummary.models import DEFAULT_FORMAT, SummaryResult

# Autoescape is on: every value from the page or the model is escaped.
_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

SUMMARY_TEMPLATE = _env.from_string(
    """<div class="summary-content">
{% if overview %}
<div class="summary-section">
<h3>Role Overview</h3>
<p>{{ overview }}</p>
</div>
{% endif %}
{% for heading, items in sections %}
<div class="summary-section">
<h3>{{ heading }}</h3>
{% if format == "bullets" %}
<ul>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ul>
{% else %}
<p>{{ items | join(", ") }}</p>
{% endif %}
</div>
{% endfor %}
{% if tech %}
<div class="summary-section">
<h3>Tech Stack Detected</h3>
<div class="tech-stack-grid">{% for tech_item in tech %}<span class="tech-tag">{{ tech_item }}</span>{% endfor %}</div>
</div>
{% endif %}
</div>
"""
)


def summary_sections(summary: SummaryResult) -> List[Tuple[str, List[str]]]:
    """Titled list sections, skipping the empty ones."""
    sections = [
        ("Required Skills", summary.required_skills),
        ("Qualifications", summary.qualifications),
        ("Nice to Have", summary.nice_to_have),
    ]
    return [(heading, items) for heading, items in sections if items]


def render_summary_html(summary: SummaryResult, format: str = DEFAULT_FORMAT) -> str:
    return SUMMARY_TEMPLATE.render(
        overview=summary.role_overview,
        sections=summary_sections(summary),
        tech=summary.tech_stack.all_items(),
        format=format,
    )

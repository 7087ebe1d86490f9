from __future__ import annotations

from jobsummary.models import SummaryResult, TechStack
from jobsummary.render import render_summary_html


def _summary() -> SummaryResult:
    return SummaryResult(
        role_overview="Build <b>things</b> & ship",
        required_skills=["Python", "<script>alert(1)</script>"],
        qualifications=[],
        nice_to_have=["Go", "Rust"],
        tech_stack=TechStack(languages=["Python"], cloud=["AWS"]),
    )


def test_bullets_render_lists() -> None:
    html = render_summary_html(_summary(), "bullets")
    assert "<h3>Role Overview</h3>" in html
    assert "<ul><li>Go</li><li>Rust</li></ul>" in html
    assert '<span class="tech-tag">Python</span><span class="tech-tag">AWS</span>' in html


def test_paragraph_joins_with_commas() -> None:
    html = render_summary_html(_summary(), "paragraph")
    assert "<p>Go, Rust</p>" in html
    assert "<li>" not in html


def test_empty_sections_are_skipped() -> None:
    html = render_summary_html(SummaryResult(role_overview="Overview"), "bullets")
    assert "Qualifications" not in html
    assert "Tech Stack Detected" not in html
    assert "Overview" in html


def test_text_is_escaped() -> None:
    html = render_summary_html(_summary(), "bullets")
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "Build &lt;b&gt;things&lt;/b&gt; &amp; ship" in html
